import os

os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from docuflow.core.database.engine import build_engine, build_session_factory, init_db
from docuflow.core.rate_limit import limiter
from docuflow.core.state import ConsoleState
from docuflow.core.store import PersistentStore
from docuflow.main import create_app

limiter.enabled = False

ADMIN = ("admin@docuflow.com", "admin12345")
MANAGER = ("manager@docuflow.com", "manager12345")
EDITOR = ("editor@docuflow.com", "editor12345")
VIEWER = ("viewer@docuflow.com", "viewer12345")
SUSPENDED = ("former@docuflow.com", "former12345")


@pytest.fixture
async def store(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    await init_db(engine)
    yield PersistentStore(build_session_factory(engine))
    await engine.dispose()


@pytest.fixture
async def state(store):
    return await ConsoleState.load(store)


@pytest.fixture
def client(tmp_path):
    app = create_app(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")
    with TestClient(app) as test_client:
        yield test_client


def login(client, credentials, remember=False):
    email, password = credentials
    response = client.post("/session/login", json={"email": email, "password": password, "remember": remember})
    assert response.status_code == 200, response.text
    return response.json()

from typing import Optional
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from slowapi.errors import RateLimitExceeded
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from timing_asgi import TimingMiddleware, TimingClient  # type: ignore
from timing_asgi.integrations import StarletteScopeToName  # type: ignore

from docuflow.core import config
from docuflow.core.database.engine import build_engine, build_session_factory, init_db
from docuflow.core.errors import ConsoleError
from docuflow.core.rate_limit import limiter
from docuflow.core.state import ConsoleState
from docuflow.core.store import PersistentStore
from docuflow.features.activity.routes import router as activity_router
from docuflow.features.categories.routes import router as category_router
from docuflow.features.configuration.routes import router as config_router
from docuflow.features.departments.routes import router as department_router
from docuflow.features.documents.routes import router as document_router
from docuflow.features.preferences.routes import router as preferences_router
from docuflow.features.roles.routes import router as role_router
from docuflow.features.session.routes import router as session_router
from docuflow.features.users.routes import profile_router, router as user_router
from docuflow.features.views.routes import router as view_router
from docuflow.utils import get_logger


log = get_logger(__name__)

VERSION = "0.1.0"


class PrintTimings(TimingClient):
    def timing(self, metric_name, timing, tags):
        log.debug(dict(route=metric_name.removeprefix("main.docuflow.features."), timing=timing, tags=tags))


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """
    Build the console API bound to ``database_url`` (defaults to DATABASE_URL).

    The state container is loaded on startup and kept on ``app.state.console``.
    """
    log.info("Initializing server")
    app = FastAPI(
        title="DocuFlow Console",
        description="Document management console with role-based permissions",
        version=VERSION,
        docs_url="/docs" if config.ENABLE_DOCS else None,
        redoc_url="/redoc" if config.ENABLE_DOCS else None,
        openapi_url="/openapi.json" if config.ENABLE_DOCS else None
    )
    db_engine = build_engine(database_url or config.DATABASE_URL)
    store = PersistentStore(build_session_factory(db_engine))
    app.state.limiter = limiter

    app.add_middleware(TimingMiddleware, client=PrintTimings(), metric_namer=StarletteScopeToName("main", app))

    if config.ENABLE_DOCS:
        log.warning("Docs enabled")
    if config.ALLOW_ORIGIN:
        log.warning("Setting allow origin to %s", config.ALLOW_ORIGIN)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[config.ALLOW_ORIGIN],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_request: Request, exc: RequestValidationError):
        errors = dict()
        for error in exc.errors():
            if "loc" not in error or "msg" not in error:
                continue
            key = error["loc"][-1]
            if key == "__root__":
                key = "root"
            errors[key] = error["msg"]
        log.info("Request validation error %s", errors)
        return JSONResponse(status_code=400, content=jsonable_encoder(errors))

    @app.exception_handler(RateLimitExceeded)
    def rate_limit_exceeded_handler(_request: Request, _exc: RateLimitExceeded) -> Response:
        return JSONResponse({"error": "You are going too fast"}, status_code=429)

    @app.exception_handler(ConsoleError)
    async def console_error_handler(_request: Request, exc: ConsoleError):
        return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))

    @app.on_event("startup")
    async def startup():
        """Create the store table and load the console state."""
        log.info("Initializing database...")
        await init_db(db_engine)
        app.state.console = await ConsoleState.load(store)
        log.info("Console state loaded")

    @app.on_event("shutdown")
    async def shutdown():
        await db_engine.dispose()

    @app.get("/")
    async def root():
        """Root endpoint - API health check."""
        return {
            "message": "DocuFlow Console API",
            "version": VERSION,
            "status": "online",
            "docs": "/docs" if config.ENABLE_DOCS else None,
            "company": app.state.console.config.company_name,
            "public_endpoints": [
                "/session/*", "/documents/public", "/documents/{id}", "/categories",
                "/departments", "/views/{view}", "/config", "/config/palette", "/preferences",
            ],
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    app.include_router(session_router, prefix="/session", tags=["session"])
    app.include_router(document_router, prefix="/documents", tags=["documents"])
    app.include_router(category_router, prefix="/categories", tags=["categories"])
    app.include_router(department_router, prefix="/departments", tags=["departments"])
    app.include_router(role_router, prefix="/roles", tags=["roles"])
    app.include_router(user_router, prefix="/users", tags=["users"])
    app.include_router(profile_router, prefix="/profile", tags=["profile"])
    app.include_router(activity_router, prefix="/activity", tags=["activity"])
    app.include_router(view_router, prefix="/views", tags=["views"])
    app.include_router(config_router, prefix="/config", tags=["config"])
    app.include_router(preferences_router, prefix="/preferences", tags=["preferences"])
    return app


app = create_app()

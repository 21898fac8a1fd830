import os
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Key-value store location (async driver)
# SQLite (default): "sqlite+aiosqlite:///./docuflow.db"
DATABASE_URL: str = os.environ.get("DATABASE_URL", "sqlite+aiosqlite:///./docuflow.db")

# Allow requests from this origin
ALLOW_ORIGIN: Optional[str] = os.environ.get("ALLOW_ORIGIN")

# If true, enable docs and openapi.json endpoints
ENABLE_DOCS: bool = os.environ.get("ENABLE_DOCS") == "1"

LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()

# slowapi limit string applied to the login endpoint
LOGIN_RATE_LIMIT: str = os.environ.get("LOGIN_RATE_LIMIT", "10/minute")
RATE_LIMIT_ENABLED: bool = os.environ.get("RATE_LIMIT_ENABLED", "1") == "1"

MIN_PASSWORD_LENGTH = 8

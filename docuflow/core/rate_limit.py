from slowapi import Limiter
from slowapi.util import get_remote_address

from docuflow.core import config


# Shared by main.py (app.state.limiter) and the login route
limiter = Limiter(key_func=get_remote_address, enabled=config.RATE_LIMIT_ENABLED)

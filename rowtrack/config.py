"""
Runtime settings, read from the environment once at import.
"""

import os


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./rowtrack.db")

# JWT session tokens (safe defaults for development, override in prod)
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "600"))
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "rowtrack_session")

# Bootstrap admin, created on startup when the users table has no admin
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin")
ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")
SEED_DEMO_DATA = _as_bool(os.getenv("SEED_DEMO_DATA", "false"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")  # "text" or "json"
SECURITY_LOG_FILE = os.getenv("SECURITY_LOG_FILE")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Number of most recent grades a subject average is computed over
GRADE_AVERAGE_WINDOW = 3

LOGIN_URL = "/"

import uuid
from functools import lru_cache
from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from passlib.context import CryptContext
import logging
from typing import Optional
from .. import config

# ========== CONFIG ==========
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

# ========== LOGGER ==========
security_logger = logging.getLogger("security")
if config.SECURITY_LOG_FILE and not security_logger.handlers:
    handler = logging.FileHandler(config.SECURITY_LOG_FILE)
    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    security_logger.addHandler(handler)
security_logger.setLevel(logging.INFO)


# ========== PASSWORDS ==========
def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    # checked for unknown usernames so both login failures take the same time
    return pwd_context.hash(uuid.uuid4().hex)


# ========== JWT ==========
def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> tuple[str, str]:
    """
    Returns (token, jti).
    """
    to_encode = data.copy()
    jti = str(uuid.uuid4())
    to_encode.update({"jti": jti, "type": "access"})
    if expires_delta is None:
        expires_delta = timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = _now_utc() + expires_delta
    to_encode.update({"exp": expire})
    token = jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)
    return token, jti


def decode_token(token: str) -> Optional[dict]:
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
        return payload
    except JWTError:
        return None


# ========== LOGGING HELPERS ==========
def log_login_attempt(username: str, success: bool):
    if success:
        security_logger.info(f"Successful login for user: {username}")
    else:
        security_logger.warning(f"Failed login attempt for user: {username}")


def log_logout(user_id: Optional[int], jti: Optional[str]):
    security_logger.info(f"Logout user_id={user_id}, jti={jti}")


def log_stale_session(user_id: Optional[str], reason: str):
    security_logger.warning(f"Session rejected for user_id={user_id}: {reason}")

from typing import Optional
import logging
from .models import User, Role
from .repository import Repository
from .schemas import SessionUser, Token
from .exceptions import invalid_credentials
from .utils.security import (
    verify_password,
    dummy_password_hash,
    create_access_token,
    decode_token,
    log_login_attempt,
    log_logout,
    log_stale_session,
)

logger = logging.getLogger(__name__)


def session_for(user: User) -> SessionUser:
    return SessionUser(
        id=user.id,
        username=user.username,
        name=user.name,
        role=user.role,
        groep=user.groep if user.role == Role.student.value else None,
    )


def login(repo: Repository, username: str, password: str) -> Token:
    user = repo.get_user_by_username(username)
    hashed = user.hashed_password if user else dummy_password_hash()
    if not verify_password(password, hashed) or not user:
        log_login_attempt(username, False)
        raise invalid_credentials()

    access_token, _ = create_access_token({
        "sub": str(user.id),
        "username": user.username,
        "role": user.role,
    })
    log_login_attempt(username, True)
    return Token(access_token=access_token, user=session_for(user))


def restore_session(repo: Repository, token: str) -> Optional[SessionUser]:
    """
    Resolve a token back to a live session. Returns None for an invalid,
    expired or revoked token and for a user that was deleted or whose
    username/role changed since the token was issued.
    """
    payload = decode_token(token)
    if payload is None or payload.get("type") != "access":
        return None

    user_id = payload.get("sub")
    if repo.is_token_revoked(payload.get("jti")):
        log_stale_session(user_id, "revoked token")
        return None

    try:
        user = repo.get_user(int(user_id))
    except (TypeError, ValueError):
        log_stale_session(user_id, "malformed subject")
        return None

    if not user:
        log_stale_session(user_id, "user no longer exists")
        return None
    if user.username != payload.get("username") or user.role != payload.get("role"):
        log_stale_session(user_id, "user changed since login")
        return None
    return session_for(user)


def logout(repo: Repository, token: Optional[str]) -> None:
    if not token:
        return
    payload = decode_token(token)
    if payload is None:
        return
    user_id = payload.get("sub")
    repo.revoke_token(payload.get("jti"), int(user_id) if str(user_id).isdigit() else None)
    log_logout(user_id, payload.get("jti"))

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from .config import SESSION_COOKIE_NAME
from .db import get_repository
from .repository import Repository
from .schemas import SessionUser
from .auth import restore_session
from .gating import evaluate_access, GateDecision
from .exceptions import LoginRequired

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def get_token(request: Request, bearer: Optional[str] = Depends(oauth2_scheme)) -> Optional[str]:
    return bearer or request.cookies.get(SESSION_COOKIE_NAME)


def get_current_session(
        token: Optional[str] = Depends(get_token),
        repo: Repository = Depends(get_repository)
) -> Optional[SessionUser]:
    if not token:
        return None
    return restore_session(repo, token)


def require_role(*roles: str):
    """
    Dependency factory gating a view to the given roles.
    Example: require_role("teacher", "admin")
    With no roles any signed-in user passes.
    """

    def role_checker(
            session: Optional[SessionUser] = Depends(get_current_session),
            token: Optional[str] = Depends(get_token)
    ) -> SessionUser:
        if evaluate_access(session, roles) is not GateDecision.ALLOW:
            # a token that no longer resolves is stale and gets cleared
            raise LoginRequired(clear_session=token is not None and session is None)
        return session

    return role_checker

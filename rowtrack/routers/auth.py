from typing import Optional
from fastapi import APIRouter, Depends, Response
from fastapi.security import OAuth2PasswordRequestForm
from ..config import SESSION_COOKIE_NAME, ACCESS_TOKEN_EXPIRE_MINUTES
from ..db import get_repository
from ..repository import Repository
from ..schemas import Token, SessionUser
from ..dependencies import get_token, get_current_session
from .. import auth

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=Token)
def login(
        response: Response,
        form_data: OAuth2PasswordRequestForm = Depends(),
        repo: Repository = Depends(get_repository)
):
    token = auth.login(repo, form_data.username, form_data.password)
    # Browsers restore the session from this cookie on reload
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token.access_token,
        httponly=True,
        samesite="lax",
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return token


# Clients keep gated views pending until this answers
@router.get("/session", response_model=dict)
def current_session(
        response: Response,
        token: Optional[str] = Depends(get_token),
        session: Optional[SessionUser] = Depends(get_current_session)
):
    if session is None:
        if token:
            response.delete_cookie(SESSION_COOKIE_NAME)
        return {"authenticated": False, "user": None}
    return {"authenticated": True, "user": session.model_dump(mode="json")}


@router.post("/logout", response_model=dict)
def logout(
        response: Response,
        token: Optional[str] = Depends(get_token),
        repo: Repository = Depends(get_repository)
):
    auth.logout(repo, token)
    response.delete_cookie(SESSION_COOKIE_NAME)
    return {"message": "Logged out successfully"}

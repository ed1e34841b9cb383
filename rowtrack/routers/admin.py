from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from ..db import get_repository
from ..repository import Repository
from ..models import Role
from ..schemas import SessionUser, UserCreate, UserUpdate, UserRead, SubjectRead, SubjectActiveUpdate
from ..dependencies import require_role
from ..gating import ADMIN_VIEW
from ..crud import users as users_crud
from ..crud import subjects as subjects_crud
from ..crud.views import admin_panel

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/panel", response_model=dict)
def get_panel(
        repo: Repository = Depends(get_repository),
        _: SessionUser = Depends(require_role(*ADMIN_VIEW))
):
    return admin_panel(repo)


# Enable or disable a subject for grading
@router.put("/subjects/{subject_id}/active", response_model=SubjectRead)
def set_subject_active(
        subject_id: int,
        payload: SubjectActiveUpdate,
        repo: Repository = Depends(get_repository),
        _: SessionUser = Depends(require_role(*ADMIN_VIEW))
):
    return subjects_crud.toggle_subject_active(repo, subject_id, payload.active)


@router.get("/users", response_model=List[UserRead])
def list_users(
        role: Optional[Role] = Query(None),
        repo: Repository = Depends(get_repository),
        _: SessionUser = Depends(require_role(*ADMIN_VIEW))
):
    return users_crud.list_users(repo, role=role.value if role else None)


@router.post("/users", response_model=UserRead, status_code=201)
def create_user(
        payload: UserCreate,
        repo: Repository = Depends(get_repository),
        _: SessionUser = Depends(require_role(*ADMIN_VIEW))
):
    return users_crud.create_user(repo, payload)


@router.put("/users/{user_id}", response_model=UserRead)
def update_user(
        user_id: int,
        payload: UserUpdate,
        repo: Repository = Depends(get_repository),
        _: SessionUser = Depends(require_role(*ADMIN_VIEW))
):
    return users_crud.update_user(repo, user_id, payload)


@router.delete("/users/{user_id}", response_model=dict)
def delete_user(
        user_id: int,
        repo: Repository = Depends(get_repository),
        current_user: SessionUser = Depends(require_role(*ADMIN_VIEW))
):
    users_crud.delete_user(repo, user_id, acting_user_id=current_user.id)
    return {"detail": "User deleted"}

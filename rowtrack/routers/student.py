from fastapi import APIRouter, Depends
from ..db import get_repository
from ..repository import Repository
from ..schemas import SessionUser
from ..dependencies import require_role
from ..gating import STUDENT_VIEW
from ..crud.views import student_dashboard

router = APIRouter(prefix="/student", tags=["student"])


@router.get("/dashboard", response_model=dict)
def dashboard(
        repo: Repository = Depends(get_repository),
        current_user: SessionUser = Depends(require_role(*STUDENT_VIEW))
):
    # Students only ever see their own record
    return student_dashboard(repo, current_user.id)

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from ..db import get_repository
from ..repository import Repository
from ..models import Category
from ..schemas import SubjectRead, TestRead
from ..dependencies import require_role
from ..crud import subjects as subjects_crud

router = APIRouter(tags=["catalog"])


@router.get("/subjects", response_model=List[SubjectRead])
def list_subjects(
        category: Optional[Category] = Query(None),
        active_only: bool = Query(False),
        repo: Repository = Depends(get_repository),
        _=Depends(require_role())
):
    if category is not None:
        return subjects_crud.subjects_by_category(repo, category, active_only=active_only)
    return subjects_crud.list_subjects(repo, active_only=active_only)


@router.get("/tests", response_model=List[TestRead])
def list_tests(repo: Repository = Depends(get_repository), _=Depends(require_role())):
    return subjects_crud.list_tests(repo)

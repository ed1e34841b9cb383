from typing import List
from fastapi import APIRouter, Depends
from ..db import get_repository
from ..repository import Repository
from ..schemas import (
    SessionUser, UserRead, GradeCreate, GradeRead, CategoryFeedbackCreate,
    CompletionChange, GradingBatch, BatchResult,
)
from ..dependencies import require_role
from ..gating import TEACHER_VIEW
from ..crud import users as users_crud
from ..crud import grades as grades_crud
from ..crud import feedback as feedback_crud
from ..crud import completions as completions_crud
from ..crud.grading import save_grading
from ..crud.views import grading_view, history_view

router = APIRouter(prefix="/teacher", tags=["teacher"])


# Student picker
@router.get("/students", response_model=List[UserRead])
def list_students(
        repo: Repository = Depends(get_repository),
        _: SessionUser = Depends(require_role(*TEACHER_VIEW))
):
    return users_crud.list_students(repo)


# Grading form for one student
@router.get("/grading/{student_id}", response_model=dict)
def get_grading_form(
        student_id: int,
        repo: Repository = Depends(get_repository),
        _: SessionUser = Depends(require_role(*TEACHER_VIEW))
):
    return grading_view(repo, student_id)


# Save the whole form: grades, category feedback and test counts
@router.post("/grading/{student_id}", response_model=BatchResult)
def save_grading_form(
        student_id: int,
        payload: GradingBatch,
        repo: Repository = Depends(get_repository),
        current_user: SessionUser = Depends(require_role(*TEACHER_VIEW))
):
    return save_grading(repo, current_user.id, student_id, payload)


@router.post("/grades", response_model=GradeRead, status_code=201)
def add_grade(
        payload: GradeCreate,
        repo: Repository = Depends(get_repository),
        current_user: SessionUser = Depends(require_role(*TEACHER_VIEW))
):
    return grades_crud.add_grade(
        repo,
        student_id=payload.student_id,
        subject_id=payload.subject_id,
        value=payload.grade,
        teacher_id=current_user.id,
        feedback=payload.feedback,
    )


@router.post("/feedback", response_model=dict)
def add_feedback(
        payload: CategoryFeedbackCreate,
        repo: Repository = Depends(get_repository),
        current_user: SessionUser = Depends(require_role(*TEACHER_VIEW))
):
    feedback = feedback_crud.add_category_feedback(
        repo, payload.student_id, payload.category, payload.feedback, current_user.id
    )
    return {"success": True, "saved": feedback is not None, "id": feedback.id if feedback else None}


@router.post("/completions", response_model=dict)
def change_completion(
        payload: CompletionChange,
        repo: Repository = Depends(get_repository),
        _: SessionUser = Depends(require_role(*TEACHER_VIEW))
):
    count = completions_crud.record_completion(repo, payload.student_id, payload.test_id, payload.completed)
    return {"student_id": payload.student_id, "test_id": payload.test_id, "count": count}


# Read-only history
@router.get("/history/{student_id}", response_model=dict)
def get_history(
        student_id: int,
        repo: Repository = Depends(get_repository),
        _: SessionUser = Depends(require_role(*TEACHER_VIEW))
):
    return history_view(repo, student_id)

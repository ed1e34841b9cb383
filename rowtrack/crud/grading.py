from fastapi import HTTPException
import logging
from ..repository import Repository
from ..schemas import GradingBatch, BatchResult, BatchFailure
from ..exceptions import StoreError
from .grades import add_grade
from .feedback import add_category_feedback
from .completions import completion_count, set_completion_count
from .users import get_student

logger = logging.getLogger(__name__)


def _message(error: Exception) -> str:
    if isinstance(error, HTTPException) and isinstance(error.detail, dict):
        return error.detail.get("error", {}).get("message", str(error))
    return str(error) or error.__class__.__name__


def save_grading(repo: Repository, teacher_id: int, student_id: int, batch: GradingBatch) -> BatchResult:
    """
    Applies a teacher's "save" as independent writes. A failing item is
    reported in the result; items already written stay written.
    """
    get_student(repo, student_id)
    result = BatchResult()

    def attempt(item: str, write):
        result.attempted += 1
        try:
            write()
            result.succeeded += 1
        except (HTTPException, StoreError) as e:
            result.failures.append(BatchFailure(item=item, message=_message(e)))

    for subject_id, value in batch.grades.items():
        attempt(f"grade:{subject_id}",
                lambda s=subject_id, v=value: add_grade(repo, student_id, s, v, teacher_id, ""))

    for category, text in batch.feedback.items():
        if not text or not text.strip():
            continue
        attempt(f"feedback:{category.value}",
                lambda c=category, t=text: add_category_feedback(repo, student_id, c, t, teacher_id))

    for test_id, target in batch.completions.items():
        try:
            if completion_count(repo, student_id, test_id) == target:
                continue
        except StoreError as e:
            result.attempted += 1
            result.failures.append(BatchFailure(item=f"test:{test_id}", message=_message(e)))
            continue
        attempt(f"test:{test_id}",
                lambda t=test_id, n=target: set_completion_count(repo, student_id, t, n))

    logger.info(
        f"Grading saved for student {student_id} by teacher {teacher_id}: "
        f"{result.succeeded}/{result.attempted} items"
    )
    return result

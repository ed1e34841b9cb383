from typing import Optional, List
import logging
from ..models import CategoryFeedback, Role, utcnow
from ..repository import Repository
from ..exceptions import not_found
from .subjects import category_value

logger = logging.getLogger(__name__)


def add_category_feedback(
        repo: Repository,
        student_id: int,
        category,
        text: str,
        teacher_id: int
) -> Optional[CategoryFeedback]:
    # Blank text is a no-op
    if not text or not text.strip():
        return None

    category = category_value(category)
    student = repo.get_user(student_id)
    if not student or student.role != Role.student.value:
        raise not_found("Student", student_id)

    feedback = repo.add_category_feedback(CategoryFeedback(
        student_id=student_id,
        category=category,
        feedback=text.strip(),
        teacher_id=teacher_id,
        date=utcnow()
    ))
    logger.info(f"Category feedback ({category}) added for student {student_id} by teacher {teacher_id}")
    return feedback


def feedback_history(repo: Repository, student_id: int, category) -> List[CategoryFeedback]:
    return repo.list_category_feedback(student_id, category=category_value(category))


def latest_feedback(repo: Repository, student_id: int, category) -> Optional[CategoryFeedback]:
    rows = repo.list_category_feedback(student_id, category=category_value(category), limit=1)
    return rows[0] if rows else None

from datetime import datetime
from typing import List, Dict, Iterable
import logging
from ..config import GRADE_AVERAGE_WINDOW
from ..models import Grade, GRADE_VALUES, Role, utcnow
from ..repository import Repository
from ..exceptions import validation_error, not_found
from .subjects import get_subject

logger = logging.getLogger(__name__)


def latest_grades(repo: Repository, student_id: int, subject_id: int, limit: int = GRADE_AVERAGE_WINDOW) -> List[Grade]:
    if limit <= 0:
        return []
    return repo.list_grades(student_id, subject_id=subject_id, limit=limit)


def average_grade(repo: Repository, student_id: int, subject_id: int) -> float:
    """
    Mean of the latest GRADE_AVERAGE_WINDOW grades. 0 means "not graded yet",
    never a real average since the scale starts at 1.
    """
    return window_average(latest_grades(repo, student_id, subject_id, GRADE_AVERAGE_WINDOW))


def window_average(grades_newest_first: List[Grade]) -> float:
    window = grades_newest_first[:GRADE_AVERAGE_WINDOW]
    if not window:
        return 0
    return sum(g.grade for g in window) / len(window)


def add_grade(
        repo: Repository,
        student_id: int,
        subject_id: int,
        value: int,
        teacher_id: int,
        feedback: str = "",
        date: datetime = None
) -> Grade:
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or value not in GRADE_VALUES:
        raise validation_error("Grade must be 1, 2 or 3", grade=value)

    student = repo.get_user(student_id)
    if not student or student.role != Role.student.value:
        raise not_found("Student", student_id)

    subject = get_subject(repo, subject_id)
    if not subject.active:
        raise validation_error("Subject is not active for grading", subject_id=subject_id)

    grade = repo.add_grade(Grade(
        student_id=student_id,
        subject_id=subject_id,
        grade=value,
        teacher_id=teacher_id,
        feedback=(feedback or "").strip(),
        date=date or utcnow()
    ))
    logger.info(f"Grade {value} recorded for student {student_id}, subject {subject_id} by teacher {teacher_id}")
    return grade


def grade_distribution(grades: Iterable[Grade]) -> Dict[int, int]:
    counts = {value: 0 for value in GRADE_VALUES}
    for g in grades:
        if g.grade in counts:
            counts[g.grade] += 1
    return counts

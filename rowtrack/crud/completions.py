from typing import Dict
import logging
from ..models import TestCompletion, Role, utcnow
from ..repository import Repository
from ..exceptions import not_found
from .subjects import get_test

logger = logging.getLogger(__name__)


def completion_count(repo: Repository, student_id: int, test_id: int) -> int:
    return repo.count_completions(student_id, test_id)


def completion_counts(repo: Repository, student_id: int) -> Dict[int, int]:
    """Completed count for every test in the catalog, zero included."""
    counts = {t.id: 0 for t in repo.list_tests()}
    for row in repo.list_completions(student_id, completed=True):
        counts[row.test_id] = counts.get(row.test_id, 0) + 1
    return counts


def _check_pair(repo: Repository, student_id: int, test_id: int):
    student = repo.get_user(student_id)
    if not student or student.role != Role.student.value:
        raise not_found("Student", student_id)
    get_test(repo, test_id)


def record_completion(repo: Repository, student_id: int, test_id: int, completed: bool = True) -> int:
    """
    completed=True appends a completion dated now. completed=False removes
    the most recent completion; at zero it does nothing. Returns the new count.
    """
    _check_pair(repo, student_id, test_id)

    if completed:
        repo.add_completion(TestCompletion(
            student_id=student_id,
            test_id=test_id,
            completed=True,
            date=utcnow()
        ))
        logger.info(f"Test {test_id} completion added for student {student_id}")
    else:
        rows = repo.list_completions(student_id, test_id=test_id, completed=True)
        if rows:
            repo.delete_completion(rows[0].id)
            logger.info(f"Test {test_id} completion {rows[0].id} removed for student {student_id}")
    return repo.count_completions(student_id, test_id)


def set_completion_count(repo: Repository, student_id: int, test_id: int, target: int) -> int:
    target = max(0, target)
    current = repo.count_completions(student_id, test_id)
    while current < target:
        current = record_completion(repo, student_id, test_id, True)
    while current > target:
        current = record_completion(repo, student_id, test_id, False)
    return current

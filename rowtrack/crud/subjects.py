from typing import List
import logging
from ..models import Subject, Test, Category
from ..repository import Repository
from ..exceptions import not_found, validation_error

logger = logging.getLogger(__name__)


def category_value(category) -> str:
    try:
        return Category(category).value
    except ValueError:
        raise validation_error("Unknown category", category=str(category))


def subjects_by_category(repo: Repository, category, active_only: bool = False) -> List[Subject]:
    return repo.list_subjects(category=category_value(category), active=True if active_only else None)


def list_subjects(repo: Repository, active_only: bool = False) -> List[Subject]:
    return repo.list_subjects(active=True if active_only else None)


def get_subject(repo: Repository, subject_id: int) -> Subject:
    subject = repo.get_subject(subject_id)
    if not subject:
        raise not_found("Subject", subject_id)
    return subject


def toggle_subject_active(repo: Repository, subject_id: int, active: bool) -> Subject:
    subject = repo.set_subject_active(subject_id, active)
    if not subject:
        raise not_found("Subject", subject_id)
    logger.info(f"Subject {subject_id} ({subject.name}) {'enabled' if active else 'disabled'} for grading")
    return subject


def list_tests(repo: Repository) -> List[Test]:
    return repo.list_tests()


def get_test(repo: Repository, test_id: int) -> Test:
    test = repo.get_test(test_id)
    if not test:
        raise not_found("Test", test_id)
    return test

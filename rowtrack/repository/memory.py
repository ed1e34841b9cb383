from typing import Optional, List, Dict
from datetime import datetime, timezone
from itertools import count
from .base import Repository
from ..models import User, Subject, Test, Grade, TestCompletion, CategoryFeedback


def _newest_first(rows):
    return sorted(rows, key=lambda r: (r.date or datetime.min.replace(tzinfo=timezone.utc), r.id), reverse=True)


class MemoryRepository(Repository):
    """In-process repository, used by the test-suite and for local demos."""

    def __init__(self):
        self.users: Dict[int, User] = {}
        self.subjects: Dict[int, Subject] = {}
        self.tests: Dict[int, Test] = {}
        self.grades: Dict[int, Grade] = {}
        self.completions: Dict[int, TestCompletion] = {}
        self.feedback: Dict[int, CategoryFeedback] = {}
        self.revoked: Dict[str, Optional[int]] = {}
        self._ids = {name: count(1) for name in ("users", "subjects", "tests", "grades", "completions", "feedback")}

    def _insert(self, table: str, row):
        if row.id is None:
            row.id = next(self._ids[table])
        getattr(self, table)[row.id] = row
        return row

    # ---- users ----
    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    def list_users(self, role: Optional[str] = None) -> List[User]:
        users = sorted(self.users.values(), key=lambda u: u.id)
        if role is not None:
            users = [u for u in users if u.role == role]
        return users

    def add_user(self, user: User) -> User:
        return self._insert("users", user)

    def update_user(self, user_id: int, **fields) -> Optional[User]:
        user = self.users.get(user_id)
        if not user:
            return None
        for key, value in fields.items():
            setattr(user, key, value)
        return user

    def delete_user(self, user_id: int) -> bool:
        return self.users.pop(user_id, None) is not None

    # ---- subjects / tests catalog ----
    def list_subjects(self, category: Optional[str] = None, active: Optional[bool] = None) -> List[Subject]:
        subjects = sorted(self.subjects.values(), key=lambda s: s.id)
        if category is not None:
            subjects = [s for s in subjects if s.category == category]
        if active is not None:
            subjects = [s for s in subjects if s.active == active]
        return subjects

    def get_subject(self, subject_id: int) -> Optional[Subject]:
        return self.subjects.get(subject_id)

    def add_subject(self, subject: Subject) -> Subject:
        return self._insert("subjects", subject)

    def set_subject_active(self, subject_id: int, active: bool) -> Optional[Subject]:
        subject = self.subjects.get(subject_id)
        if subject:
            subject.active = active
        return subject

    def list_tests(self) -> List[Test]:
        return sorted(self.tests.values(), key=lambda t: t.id)

    def get_test(self, test_id: int) -> Optional[Test]:
        return self.tests.get(test_id)

    def add_test(self, test: Test) -> Test:
        return self._insert("tests", test)

    # ---- grades ----
    def list_grades(self, student_id: int, subject_id: Optional[int] = None,
                    limit: Optional[int] = None) -> List[Grade]:
        rows = [g for g in self.grades.values() if g.student_id == student_id]
        if subject_id is not None:
            rows = [g for g in rows if g.subject_id == subject_id]
        rows = _newest_first(rows)
        return rows[:limit] if limit is not None else rows

    def add_grade(self, grade: Grade) -> Grade:
        return self._insert("grades", grade)

    # ---- test completions ----
    def list_completions(self, student_id: int, test_id: Optional[int] = None,
                         completed: Optional[bool] = None) -> List[TestCompletion]:
        rows = [c for c in self.completions.values() if c.student_id == student_id]
        if test_id is not None:
            rows = [c for c in rows if c.test_id == test_id]
        if completed is not None:
            rows = [c for c in rows if c.completed == completed]
        return _newest_first(rows)

    def count_completions(self, student_id: int, test_id: int) -> int:
        return len(self.list_completions(student_id, test_id=test_id, completed=True))

    def add_completion(self, completion: TestCompletion) -> TestCompletion:
        return self._insert("completions", completion)

    def delete_completion(self, completion_id: int) -> bool:
        return self.completions.pop(completion_id, None) is not None

    # ---- category feedback ----
    def list_category_feedback(self, student_id: int, category: Optional[str] = None,
                               limit: Optional[int] = None) -> List[CategoryFeedback]:
        rows = [f for f in self.feedback.values() if f.student_id == student_id]
        if category is not None:
            rows = [f for f in rows if f.category == category]
        rows = _newest_first(rows)
        return rows[:limit] if limit is not None else rows

    def add_category_feedback(self, feedback: CategoryFeedback) -> CategoryFeedback:
        return self._insert("feedback", feedback)

    # ---- session revocation ----
    def revoke_token(self, jti: str, user_id: Optional[int] = None) -> None:
        if jti:
            self.revoked.setdefault(jti, user_id)

    def is_token_revoked(self, jti: str) -> bool:
        return jti in self.revoked

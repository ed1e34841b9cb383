from abc import ABC, abstractmethod
from typing import Optional, List
from ..models import User, Subject, Test, Grade, TestCompletion, CategoryFeedback


class Repository(ABC):
    """
    Persistence boundary over the grading tables.

    Every call is an independent round trip: implementations commit each
    write on its own and never group calls into a transaction. Listing
    calls return history rows newest first (date, then id).
    """

    # ---- users ----
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def list_users(self, role: Optional[str] = None) -> List[User]: ...

    @abstractmethod
    def add_user(self, user: User) -> User: ...

    @abstractmethod
    def update_user(self, user_id: int, **fields) -> Optional[User]: ...

    @abstractmethod
    def delete_user(self, user_id: int) -> bool: ...

    # ---- subjects / tests catalog ----
    @abstractmethod
    def list_subjects(self, category: Optional[str] = None, active: Optional[bool] = None) -> List[Subject]: ...

    @abstractmethod
    def get_subject(self, subject_id: int) -> Optional[Subject]: ...

    @abstractmethod
    def add_subject(self, subject: Subject) -> Subject: ...

    @abstractmethod
    def set_subject_active(self, subject_id: int, active: bool) -> Optional[Subject]: ...

    @abstractmethod
    def list_tests(self) -> List[Test]: ...

    @abstractmethod
    def get_test(self, test_id: int) -> Optional[Test]: ...

    @abstractmethod
    def add_test(self, test: Test) -> Test: ...

    # ---- grades ----
    @abstractmethod
    def list_grades(self, student_id: int, subject_id: Optional[int] = None,
                    limit: Optional[int] = None) -> List[Grade]: ...

    @abstractmethod
    def add_grade(self, grade: Grade) -> Grade: ...

    # ---- test completions ----
    @abstractmethod
    def list_completions(self, student_id: int, test_id: Optional[int] = None,
                         completed: Optional[bool] = None) -> List[TestCompletion]: ...

    @abstractmethod
    def count_completions(self, student_id: int, test_id: int) -> int: ...

    @abstractmethod
    def add_completion(self, completion: TestCompletion) -> TestCompletion: ...

    @abstractmethod
    def delete_completion(self, completion_id: int) -> bool: ...

    # ---- category feedback ----
    @abstractmethod
    def list_category_feedback(self, student_id: int, category: Optional[str] = None,
                               limit: Optional[int] = None) -> List[CategoryFeedback]: ...

    @abstractmethod
    def add_category_feedback(self, feedback: CategoryFeedback) -> CategoryFeedback: ...

    # ---- session revocation ----
    @abstractmethod
    def revoke_token(self, jti: str, user_id: Optional[int] = None) -> None: ...

    @abstractmethod
    def is_token_revoked(self, jti: str) -> bool: ...

from contextlib import contextmanager
from typing import Optional, List
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select, func

from .base import Repository
from ..exceptions import StoreError
from ..models import User, Subject, Test, Grade, TestCompletion, CategoryFeedback, RevokedToken

logger = logging.getLogger(__name__)


class SqlRepository(Repository):
    """Repository over a SQLModel engine. One session and one commit per call."""

    def __init__(self, engine):
        self.engine = engine

    @contextmanager
    def _session(self):
        with Session(self.engine) as session:
            try:
                yield session
            except SQLAlchemyError as e:
                session.rollback()
                logger.exception("Store call failed")
                raise StoreError(str(e)) from e

    def _save(self, row):
        with self._session() as session:
            session.add(row)
            session.commit()
            session.refresh(row)
            return row

    def _get(self, model, row_id):
        with self._session() as session:
            return session.get(model, row_id)

    def _all(self, stmt):
        with self._session() as session:
            return list(session.exec(stmt).all())

    # ---- users ----
    def get_user(self, user_id: int) -> Optional[User]:
        return self._get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._session() as session:
            return session.exec(select(User).where(User.username == username)).first()

    def list_users(self, role: Optional[str] = None) -> List[User]:
        stmt = select(User)
        if role is not None:
            stmt = stmt.where(User.role == role)
        return self._all(stmt.order_by(User.id))

    def add_user(self, user: User) -> User:
        return self._save(user)

    def update_user(self, user_id: int, **fields) -> Optional[User]:
        with self._session() as session:
            user = session.get(User, user_id)
            if not user:
                return None
            for key, value in fields.items():
                setattr(user, key, value)
            session.add(user)
            session.commit()
            session.refresh(user)
            return user

    def delete_user(self, user_id: int) -> bool:
        with self._session() as session:
            user = session.get(User, user_id)
            if not user:
                return False
            session.delete(user)
            session.commit()
            return True

    # ---- subjects / tests catalog ----
    def list_subjects(self, category: Optional[str] = None, active: Optional[bool] = None) -> List[Subject]:
        stmt = select(Subject)
        if category is not None:
            stmt = stmt.where(Subject.category == category)
        if active is not None:
            stmt = stmt.where(Subject.active == active)
        return self._all(stmt.order_by(Subject.id))

    def get_subject(self, subject_id: int) -> Optional[Subject]:
        return self._get(Subject, subject_id)

    def add_subject(self, subject: Subject) -> Subject:
        return self._save(subject)

    def set_subject_active(self, subject_id: int, active: bool) -> Optional[Subject]:
        with self._session() as session:
            subject = session.get(Subject, subject_id)
            if not subject:
                return None
            subject.active = active
            session.add(subject)
            session.commit()
            session.refresh(subject)
            return subject

    def list_tests(self) -> List[Test]:
        return self._all(select(Test).order_by(Test.id))

    def get_test(self, test_id: int) -> Optional[Test]:
        return self._get(Test, test_id)

    def add_test(self, test: Test) -> Test:
        return self._save(test)

    # ---- grades ----
    def list_grades(self, student_id: int, subject_id: Optional[int] = None,
                    limit: Optional[int] = None) -> List[Grade]:
        stmt = select(Grade).where(Grade.student_id == student_id)
        if subject_id is not None:
            stmt = stmt.where(Grade.subject_id == subject_id)
        stmt = stmt.order_by(Grade.date.desc(), Grade.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return self._all(stmt)

    def add_grade(self, grade: Grade) -> Grade:
        return self._save(grade)

    # ---- test completions ----
    def list_completions(self, student_id: int, test_id: Optional[int] = None,
                         completed: Optional[bool] = None) -> List[TestCompletion]:
        stmt = select(TestCompletion).where(TestCompletion.student_id == student_id)
        if test_id is not None:
            stmt = stmt.where(TestCompletion.test_id == test_id)
        if completed is not None:
            stmt = stmt.where(TestCompletion.completed == completed)
        stmt = stmt.order_by(TestCompletion.date.desc().nulls_last(), TestCompletion.id.desc())
        return self._all(stmt)

    def count_completions(self, student_id: int, test_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(TestCompletion)
            .where(TestCompletion.student_id == student_id)
            .where(TestCompletion.test_id == test_id)
            .where(TestCompletion.completed == True)  # noqa: E712
        )
        with self._session() as session:
            return session.exec(stmt).one()

    def add_completion(self, completion: TestCompletion) -> TestCompletion:
        return self._save(completion)

    def delete_completion(self, completion_id: int) -> bool:
        with self._session() as session:
            row = session.get(TestCompletion, completion_id)
            if not row:
                return False
            session.delete(row)
            session.commit()
            return True

    # ---- category feedback ----
    def list_category_feedback(self, student_id: int, category: Optional[str] = None,
                               limit: Optional[int] = None) -> List[CategoryFeedback]:
        stmt = select(CategoryFeedback).where(CategoryFeedback.student_id == student_id)
        if category is not None:
            stmt = stmt.where(CategoryFeedback.category == category)
        stmt = stmt.order_by(CategoryFeedback.date.desc(), CategoryFeedback.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return self._all(stmt)

    def add_category_feedback(self, feedback: CategoryFeedback) -> CategoryFeedback:
        return self._save(feedback)

    # ---- session revocation ----
    def revoke_token(self, jti: str, user_id: Optional[int] = None) -> None:
        if not jti:
            return
        with self._session() as session:
            exists = session.exec(select(RevokedToken).where(RevokedToken.jti == jti)).first()
            if exists:
                return
            session.add(RevokedToken(jti=jti, user_id=user_id))
            session.commit()

    def is_token_revoked(self, jti: str) -> bool:
        with self._session() as session:
            return session.exec(select(RevokedToken).where(RevokedToken.jti == jti)).first() is not None

from typing import Optional
from enum import Enum
from datetime import datetime, timezone
from sqlalchemy import CheckConstraint, DateTime
from sqlalchemy.types import TypeDecorator
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware timestamp stored as UTC. SQLite drops the offset, so it is put back on load."""
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Role(str, Enum):
    student = "student"
    teacher = "teacher"
    admin = "admin"


class Category(str, Enum):
    verrichtingen = "verrichtingen"
    roeitechniek = "roeitechniek"
    stuurkunst = "stuurkunst"


class Group(str, Enum):
    diza = "diza"
    dozo = "dozo"
    none = "none"


GRADE_VALUES = (1, 2, 3)


class User(SQLModel, table=True):
    __tablename__ = "users"
    # never reuse the id of a deleted user
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True, nullable=False, unique=True)
    hashed_password: str
    name: str = Field(nullable=False)
    role: str = Field(default=Role.student.value)  # 'student', 'teacher' or 'admin'
    groep: Optional[str] = Field(default=None, nullable=True)  # students only
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)


class Subject(SQLModel, table=True):
    __tablename__ = "subjects"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    category: str = Field(index=True)
    active: bool = Field(default=True)


class Test(SQLModel, table=True):
    __tablename__ = "tests"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    description: Optional[str] = None


class Grade(SQLModel, table=True):
    __tablename__ = "grades"
    __table_args__ = (CheckConstraint("grade >= 1 AND grade <= 3", name="check_grade_value"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    student_id: int = Field(index=True)
    subject_id: int = Field(index=True)
    grade: int
    teacher_id: Optional[int] = None
    feedback: str = ""
    date: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)


class TestCompletion(SQLModel, table=True):
    __tablename__ = "test_completions"

    id: Optional[int] = Field(default=None, primary_key=True)
    student_id: int = Field(index=True)
    test_id: int = Field(index=True)
    completed: bool = Field(default=True)
    date: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)


class CategoryFeedback(SQLModel, table=True):
    __tablename__ = "category_feedback"

    id: Optional[int] = Field(default=None, primary_key=True)
    student_id: int = Field(index=True)
    category: str
    feedback: str
    teacher_id: Optional[int] = None
    date: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)


class RevokedToken(SQLModel, table=True):
    __tablename__ = "revoked_tokens"

    id: Optional[int] = Field(default=None, primary_key=True)
    jti: str = Field(index=True, unique=True)
    user_id: Optional[int] = Field(index=True, default=None, nullable=True)
    revoked_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)

from pydantic import BaseModel, Field, StringConstraints, field_validator
from typing import Optional, List, Dict, Literal, Union, Annotated
from datetime import datetime
from .models import Role, Category, Group

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


# ---------- accounts ----------
# A user's role decides which fields exist: only students carry a group.

class NewAccount(BaseModel):
    username: NonEmptyStr
    name: NonEmptyStr
    password: str

    # a blank password on update means "keep the current one", so it can never be set
    @field_validator("password")
    @classmethod
    def password_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Password must not be blank")
        return value


class StudentCreate(NewAccount):
    role: Literal["student"]
    groep: Group


class TeacherCreate(NewAccount):
    role: Literal["teacher"]
    groep: None = None


class AdminCreate(NewAccount):
    role: Literal["admin"]
    groep: None = None


UserCreate = Annotated[Union[StudentCreate, TeacherCreate, AdminCreate], Field(discriminator="role")]


class AccountUpdate(BaseModel):
    username: NonEmptyStr
    name: NonEmptyStr
    password: Optional[str] = None  # omitted or blank keeps the current password


class StudentUpdate(AccountUpdate):
    role: Literal["student"]
    groep: Group


class TeacherUpdate(AccountUpdate):
    role: Literal["teacher"]
    groep: None = None


class AdminUpdate(AccountUpdate):
    role: Literal["admin"]
    groep: None = None


UserUpdate = Annotated[Union[StudentUpdate, TeacherUpdate, AdminUpdate], Field(discriminator="role")]


class UserRead(BaseModel):
    id: int
    username: str
    name: str
    role: Role
    groep: Optional[Group] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ---------- sessions ----------

class SessionUser(BaseModel):
    id: int
    username: str
    name: str
    role: Role
    groep: Optional[Group] = None


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: SessionUser


# ---------- catalog ----------

class SubjectRead(BaseModel):
    id: int
    name: str
    category: Category
    active: bool

    class Config:
        from_attributes = True


class SubjectActiveUpdate(BaseModel):
    active: bool


class TestRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True


# ---------- grading ----------

class GradeCreate(BaseModel):
    student_id: int
    subject_id: int
    grade: int  # range is checked by the grading rules, not here
    feedback: str = ""


class GradeRead(BaseModel):
    id: int
    student_id: int
    subject_id: int
    grade: int
    teacher_id: Optional[int] = None
    feedback: str = ""
    date: datetime

    class Config:
        from_attributes = True


class CategoryFeedbackCreate(BaseModel):
    student_id: int
    category: Category
    feedback: str


class CompletionChange(BaseModel):
    student_id: int
    test_id: int
    completed: bool = True  # False removes the latest completion


class GradingBatch(BaseModel):
    """One teacher "save": grades per subject id, feedback per category, target counts per test id."""
    grades: Dict[int, int] = Field(default_factory=dict)
    feedback: Dict[Category, str] = Field(default_factory=dict)
    completions: Dict[int, Annotated[int, Field(ge=0)]] = Field(default_factory=dict)


class BatchFailure(BaseModel):
    item: str
    message: str


class BatchResult(BaseModel):
    attempted: int = 0
    succeeded: int = 0
    failures: List[BatchFailure] = Field(default_factory=list)

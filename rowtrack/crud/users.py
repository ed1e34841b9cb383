from typing import Optional, List
import logging
from ..models import User, Role
from ..repository import Repository
from ..schemas import UserCreate, UserUpdate
from ..exceptions import not_found, already_exists, validation_error
from ..utils.security import hash_password

logger = logging.getLogger(__name__)


def _groep_for(account) -> Optional[str]:
    return account.groep.value if account.role == Role.student.value else None


def get_user(repo: Repository, user_id: int) -> User:
    user = repo.get_user(user_id)
    if not user:
        raise not_found("User", user_id)
    return user


def get_student(repo: Repository, student_id: int) -> User:
    user = repo.get_user(student_id)
    if not user or user.role != Role.student.value:
        raise not_found("Student", student_id)
    return user


def list_users(repo: Repository, role: Optional[str] = None) -> List[User]:
    return repo.list_users(role=role)


def list_students(repo: Repository) -> List[User]:
    return repo.list_users(role=Role.student.value)


def create_user(repo: Repository, account: UserCreate) -> User:
    if repo.get_user_by_username(account.username):
        raise already_exists("A user with this username already exists", username=account.username)

    user = repo.add_user(User(
        username=account.username,
        hashed_password=hash_password(account.password),
        name=account.name,
        role=account.role,
        groep=_groep_for(account)
    ))
    logger.info(f"User created id={user.id} username={user.username} role={user.role}")
    return user


def update_user(repo: Repository, user_id: int, account: UserUpdate) -> User:
    get_user(repo, user_id)

    existing = repo.get_user_by_username(account.username)
    if existing and existing.id != user_id:
        raise already_exists("A user with this username already exists", username=account.username)

    fields = {
        "username": account.username,
        "name": account.name,
        "role": account.role,
        "groep": _groep_for(account),
    }
    if account.password and account.password.strip():
        fields["hashed_password"] = hash_password(account.password)

    user = repo.update_user(user_id, **fields)
    if not user:
        raise not_found("User", user_id)
    logger.info(f"User updated id={user_id} password_changed={'hashed_password' in fields}")
    return user


def delete_user(repo: Repository, user_id: int, acting_user_id: Optional[int] = None) -> None:
    if acting_user_id is not None and user_id == acting_user_id:
        raise validation_error("You cannot delete your own account")
    if not repo.delete_user(user_id):
        raise not_found("User", user_id)
    logger.info(f"User deleted id={user_id}")


def display_names(repo: Repository) -> dict:
    return {u.id: u.name for u in repo.list_users()}

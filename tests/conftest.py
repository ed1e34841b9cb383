"""
Test fixtures for rowtrack.

Every repository-backed fixture runs twice: once against the in-memory
repository and once against SqlRepository on in-memory SQLite, so both
implementations of the persistence interface see the same tests.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from rowtrack.db import get_repository
from rowtrack.main import app
from rowtrack.models import User, Role, Group
from rowtrack.repository import MemoryRepository, SqlRepository
from rowtrack.seed import seed_catalog
from rowtrack.utils.security import hash_password

PASSWORDS = {
    "admin1": "adminpass",
    "teacher1": "teachpass",
    "student1": "studpass1",
    "student2": "studpass2",
}


@pytest.fixture(scope="session")
def password_hashes():
    """Hash each password once; argon2 is slow on purpose."""
    return {username: hash_password(pw) for username, pw in PASSWORDS.items()}


@pytest.fixture(params=["memory", "sql"])
def repo(request):
    if request.param == "memory":
        yield MemoryRepository()
        return
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield SqlRepository(engine)
    engine.dispose()


@pytest.fixture
def people(repo, password_hashes):
    """Seeds the catalog and one user per role; returns their ids."""
    seed_catalog(repo)
    rows = [
        ("admin1", "Directeur Smit", Role.admin, None),
        ("teacher1", "Prof. Bakker", Role.teacher, None),
        ("student1", "Jan", Role.student, Group.diza),
        ("student2", "Emma de Vries", Role.student, Group.none),
    ]
    ids = {}
    for username, name, role, groep in rows:
        user = repo.add_user(User(
            username=username,
            hashed_password=password_hashes[username],
            name=name,
            role=role.value,
            groep=groep.value if groep else None,
        ))
        ids[username] = user.id
    return {
        "admin": ids["admin1"],
        "teacher": ids["teacher1"],
        "jan": ids["student1"],
        "emma": ids["student2"],
    }


@pytest.fixture
def subject_ids(repo, people):
    return {s.name: s.id for s in repo.list_subjects()}


@pytest.fixture
def catalog_tests(repo, people):
    return [t.id for t in repo.list_tests()]


@pytest.fixture
def client(repo, people):
    """Unauthenticated client over the seeded repository."""
    app.dependency_overrides[get_repository] = lambda: repo
    yield TestClient(app, follow_redirects=False)
    app.dependency_overrides.clear()


def login(client, username, password=None):
    resp = client.post("/auth/login", data={
        "username": username,
        "password": password if password is not None else PASSWORDS[username],
    })
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def _client_for(username):
    c = TestClient(app, follow_redirects=False)
    token = login(c, username)
    c.headers["Authorization"] = f"Bearer {token}"
    return c


@pytest.fixture
def admin_client(client):
    return _client_for("admin1")


@pytest.fixture
def teacher_client(client):
    return _client_for("teacher1")


@pytest.fixture
def student_client(client):
    return _client_for("student1")

import pytest

from rowtrack.gating import evaluate_access, GateDecision, STUDENT_VIEW, TEACHER_VIEW, ADMIN_VIEW
from rowtrack.models import Role
from rowtrack.schemas import SessionUser


def session(role):
    return SessionUser(id=1, username=f"{role}1", name="X", role=role)


@pytest.mark.parametrize("role, view, expected", [
    ("student", STUDENT_VIEW, GateDecision.ALLOW),
    ("student", TEACHER_VIEW, GateDecision.REDIRECT),
    ("student", ADMIN_VIEW, GateDecision.REDIRECT),
    ("teacher", STUDENT_VIEW, GateDecision.REDIRECT),
    ("teacher", TEACHER_VIEW, GateDecision.ALLOW),
    ("teacher", ADMIN_VIEW, GateDecision.REDIRECT),
    ("admin", STUDENT_VIEW, GateDecision.REDIRECT),
    ("admin", TEACHER_VIEW, GateDecision.ALLOW),
    ("admin", ADMIN_VIEW, GateDecision.ALLOW),
])
def test_role_matrix(role, view, expected):
    assert evaluate_access(session(role), view) is expected


def test_no_session_redirects():
    assert evaluate_access(None, TEACHER_VIEW) is GateDecision.REDIRECT
    assert evaluate_access(None) is GateDecision.REDIRECT


def test_no_roles_admits_any_session():
    for role in Role:
        assert evaluate_access(session(role.value)) is GateDecision.ALLOW


def test_loading_is_pending():
    assert evaluate_access(None, ADMIN_VIEW, loading=True) is GateDecision.PENDING
    assert evaluate_access(session("admin"), ADMIN_VIEW, loading=True) is GateDecision.PENDING


def test_enum_roles_accepted():
    assert evaluate_access(session("admin"), (Role.admin,)) is GateDecision.ALLOW

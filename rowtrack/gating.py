from enum import Enum
from typing import Iterable, Optional
from .schemas import SessionUser


class GateDecision(str, Enum):
    PENDING = "pending"  # session restore still running, decide later
    ALLOW = "allow"
    REDIRECT = "redirect"


# Roles admitted to each screen
STUDENT_VIEW = ("student",)
TEACHER_VIEW = ("teacher", "admin")
ADMIN_VIEW = ("admin",)


def evaluate_access(session: Optional[SessionUser], allowed_roles: Iterable[str] = (), loading: bool = False) -> GateDecision:
    """
    Decide whether a session may open a view. An empty allowed_roles admits
    any signed-in user. Nothing is decided while the session is loading, so
    a valid stored session never flashes a redirect.

    Server-side gating always runs after the token is resolved. A client
    passes loading=True until its GET /auth/session call has answered.
    """
    if loading:
        return GateDecision.PENDING
    if session is None:
        return GateDecision.REDIRECT
    allowed = {getattr(r, "value", r) for r in allowed_roles}
    if allowed and session.role.value not in allowed:
        return GateDecision.REDIRECT
    return GateDecision.ALLOW

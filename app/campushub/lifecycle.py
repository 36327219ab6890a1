"""
Status lifecycles for moderated resources.

Transitions are deliberately permissive: no target state is refused because of
the prior state, and repeating a transition is a no-op that still succeeds.
Only the caller's role/ownership gates a transition.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.campushub.constants import ROLE_ADMIN
from app.campushub.errors import Forbidden
from app.campushub.models import User
from app.campushub.rbac import require_owner_or_admin

PENDING = "pending"
APPROVED = "approved"
REJECTED = "rejected"
CLAIMED = "claimed"
RESOLVED = "resolved"

LOST_FOUND_STATUSES = (PENDING, APPROVED, REJECTED, CLAIMED)


@dataclass(frozen=True)
class Transition:
    target: str
    admin_only: bool
    denied_message: str


LOST_FOUND_TRANSITIONS = {
    "approve": Transition(APPROVED, admin_only=True, denied_message="Only admins can approve posts"),
    "reject": Transition(REJECTED, admin_only=True, denied_message="Only admins can reject posts"),
    "claim": Transition(CLAIMED, admin_only=False, denied_message="Not authorized to mark this post as claimed"),
}

FEEDBACK_TRANSITIONS = {
    "resolve": Transition(RESOLVED, admin_only=True, denied_message="Only admins can resolve feedback"),
}


def apply_transition(
    resource: Any,
    transitions: dict[str, Transition],
    action: str,
    user: User,
    *,
    owner_attr: str = "posted_by_user_id",
) -> tuple[str, str]:
    """
    Move `resource.status` to the action's target state.

    Returns (old_status, new_status). Raises Forbidden when the user may not
    perform the action; KeyError for an unknown action.
    """
    t = transitions[action]
    if t.admin_only:
        if user.role != ROLE_ADMIN:
            raise Forbidden(t.denied_message)
    else:
        require_owner_or_admin(user, resource, owner_attr=owner_attr, message=t.denied_message)
    old = resource.status
    resource.status = t.target
    return old, t.target


def status_after_edit(user: User, current: str, requested: str | None) -> str:
    """
    Status a lost-and-found post takes after an edit.

    Non-admin edits always send the post back to moderation. Admins keep the
    current status unless they submit a valid one explicitly.
    """
    if user.role != ROLE_ADMIN:
        return PENDING
    if requested and requested in LOST_FOUND_STATUSES:
        return requested
    return current

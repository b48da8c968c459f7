from enum import Enum
from typing import List

from .errors import Forbidden
from .models.admin_model import AdminSession, PrivilegeLevel


class Action(str, Enum):
    VIEW_RESULTS = "view_results"
    MODIFY_ELECTION = "modify_election"
    MODIFY_CANDIDATES = "modify_candidates"
    RESET_BALLOTS = "reset_ballots"
    RESET_ATTENDANCE = "reset_attendance"
    GLOBAL_LOGOUT = "global_logout"


_MODIFY_ACTIONS = frozenset({
    Action.VIEW_RESULTS,
    Action.MODIFY_ELECTION,
    Action.MODIFY_CANDIDATES,
    Action.RESET_BALLOTS,
    Action.RESET_ATTENDANCE,
})

PRIVILEGE_MATRIX = {
    PrivilegeLevel.SUPERADMIN: frozenset(Action),
    PrivilegeLevel.MODIFY: _MODIFY_ACTIONS,
    PrivilegeLevel.RESULTS_ONLY: frozenset({Action.VIEW_RESULTS}),
    PrivilegeLevel.NONE: frozenset(),
}


def is_allowed(level: PrivilegeLevel, action: Action) -> bool:
    return action in PRIVILEGE_MATRIX.get(level, frozenset())


def allowed_actions(level: PrivilegeLevel) -> List[Action]:
    return [action for action in Action if is_allowed(level, action)]


def authorize(session: AdminSession, action: Action) -> None:
    """Raise Forbidden unless the session's privilege level permits the action."""
    if not is_allowed(session.privilege_level, action):
        raise Forbidden()

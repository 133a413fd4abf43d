from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class LifecycleState(str, Enum):
    ACTIVE = "active"
    SOFT_DELETED = "soft_deleted"


class Transition(str, Enum):
    DELETE = "delete"
    SOFT_DELETE = "soft_delete"
    RESTORE = "restore"
    PURGE = "purge"


@dataclass(frozen=True)
class ConfirmationPolicy:
    prompt: str
    success_message: str
    requires_acknowledgement: bool = False


CONFIRMATIONS: dict[Transition, ConfirmationPolicy] = {
    Transition.DELETE: ConfirmationPolicy(
        prompt="Delete this record?",
        success_message="Deleted.",
    ),
    Transition.SOFT_DELETE: ConfirmationPolicy(
        prompt="Deactivate this record? It can be restored later.",
        success_message="Record deactivated.",
    ),
    Transition.RESTORE: ConfirmationPolicy(
        prompt="Restore this record?",
        success_message="Record restored.",
    ),
    Transition.PURGE: ConfirmationPolicy(
        prompt="Permanently delete this record? This cannot be undone.",
        success_message="Record permanently deleted.",
        requires_acknowledgement=True,
    ),
}


class LifecycleError(ValueError):
    pass


def lifecycle_state(record: dict[str, Any]) -> LifecycleState:
    marker = record.get("isValid")
    if isinstance(marker, str) and marker.strip().upper() == "FALSE":
        return LifecycleState.SOFT_DELETED
    if marker is False:
        return LifecycleState.SOFT_DELETED
    return LifecycleState.ACTIVE


def allowed_transitions(state: LifecycleState, soft_delete: bool) -> tuple[Transition, ...]:
    if not soft_delete:
        return (Transition.DELETE,)
    if state is LifecycleState.ACTIVE:
        return (Transition.SOFT_DELETE,)
    return (Transition.RESTORE, Transition.PURGE)


def require_transition(record: dict[str, Any], transition: Transition, soft_delete: bool) -> LifecycleState:
    state = lifecycle_state(record)
    if transition not in allowed_transitions(state, soft_delete):
        raise LifecycleError(f"cannot {transition.value} a record that is {state.value}")
    return state

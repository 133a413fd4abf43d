import pytest

from grid_console.app.record_lifecycle import (
    CONFIRMATIONS,
    LifecycleError,
    LifecycleState,
    Transition,
    allowed_transitions,
    lifecycle_state,
    require_transition,
)


def test_lifecycle_state_from_marker() -> None:
    assert lifecycle_state({"isValid": "FALSE"}) is LifecycleState.SOFT_DELETED
    assert lifecycle_state({"isValid": "false "}) is LifecycleState.SOFT_DELETED
    assert lifecycle_state({"isValid": False}) is LifecycleState.SOFT_DELETED
    assert lifecycle_state({"isValid": "TRUE"}) is LifecycleState.ACTIVE
    assert lifecycle_state({}) is LifecycleState.ACTIVE


def test_allowed_transitions() -> None:
    assert allowed_transitions(LifecycleState.ACTIVE, soft_delete=False) == (Transition.DELETE,)
    assert allowed_transitions(LifecycleState.ACTIVE, soft_delete=True) == (Transition.SOFT_DELETE,)
    assert allowed_transitions(LifecycleState.SOFT_DELETED, soft_delete=True) == (Transition.RESTORE, Transition.PURGE)


def test_require_transition_rejects_invalid_moves() -> None:
    with pytest.raises(LifecycleError):
        require_transition({"isValid": "TRUE"}, Transition.RESTORE, soft_delete=True)

    assert require_transition({"isValid": "FALSE"}, Transition.PURGE, soft_delete=True) is LifecycleState.SOFT_DELETED


def test_only_purge_requires_acknowledgement() -> None:
    assert [t for t, policy in CONFIRMATIONS.items() if policy.requires_acknowledgement] == [Transition.PURGE]

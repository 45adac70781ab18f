"""
pmcontract Status Transitions

Static per-kind tables of the statuses reachable in one step.
An empty tuple marks a terminal state.
"""
from types import MappingProxyType
from typing import Any, Mapping

from .models import BugStatus, FeatureStatus, ItemType, TaskStatus, item_type_of

FEATURE_STATUS_TRANSITIONS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    FeatureStatus.BACKLOG.value: (FeatureStatus.PLANNING.value,),
    FeatureStatus.PLANNING.value: (FeatureStatus.IN_PROGRESS.value, FeatureStatus.BACKLOG.value),
    FeatureStatus.IN_PROGRESS.value: (FeatureStatus.TESTING.value, FeatureStatus.PLANNING.value),
    FeatureStatus.TESTING.value: (FeatureStatus.COMPLETED.value, FeatureStatus.IN_PROGRESS.value),
    FeatureStatus.COMPLETED.value: (),
})

BUG_STATUS_TRANSITIONS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    BugStatus.OPEN.value: (BugStatus.IN_PROGRESS.value, BugStatus.WONT_FIX.value),
    BugStatus.IN_PROGRESS.value: (BugStatus.RESOLVED.value, BugStatus.OPEN.value),
    BugStatus.RESOLVED.value: (BugStatus.CLOSED.value, BugStatus.OPEN.value),
    BugStatus.CLOSED.value: (BugStatus.OPEN.value,),
    BugStatus.WONT_FIX.value: (BugStatus.OPEN.value,),
})

TASK_STATUS_TRANSITIONS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    TaskStatus.TODO.value: (TaskStatus.IN_PROGRESS.value,),
    TaskStatus.IN_PROGRESS.value: (
        TaskStatus.BLOCKED.value,
        TaskStatus.COMPLETED.value,
        TaskStatus.TODO.value,
    ),
    TaskStatus.BLOCKED.value: (TaskStatus.IN_PROGRESS.value, TaskStatus.TODO.value),
    TaskStatus.COMPLETED.value: (),
})

STATUS_TRANSITIONS: Mapping[str, Mapping[str, tuple[str, ...]]] = MappingProxyType({
    ItemType.FEATURE.value: FEATURE_STATUS_TRANSITIONS,
    ItemType.BUG.value: BUG_STATUS_TRANSITIONS,
    ItemType.TASK.value: TASK_STATUS_TRANSITIONS,
})


class TransitionNotAllowedError(ValueError):
    """Raised when a status change is not in the item type's transition table."""

    def __init__(self, from_status: str, to_status: str, item_type: str) -> None:
        self.from_status = from_status
        self.to_status = to_status
        self.item_type = item_type
        allowed = ", ".join(get_valid_transitions(item_type, from_status)) or "none"
        super().__init__(
            f"Transition '{from_status}' -> '{to_status}' is not allowed for {item_type}. "
            f"Allowed next statuses: {allowed}"
        )


def _status_value(status: Any) -> Any:
    # Accept enum members as well as their wire strings
    return getattr(status, "value", status)


def _can_transition(table: Mapping[str, tuple[str, ...]], from_status: Any, to_status: Any) -> bool:
    from_status = _status_value(from_status)
    if not isinstance(from_status, str):
        return False
    return _status_value(to_status) in table.get(from_status, ())


def can_transition_feature_status(from_status: str, to_status: str) -> bool:
    return _can_transition(FEATURE_STATUS_TRANSITIONS, from_status, to_status)


def can_transition_bug_status(from_status: str, to_status: str) -> bool:
    return _can_transition(BUG_STATUS_TRANSITIONS, from_status, to_status)


def can_transition_task_status(from_status: str, to_status: str) -> bool:
    return _can_transition(TASK_STATUS_TRANSITIONS, from_status, to_status)


def can_transition_status(item: Any, new_status: str) -> bool:
    """
    Check a status change for any project item.

    Dispatches on the item's ``type`` tag. Accepts models and raw mappings.
    Unknown kinds yield False rather than raising.
    """
    item_type = item_type_of(item)
    if isinstance(item, Mapping):
        current = item.get("status")
    else:
        current = getattr(item, "status", None)

    if item_type == ItemType.FEATURE.value:
        return can_transition_feature_status(current, new_status)
    elif item_type == ItemType.BUG.value:
        return can_transition_bug_status(current, new_status)
    elif item_type == ItemType.TASK.value:
        return can_transition_task_status(current, new_status)
    return False


def get_valid_transitions(item_type: str, status: str) -> tuple[str, ...]:
    """Statuses reachable from ``status`` in one step (empty if unknown or terminal)"""
    table = STATUS_TRANSITIONS.get(_status_value(item_type), {})
    return table.get(_status_value(status), ())


def is_terminal_status(item_type: str, status: str) -> bool:
    """True when ``status`` is a known state of ``item_type`` with no way out"""
    table = STATUS_TRANSITIONS.get(_status_value(item_type), {})
    status = _status_value(status)
    return status in table and not table[status]

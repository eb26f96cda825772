"""State machine for delivery/pickup handoffs.

Pure functions only; persistence lives in ``delivery_service``.
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass

from rentdesk.models.delivery import DeliveryPickupEventType, DeliveryStatus


class LifecycleAction(str, enum.Enum):
    """Operations that move a handoff between statuses."""

    ASSIGN = "assign"
    START = "start"
    COMPLETE = "complete"
    CANCEL = "cancel"


@dataclass(frozen=True, slots=True)
class _Rule:
    sources: frozenset[DeliveryStatus]
    target: DeliveryStatus
    event_type: DeliveryPickupEventType
    timestamp_field: str | None
    requires_assignee: bool = False


_RULES: dict[LifecycleAction, _Rule] = {
    LifecycleAction.ASSIGN: _Rule(
        sources=frozenset({DeliveryStatus.PENDING}),
        target=DeliveryStatus.ASSIGNED,
        event_type=DeliveryPickupEventType.ASSIGNED,
        timestamp_field="assigned_at",
    ),
    LifecycleAction.START: _Rule(
        sources=frozenset({DeliveryStatus.ASSIGNED}),
        target=DeliveryStatus.IN_PROGRESS,
        event_type=DeliveryPickupEventType.STARTED,
        timestamp_field="started_at",
        requires_assignee=True,
    ),
    LifecycleAction.COMPLETE: _Rule(
        sources=frozenset({DeliveryStatus.IN_PROGRESS}),
        target=DeliveryStatus.COMPLETED,
        event_type=DeliveryPickupEventType.COMPLETED,
        timestamp_field="completed_at",
        requires_assignee=True,
    ),
    LifecycleAction.CANCEL: _Rule(
        sources=frozenset(
            {
                DeliveryStatus.PENDING,
                DeliveryStatus.ASSIGNED,
                DeliveryStatus.IN_PROGRESS,
            }
        ),
        target=DeliveryStatus.CANCELLED,
        event_type=DeliveryPickupEventType.CANCELLED,
        timestamp_field=None,
    ),
}

TERMINAL_STATUSES = frozenset({DeliveryStatus.COMPLETED, DeliveryStatus.CANCELLED})


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """Outcome of checking an action against a handoff's current state."""

    action: LifecycleAction
    from_status: DeliveryStatus
    to_status: DeliveryStatus | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def expected_statuses(self) -> frozenset[DeliveryStatus]:
        return _RULES[self.action].sources

    @property
    def event_type(self) -> DeliveryPickupEventType:
        return _RULES[self.action].event_type

    @property
    def timestamp_field(self) -> str | None:
        return _RULES[self.action].timestamp_field

    @property
    def requires_assignee(self) -> bool:
        return _RULES[self.action].requires_assignee


def evaluate_transition(
    current: DeliveryStatus,
    action: LifecycleAction,
    *,
    assigned_to_id: uuid.UUID | None = None,
    actor_id: uuid.UUID | None = None,
) -> TransitionResult:
    """Check whether ``action`` may run from ``current`` for ``actor_id``.

    Start and complete are reserved to the staff member the handoff is
    assigned to.
    """
    rule = _RULES[action]
    if current not in rule.sources:
        return TransitionResult(
            action=action,
            from_status=current,
            error=f"Cannot {action.value} a handoff with status {current.value}",
        )
    if rule.requires_assignee and (
        assigned_to_id is None or assigned_to_id != actor_id
    ):
        return TransitionResult(
            action=action,
            from_status=current,
            error=f"Only the assigned staff member can {action.value} this handoff",
        )
    return TransitionResult(action=action, from_status=current, to_status=rule.target)


def allowed_actions(
    current: DeliveryStatus,
    *,
    assigned_to_id: uuid.UUID | None = None,
    actor_id: uuid.UUID | None = None,
) -> list[LifecycleAction]:
    """List the actions ``actor_id`` may perform from ``current``."""
    return [
        action
        for action in LifecycleAction
        if evaluate_transition(
            current, action, assigned_to_id=assigned_to_id, actor_id=actor_id
        ).ok
    ]


def can_scan(current: DeliveryStatus) -> bool:
    """Scans are accepted in every status except cancelled."""
    return current != DeliveryStatus.CANCELLED

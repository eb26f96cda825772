"""Tests for the delivery/pickup state machine."""

from __future__ import annotations

import uuid

import pytest

from rentdesk.models.delivery import DeliveryPickupEventType, DeliveryStatus
from rentdesk.services.delivery_lifecycle import (
    LifecycleAction,
    allowed_actions,
    can_scan,
    evaluate_transition,
)

STAFF = uuid.uuid4()
OTHER = uuid.uuid4()


def test_assign_from_pending() -> None:
    result = evaluate_transition(DeliveryStatus.PENDING, LifecycleAction.ASSIGN)
    assert result.ok
    assert result.to_status == DeliveryStatus.ASSIGNED
    assert result.event_type == DeliveryPickupEventType.ASSIGNED
    assert result.timestamp_field == "assigned_at"


@pytest.mark.parametrize(
    "status",
    [
        DeliveryStatus.ASSIGNED,
        DeliveryStatus.IN_PROGRESS,
        DeliveryStatus.COMPLETED,
        DeliveryStatus.CANCELLED,
    ],
)
def test_assign_rejected_outside_pending(status: DeliveryStatus) -> None:
    result = evaluate_transition(status, LifecycleAction.ASSIGN)
    assert not result.ok
    assert result.to_status is None
    assert status.value in (result.error or "")


def test_start_requires_the_assignee() -> None:
    ok = evaluate_transition(
        DeliveryStatus.ASSIGNED,
        LifecycleAction.START,
        assigned_to_id=STAFF,
        actor_id=STAFF,
    )
    assert ok.ok
    assert ok.to_status == DeliveryStatus.IN_PROGRESS

    rejected = evaluate_transition(
        DeliveryStatus.ASSIGNED,
        LifecycleAction.START,
        assigned_to_id=STAFF,
        actor_id=OTHER,
    )
    assert not rejected.ok
    assert "assigned staff member" in (rejected.error or "")


def test_complete_only_from_in_progress() -> None:
    result = evaluate_transition(
        DeliveryStatus.ASSIGNED,
        LifecycleAction.COMPLETE,
        assigned_to_id=STAFF,
        actor_id=STAFF,
    )
    assert not result.ok
    assert result.expected_statuses == frozenset({DeliveryStatus.IN_PROGRESS})

    result = evaluate_transition(
        DeliveryStatus.IN_PROGRESS,
        LifecycleAction.COMPLETE,
        assigned_to_id=STAFF,
        actor_id=STAFF,
    )
    assert result.ok
    assert result.timestamp_field == "completed_at"


def test_cancel_allowed_until_terminal() -> None:
    for status in (
        DeliveryStatus.PENDING,
        DeliveryStatus.ASSIGNED,
        DeliveryStatus.IN_PROGRESS,
    ):
        result = evaluate_transition(status, LifecycleAction.CANCEL, actor_id=OTHER)
        assert result.ok
        assert result.to_status == DeliveryStatus.CANCELLED
    for status in (DeliveryStatus.COMPLETED, DeliveryStatus.CANCELLED):
        assert not evaluate_transition(status, LifecycleAction.CANCEL).ok


def test_allowed_actions() -> None:
    assert allowed_actions(DeliveryStatus.PENDING) == [
        LifecycleAction.ASSIGN,
        LifecycleAction.CANCEL,
    ]
    assert allowed_actions(
        DeliveryStatus.ASSIGNED, assigned_to_id=STAFF, actor_id=STAFF
    ) == [LifecycleAction.START, LifecycleAction.CANCEL]
    assert allowed_actions(DeliveryStatus.COMPLETED) == []


def test_scans_rejected_only_when_cancelled() -> None:
    assert can_scan(DeliveryStatus.PENDING)
    assert can_scan(DeliveryStatus.COMPLETED)
    assert not can_scan(DeliveryStatus.CANCELLED)

"""
Lifecycle status derived from a workflow's event sequence.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Sequence

from workflow_radar.core.constants import (
    BLOCKED_STATES,
    COMPLETION_EVENT_TYPES,
    DONE_STATES,
    EVENT_CI_CHECK_RUN,
    EVENT_ISSUE_STATUS_CHANGED,
    FAILED_CHECK_CONCLUSIONS,
    WorkflowStatus,
)
from workflow_radar.domain.events import Event

DEFAULT_IDLE_AFTER = timedelta(hours=72)


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so mixed sources compare cleanly."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _payload_get(payload: Any, *path: str) -> Any:
    current = payload
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _latest_status_change(events: Sequence[Event]) -> Optional[str]:
    for event in reversed(events):
        if event.type == EVENT_ISSUE_STATUS_CHANGED:
            target = _payload_get(event.payload, "status", "to")
            if isinstance(target, str):
                return target.strip().lower()
    return None


def _latest_check_conclusion(events: Sequence[Event]) -> Optional[str]:
    for event in reversed(events):
        if event.type == EVENT_CI_CHECK_RUN:
            conclusion = _payload_get(event.payload, "conclusion")
            if conclusion is None:
                conclusion = _payload_get(event.payload, "check", "conclusion")
            return conclusion.strip().lower() if isinstance(conclusion, str) else None
    return None


def derive_status(
    events: Sequence[Event],
    reference_time: Optional[datetime] = None,
    idle_after: timedelta = DEFAULT_IDLE_AFTER,
) -> WorkflowStatus:
    """
    Classify a workflow from its events, which must be in sequence order.

    Precedence: completed (merge, close, or a done-like latest status), then
    blocked (blocked-like latest status or a failing latest check run), then
    idle (no events, or none within ``idle_after`` of ``reference_time``),
    otherwise active.
    """
    if not events:
        return WorkflowStatus.IDLE

    if any(event.type in COMPLETION_EVENT_TYPES for event in events):
        return WorkflowStatus.COMPLETED

    latest_status = _latest_status_change(events)
    if latest_status in DONE_STATES:
        return WorkflowStatus.COMPLETED
    if latest_status in BLOCKED_STATES:
        return WorkflowStatus.BLOCKED

    if _latest_check_conclusion(events) in FAILED_CHECK_CONCLUSIONS:
        return WorkflowStatus.BLOCKED

    if reference_time is not None:
        quiet_for = as_utc(reference_time) - as_utc(events[-1].ts)
        if quiet_for > idle_after:
            return WorkflowStatus.IDLE

    return WorkflowStatus.ACTIVE

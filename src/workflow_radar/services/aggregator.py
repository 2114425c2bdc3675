"""
Workflow aggregation: groups raw tracker events into ordered workflow bundles.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from workflow_radar.core.exceptions import MalformedEventError
from workflow_radar.core.logging import get_logger
from workflow_radar.domain.events import Event, Workflow, WorkflowBundle
from workflow_radar.services.status import DEFAULT_IDLE_AFTER, as_utc, derive_status

logger = get_logger(__name__)


class WorkflowAggregator:
    """
    Groups events by workflow and orders each group by sequence.

    Pure and deterministic: the idle cut-off is measured against the latest
    timestamp in the supplied event set, never the wall clock.
    """

    def __init__(self, idle_after: timedelta = DEFAULT_IDLE_AFTER) -> None:
        """
        Initialize the aggregator.

        Args:
            idle_after: Quiet period after which a workflow counts as idle
        """
        self.idle_after = idle_after

    def aggregate(
        self,
        workflows: Sequence[Workflow],
        events: Iterable[Event],
    ) -> list[WorkflowBundle]:
        """
        Build one bundle per workflow, in the order the workflows were given.

        Args:
            workflows: Workflow descriptors
            events: Events in any order

        Returns:
            Bundles whose events are sorted by sequence ascending

        Raises:
            MalformedEventError: duplicate workflow ids, an event for an unknown
                workflow, or two different events at the same (workflow, sequence)
        """
        known: dict[str, Workflow] = {}
        for workflow in workflows:
            if workflow.id in known:
                raise MalformedEventError(
                    f"Workflow '{workflow.id}' is listed more than once",
                    workflow_id=workflow.id,
                )
            known[workflow.id] = workflow

        grouped: dict[str, dict[int, Event]] = {workflow_id: {} for workflow_id in known}
        placed: dict[tuple[str, str], tuple[str, int]] = {}
        reference_time: Optional[datetime] = None
        received = 0

        for event in events:
            received += 1
            if event.workflow_id not in known:
                raise MalformedEventError(
                    f"Event '{event.id}' references unknown workflow '{event.workflow_id}'",
                    event_id=event.id,
                    workflow_id=event.workflow_id,
                )

            identity = (event.provider.value, event.id)
            previous_key = placed.get(identity)
            if previous_key is not None and previous_key != event.key:
                raise MalformedEventError(
                    f"Event '{event.id}' appears at both {previous_key} and {event.key}",
                    event_id=event.id,
                    workflow_id=event.workflow_id,
                )

            slot = grouped[event.workflow_id]
            existing = slot.get(event.sequence)
            if existing is not None:
                if (existing.provider, existing.id) != (event.provider, event.id):
                    raise MalformedEventError(
                        f"Events '{existing.id}' and '{event.id}' share sequence "
                        f"{event.sequence} in workflow '{event.workflow_id}'",
                        event_id=event.id,
                        workflow_id=event.workflow_id,
                    )
                # Same event delivered twice
                logger.debug("Dropping duplicate event delivery", event_id=event.id)
                continue

            slot[event.sequence] = event
            placed[identity] = event.key

            ts = as_utc(event.ts)
            if reference_time is None or ts > reference_time:
                reference_time = ts

        bundles = []
        for workflow_id, workflow in known.items():
            ordered = tuple(grouped[workflow_id][seq] for seq in sorted(grouped[workflow_id]))
            bundles.append(
                WorkflowBundle(
                    workflow=workflow,
                    events=ordered,
                    derived_status=derive_status(ordered, reference_time, self.idle_after),
                )
            )

        logger.info(
            "Aggregated events into workflows",
            workflows=len(bundles),
            events_received=received,
            events_kept=sum(len(b.events) for b in bundles),
        )
        return bundles

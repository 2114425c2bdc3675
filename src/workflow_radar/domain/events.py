"""
Event domain model: actors, entity references, events and workflows.

Wire payloads use camelCase field names (``workflowId``, ``linearIssueKey``);
the models expose snake_case attributes and accept either spelling.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from workflow_radar.core.constants import ActorType, Provider, WorkflowStatus


class Actor(BaseModel):
    """Identity that produced an event. Immutable once created."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Stable identity from the originating provider")
    display_name: str = Field(..., alias="displayName")
    handle: str = Field(..., description="Provider handle, e.g. a GitHub login")
    type: ActorType = Field(..., description="human, charlie (automated assistant) or bot")


class EntityRef(BaseModel):
    """
    Reference to the entity an event is about.

    Keyed by ``(provider, kind)``; which of the optional fields are present
    depends on the kind (an issue carries ``key``, a pull request carries
    ``owner``/``repo``/``number``). Unknown provider-specific fields are kept.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    kind: str = Field(..., description="issue, pull_request, comment, check_run, ...")
    provider: str
    id: Optional[str] = None
    key: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    owner: Optional[str] = None
    repo: Optional[str] = None
    number: Optional[int] = None


class Event(BaseModel):
    """One atomic tracked activity."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Unique within its provider")
    ts: datetime = Field(..., description="When the activity happened")
    provider: Provider
    type: str = Field(..., description="Free-form tag, e.g. issue.created or pr.merged")
    workflow_id: str = Field(..., alias="workflowId")
    sequence: int = Field(..., ge=0, description="Chronological position within the workflow")
    actor: Actor
    entity: EntityRef
    payload: Optional[Any] = Field(default=None, description="Opaque provider-specific detail")

    @property
    def key(self) -> tuple[str, int]:
        """The ``(workflow_id, sequence)`` pair, unique across a valid event set."""
        return (self.workflow_id, self.sequence)


class GithubLink(BaseModel):
    """Pull request linked to a workflow."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    owner: str
    repo: str
    pr_number: int = Field(..., alias="prNumber")


class Workflow(BaseModel):
    """Unit of work linking an issue to zero or one pull request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    linear_issue_key: str = Field(..., alias="linearIssueKey")
    github: Optional[GithubLink] = None


class WorkflowBundle(BaseModel):
    """A workflow with its events in sequence order and a derived status hint."""

    model_config = ConfigDict(frozen=True)

    workflow: Workflow
    events: tuple[Event, ...] = ()
    derived_status: WorkflowStatus = WorkflowStatus.IDLE

    @property
    def last_event(self) -> Optional[Event]:
        """Latest event by sequence, if any."""
        return self.events[-1] if self.events else None

    @property
    def started_at(self) -> Optional[datetime]:
        return self.events[0].ts if self.events else None

    def to_prompt_dict(self) -> dict[str, Any]:
        """Serialize for inclusion in a reasoning prompt."""
        return {
            "workflow": self.workflow.model_dump(mode="json", by_alias=True, exclude_none=True),
            "derivedStatus": self.derived_status.value,
            "eventCount": len(self.events),
            "startedAt": self.started_at.isoformat() if self.started_at else None,
            "lastActivityAt": self.last_event.ts.isoformat() if self.last_event else None,
            "events": [
                event.model_dump(mode="json", by_alias=True, exclude_none=True)
                for event in self.events
            ],
        }

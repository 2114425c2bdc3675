"""
Pytest configuration and fixtures.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, AsyncGenerator, Callable, Optional, Sequence, Union

import pytest
from httpx import ASGITransport, AsyncClient

from workflow_radar.api.deps import get_client_factory, get_radar_service
from workflow_radar.core.config import ReasoningSettings, Settings
from workflow_radar.domain.events import Actor, EntityRef, Event, GithubLink, Workflow
from workflow_radar.main import app
from workflow_radar.reasoning.base import ModelInfo, ReasoningClient
from workflow_radar.services.radar_service import RadarService

BASE_TS = datetime(2025, 1, 6, 9, 0, tzinfo=timezone.utc)


class FakeReasoningClient(ReasoningClient):
    """
    Scripted reasoning capability.

    Replies are consumed in order; the last one repeats. A reply that is an
    exception is raised instead of returned.
    """

    provider = "fake"

    def __init__(self, replies: Sequence[Union[str, BaseException]] = ("{}",)) -> None:
        self.replies = list(replies)
        self.calls: list[dict[str, str]] = []
        self.closed = False

    async def generate(self, system: str, prompt: str, model: str) -> str:
        self.calls.append({"system": system, "prompt": prompt, "model": model})
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, BaseException):
            raise reply
        return reply

    async def list_models(self) -> list[ModelInfo]:
        return [ModelInfo(id="fake-1", name="Fake One", provider=self.provider)]

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def human() -> Actor:
    return Actor(id="u-1", displayName="Dana Reyes", handle="dreyes", type="human")


@pytest.fixture
def charlie() -> Actor:
    return Actor(id="u-charlie", displayName="Charlie", handle="charlie", type="charlie")


@pytest.fixture
def workflows() -> list[Workflow]:
    return [
        Workflow(
            id="wf-1",
            name="Add retry to webhook delivery",
            linearIssueKey="CHA-101",
            github=GithubLink(owner="acme", repo="hooks", prNumber=42),
        ),
        Workflow(id="wf-2", name="Document rate limits", linearIssueKey="CHA-102"),
    ]


@pytest.fixture
def make_event(human: Actor) -> Callable[..., Event]:
    """Factory for events; timestamps advance with the sequence by default."""

    def _make(
        event_id: str,
        workflow_id: str = "wf-1",
        sequence: int = 1,
        type: str = "issue.commented",
        ts: Optional[datetime] = None,
        provider: str = "linear",
        actor: Optional[Actor] = None,
        payload: Any = None,
    ) -> Event:
        return Event(
            id=event_id,
            ts=ts or BASE_TS + timedelta(minutes=sequence),
            provider=provider,
            type=type,
            workflowId=workflow_id,
            sequence=sequence,
            actor=actor or human,
            entity=EntityRef(kind="issue", provider=provider, key="CHA-101"),
            payload=payload,
        )

    return _make


@pytest.fixture
def analysis_payload() -> Callable[..., dict[str, Any]]:
    """Factory for a valid AnalysisResult payload covering the given workflow ids."""

    def _make(workflow_ids: Sequence[str] = ("wf-1", "wf-2")) -> dict[str, Any]:
        return {
            "insights": {
                "summary": "One workflow is waiting on review.",
                "metrics": {
                    "totalWorkflows": len(workflow_ids),
                    "activeWorkflows": len(workflow_ids),
                    "completedWorkflows": 0,
                    "averageCompletionTime": "2 days",
                    "bottlenecks": ["Code review turnaround"],
                },
            },
            "workflows": [
                {
                    "id": workflow_id,
                    "narrative": f"Work on {workflow_id} is progressing.",
                    "status": "active",
                    "importance": 7,
                    "nextSteps": [
                        {
                            "action": "Request a review",
                            "reasoning": "The PR has been open for a day",
                            "confidence": 0.8,
                        }
                    ],
                    "insights": ["Charlie answered every review comment"],
                    "estimatedCompletion": "1 day",
                }
                for workflow_id in workflow_ids
            ],
            "recommendations": [
                {
                    "priority": "high",
                    "action": "Add a second reviewer",
                    "reasoning": "Reviews are the slowest step",
                    "affectedWorkflows": list(workflow_ids),
                }
            ],
        }

    return _make


@pytest.fixture
def interpretation_payload() -> dict[str, Any]:
    return {
        "what": {
            "topic": "AI sentiment about cryptocurrency",
            "description": "Track how discussion of AI-driven crypto projects shifts.",
            "isValid": True,
            "confidence": 0.86,
        },
        "when": {
            "frequency": "daily",
            "schedule": "Every morning at 9am",
            "notifyCondition": "significant_change",
            "options": [
                {"label": "Only big swings", "value": "significant_change", "isRecommended": True},
                {"label": "Every update", "value": "always", "isRecommended": False},
                {"label": "Never, I'll check", "value": "never", "isRecommended": False},
            ],
        },
        "why": {
            "intent": "You want to know when opinion on AI crypto projects turns.",
            "suggestedInsights": ["Sentiment trend", "Most discussed projects"],
        },
    }


@pytest.fixture
def fake_client() -> FakeReasoningClient:
    return FakeReasoningClient()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        reasoning=ReasoningSettings(
            default_model="test-model",
            max_attempts=1,
            backoff_min=0,
            backoff_max=0,
        )
    )


@pytest.fixture
def radar_service(fake_client: FakeReasoningClient, test_settings: Settings) -> RadarService:
    return RadarService(client=fake_client, settings=test_settings)


@pytest.fixture
async def async_client(
    radar_service: RadarService,
    fake_client: FakeReasoningClient,
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client wired to the fake reasoning capability."""
    app.dependency_overrides[get_radar_service] = lambda: radar_service
    app.dependency_overrides[get_client_factory] = lambda: (lambda provider: fake_client)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()

"""
Radar service: the operations exposed over the API.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Optional, Sequence

from workflow_radar.core.config import Settings
from workflow_radar.core.logging import LogContext, get_logger
from workflow_radar.domain.analysis import AnalysisResult
from workflow_radar.domain.events import Event, Workflow
from workflow_radar.domain.interpretation import InterpretationContext, InterpretationResult
from workflow_radar.reasoning.base import ReasoningClient
from workflow_radar.services.aggregator import WorkflowAggregator
from workflow_radar.services.interpreter import InterpretationValidator
from workflow_radar.services.retry import call_with_retry
from workflow_radar.services.suggestions import Suggestion, SuggestionRanker, SuggestionTile
from workflow_radar.services.synthesizer import InsightSynthesizer

logger = get_logger(__name__)


class RadarService:
    """
    Wires aggregation, synthesis, interpretation and suggestions together,
    applying the configured retry policy around reasoning calls.

    Holds no per-request state; one instance serves concurrent requests.
    """

    def __init__(
        self,
        client: ReasoningClient,
        settings: Settings,
        ranker: Optional[SuggestionRanker] = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            client: Reasoning capability
            settings: Application settings, read once here
            ranker: Suggestion ranker (defaults to the built-in candidates)
        """
        self.client = client
        self.max_attempts = settings.reasoning.max_attempts
        self.backoff_min = settings.reasoning.backoff_min
        self.backoff_max = settings.reasoning.backoff_max

        self.aggregator = WorkflowAggregator(
            idle_after=timedelta(hours=settings.aggregation.idle_after_hours),
        )
        self.synthesizer = InsightSynthesizer(client, settings.reasoning.default_model)
        self.interpreter = InterpretationValidator(
            client,
            settings.reasoning.default_model,
            max_input_chars=settings.interpretation.max_input_chars,
        )
        self.ranker = ranker or SuggestionRanker()

    async def analyze(
        self,
        workflows: Sequence[Workflow],
        events: Sequence[Event],
        model: Optional[str] = None,
    ) -> AnalysisResult:
        """
        Aggregate events and synthesize an analysis.

        Aggregation errors surface immediately; only the reasoning call is
        subject to retry.
        """
        with LogContext(operation="analyze"):
            bundles = self.aggregator.aggregate(workflows, events)
            return await call_with_retry(
                lambda: self.synthesizer.analyze(bundles, model=model),
                max_attempts=self.max_attempts,
                backoff_min=self.backoff_min,
                backoff_max=self.backoff_max,
            )

    async def interpret(
        self,
        text: str,
        context: Optional[InterpretationContext] = None,
        model: Optional[str] = None,
    ) -> InterpretationResult:
        """Interpret free text into a radar spec."""
        with LogContext(operation="interpret"):
            # Reject bad input before the retry loop so it is never re-sent
            self.interpreter.check_input(text)
            return await call_with_retry(
                lambda: self.interpreter.interpret(text, context=context, model=model),
                max_attempts=self.max_attempts,
                backoff_min=self.backoff_min,
                backoff_max=self.backoff_max,
            )

    def suggest(self, text: Optional[str]) -> list[Suggestion]:
        return self.ranker.rank(text)

    def tiles(self) -> list[SuggestionTile]:
        return self.ranker.tiles()

    async def close(self) -> None:
        await self.client.close()

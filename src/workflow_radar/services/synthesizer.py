"""
Insight synthesis: workflow bundles in, validated AnalysisResult out.
"""

from __future__ import annotations

import time
from typing import Optional, Sequence

from workflow_radar.core.exceptions import SchemaViolationError
from workflow_radar.core.logging import get_logger
from workflow_radar.domain.analysis import AnalysisResult
from workflow_radar.domain.events import WorkflowBundle
from workflow_radar.reasoning.base import ReasoningClient
from workflow_radar.services.parsing import parse_json_object, validate_payload
from workflow_radar.services.prompts import ANALYSIS_SYSTEM_PROMPT, build_analysis_prompt

logger = get_logger(__name__)


class InsightSynthesizer:
    """
    Asks the reasoning capability for an analysis of a set of workflows and
    enforces the AnalysisResult contract on the answer.

    Exactly one outbound call per ``analyze``, even for an empty input set.
    """

    def __init__(self, client: ReasoningClient, default_model: str) -> None:
        """
        Initialize the synthesizer.

        Args:
            client: Reasoning capability
            default_model: Model used when a call does not select one
        """
        self.client = client
        self.default_model = default_model

    async def analyze(
        self,
        bundles: Sequence[WorkflowBundle],
        model: Optional[str] = None,
    ) -> AnalysisResult:
        """
        Produce an analysis of ``bundles``.

        Raises:
            MalformedResponseError: the capability answered with non-JSON
            SchemaViolationError: the answer breaks the contract or references
                workflows that were not supplied
            UpstreamUnavailableError: the capability could not be reached
        """
        model_id = model or self.default_model
        prompt = build_analysis_prompt(bundles)

        # No size cap on the prompt; log it so oversized requests are visible
        logger.info(
            "Synthesizing insights",
            model=model_id,
            workflows=len(bundles),
            events=sum(len(bundle.events) for bundle in bundles),
            prompt_chars=len(prompt),
        )
        started = time.monotonic()

        raw = await self.client.generate(ANALYSIS_SYSTEM_PROMPT, prompt, model_id)

        data = parse_json_object(raw, "Analysis")
        result = validate_payload(AnalysisResult, data, "Analysis")
        self._check_against_input(result, bundles)

        logger.info(
            "Insight synthesis complete",
            model=model_id,
            analyzed_workflows=len(result.workflows),
            recommendations=len(result.recommendations),
            elapsed_ms=round((time.monotonic() - started) * 1000, 1),
        )
        return result

    @staticmethod
    def _check_against_input(result: AnalysisResult, bundles: Sequence[WorkflowBundle]) -> None:
        known_ids = [bundle.workflow.id for bundle in bundles]
        violations = result.unknown_workflow_references(known_ids)

        total = result.insights.metrics.total_workflows
        if total != len(known_ids):
            violations.append(
                f"insights.metrics.totalWorkflows: expected {len(known_ids)}, got {total}"
            )

        if violations:
            logger.warning("Analysis failed cross-reference checks", violations=violations)
            raise SchemaViolationError(
                "Analysis response is inconsistent with the supplied workflows",
                violations=violations,
            )

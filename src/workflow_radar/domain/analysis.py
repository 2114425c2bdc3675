"""
Analysis result model returned by the insight synthesizer.
"""

from __future__ import annotations

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from workflow_radar.core.constants import RecommendationPriority, WorkflowStatus


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class AnalysisMetrics(_CamelModel):
    """Aggregate counts across all analyzed workflows."""

    total_workflows: int = Field(..., ge=0, alias="totalWorkflows")
    active_workflows: int = Field(..., ge=0, alias="activeWorkflows")
    completed_workflows: int = Field(..., ge=0, alias="completedWorkflows")
    average_completion_time: str = Field(..., alias="averageCompletionTime")
    bottlenecks: list[str]


class AnalysisInsights(_CamelModel):
    summary: str
    metrics: AnalysisMetrics


class NextStep(_CamelModel):
    """A recommended next action for one workflow."""

    action: str
    reasoning: str
    confidence: float = Field(..., ge=0.0, le=1.0)


class WorkflowAnalysis(_CamelModel):
    """Narrative and status for one workflow."""

    id: str
    narrative: str
    status: WorkflowStatus
    importance: int = Field(..., ge=1, le=10)
    next_steps: list[NextStep] = Field(..., alias="nextSteps")
    insights: list[str]
    estimated_completion: Optional[str] = Field(default=None, alias="estimatedCompletion")


class Recommendation(_CamelModel):
    """Cross-workflow recommendation."""

    priority: RecommendationPriority
    action: str
    reasoning: str
    affected_workflows: list[str] = Field(..., alias="affectedWorkflows")


class AnalysisResult(_CamelModel):
    """Structured, prioritized analysis of a set of workflows."""

    insights: AnalysisInsights
    workflows: list[WorkflowAnalysis]
    recommendations: list[Recommendation]

    def unknown_workflow_references(self, known_ids: Iterable[str]) -> list[str]:
        """
        Describe every workflow id in the result that is not in ``known_ids``.

        Covers ``workflows[].id`` and ``recommendations[].affectedWorkflows``.
        """
        known = set(known_ids)
        problems: list[str] = []

        for index, workflow in enumerate(self.workflows):
            if workflow.id not in known:
                problems.append(f"workflows[{index}].id: unknown workflow '{workflow.id}'")

        for index, recommendation in enumerate(self.recommendations):
            for ref in recommendation.affected_workflows:
                if ref not in known:
                    problems.append(
                        f"recommendations[{index}].affectedWorkflows: unknown workflow '{ref}'"
                    )

        return problems

"""
Domain models.
"""

from workflow_radar.domain.analysis import (
    AnalysisInsights,
    AnalysisMetrics,
    AnalysisResult,
    NextStep,
    Recommendation,
    WorkflowAnalysis,
)
from workflow_radar.domain.events import (
    Actor,
    EntityRef,
    Event,
    GithubLink,
    Workflow,
    WorkflowBundle,
)
from workflow_radar.domain.interpretation import (
    InterpretationContext,
    InterpretationResult,
    NotificationOption,
    RadarWhat,
    RadarWhen,
    RadarWhy,
)

__all__ = [
    "Actor",
    "AnalysisInsights",
    "AnalysisMetrics",
    "AnalysisResult",
    "EntityRef",
    "Event",
    "GithubLink",
    "InterpretationContext",
    "InterpretationResult",
    "NextStep",
    "NotificationOption",
    "RadarWhat",
    "RadarWhen",
    "RadarWhy",
    "Recommendation",
    "Workflow",
    "WorkflowAnalysis",
    "WorkflowBundle",
]

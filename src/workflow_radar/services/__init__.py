"""
Service layer implementations.
"""

from workflow_radar.services.aggregator import WorkflowAggregator
from workflow_radar.services.interpreter import InterpretationValidator
from workflow_radar.services.radar_service import RadarService
from workflow_radar.services.status import derive_status
from workflow_radar.services.suggestions import Suggestion, SuggestionRanker, SuggestionTile
from workflow_radar.services.synthesizer import InsightSynthesizer

__all__ = [
    "InsightSynthesizer",
    "InterpretationValidator",
    "RadarService",
    "Suggestion",
    "SuggestionRanker",
    "SuggestionTile",
    "WorkflowAggregator",
    "derive_status",
]

"""
Workflow analysis endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from workflow_radar.api.deps import get_radar_service
from workflow_radar.core.logging import get_logger
from workflow_radar.domain.analysis import AnalysisResult
from workflow_radar.domain.events import Event, Workflow
from workflow_radar.services.radar_service import RadarService

logger = get_logger(__name__)

router = APIRouter()


class AnalyzeSettings(BaseModel):
    """Per-request analysis settings."""

    model_config = ConfigDict(populate_by_name=True)

    ai_model: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("aiModel", "model", "ai_model"),
        description="Model id passed through to the reasoning capability",
    )


class AnalyzeRequest(BaseModel):
    """Request for workflow analysis."""

    workflows: list[Workflow] = Field(default_factory=list)
    events: list[Event] = Field(default_factory=list)
    settings: Optional[AnalyzeSettings] = None


@router.post("/ai/analyze", response_model=AnalysisResult)
async def analyze_workflows(
    request: AnalyzeRequest,
    radar_service: RadarService = Depends(get_radar_service),
) -> AnalysisResult:
    """
    Analyze workflows and their events.

    Returns per-workflow narratives, status, importance and next steps plus
    cross-workflow recommendations. Any validation failure of the generated
    analysis fails the whole request.
    """
    model = request.settings.ai_model if request.settings else None
    logger.info(
        "Analyze requested",
        workflows=len(request.workflows),
        events=len(request.events),
        model=model,
    )

    return await radar_service.analyze(request.workflows, request.events, model=model)

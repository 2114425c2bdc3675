"""
Free-text interpretation endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from workflow_radar.api.deps import get_radar_service
from workflow_radar.core.logging import get_logger
from workflow_radar.domain.interpretation import InterpretationContext, InterpretationResult
from workflow_radar.services.radar_service import RadarService

logger = get_logger(__name__)

router = APIRouter()


class InterpretRequest(BaseModel):
    """Request to interpret free text into a radar spec."""

    input: str = Field(..., description="Free-text description of what to track")
    context: Optional[InterpretationContext] = None
    model: Optional[str] = Field(default=None, description="Model override")


@router.post("/ai/interpret", response_model=InterpretationResult)
async def interpret_input(
    request: InterpretRequest,
    radar_service: RadarService = Depends(get_radar_service),
) -> InterpretationResult:
    """
    Interpret free text into a radar tracking spec.

    An uninterpretable request still succeeds with ``what.isValid`` false.
    """
    logger.info("Interpret requested", input_chars=len(request.input))

    return await radar_service.interpret(
        request.input,
        context=request.context,
        model=request.model,
    )

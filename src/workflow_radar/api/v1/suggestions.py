"""
Suggestion endpoints.
"""

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, Query

from workflow_radar.api.deps import get_radar_service
from workflow_radar.services.radar_service import RadarService

router = APIRouter()


@router.get("/suggestions")
async def get_suggestions(
    q: str = Query(default="", description="Partial user input"),
    radar_service: RadarService = Depends(get_radar_service),
) -> dict[str, Any]:
    """Live suggestions matching partial input."""
    suggestions = radar_service.suggest(q)
    return {"suggestions": [asdict(s) for s in suggestions]}


@router.get("/suggestions/tiles")
async def get_suggestion_tiles(
    radar_service: RadarService = Depends(get_radar_service),
) -> dict[str, Any]:
    """Starter topics shown before the user types."""
    return {"tiles": [asdict(t) for t in radar_service.tiles()]}

"""
Interpretation model: a free-text request formalized into a radar tracking spec.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from workflow_radar.core.constants import (
    MAX_SUGGESTED_INSIGHTS,
    NOTIFICATION_OPTION_COUNT,
    Frequency,
    NotifyCondition,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class NotificationOption(_CamelModel):
    label: str = Field(..., description="Human-readable option label")
    value: str = Field(..., description="Value to store when selected")
    is_recommended: bool = Field(..., alias="isRecommended")


class RadarWhat(_CamelModel):
    topic: str = Field(..., description="The formalized title for the radar")
    description: str = Field(..., description="What will be tracked and monitored")
    is_valid: bool = Field(..., alias="isValid", description="Whether this is a trackable topic")
    confidence: float = Field(..., ge=0.0, le=1.0)


class RadarWhen(_CamelModel):
    frequency: Frequency
    schedule: Optional[str] = Field(default=None, description="Human-readable schedule")
    notify_condition: NotifyCondition = Field(..., alias="notifyCondition")
    # The consuming picker renders exactly three choices
    options: list[NotificationOption] = Field(
        ...,
        min_length=NOTIFICATION_OPTION_COUNT,
        max_length=NOTIFICATION_OPTION_COUNT,
    )


class RadarWhy(_CamelModel):
    intent: str = Field(..., description="1-2 sentence explanation of why to track this")
    suggested_insights: list[str] = Field(
        ...,
        max_length=MAX_SUGGESTED_INSIGHTS,
        alias="suggestedInsights",
    )


class InterpretationResult(_CamelModel):
    """
    Radar tracking spec derived from free text.

    ``what.is_valid`` false means the input could not be formalized into a
    trackable topic; the ``when`` and ``why`` groups are still present but
    only advisory in that case.
    """

    what: RadarWhat
    when: RadarWhen
    why: RadarWhy

    @property
    def is_trackable(self) -> bool:
        return self.what.is_valid

    @property
    def recommended_option(self) -> Optional[NotificationOption]:
        """First option flagged as recommended, if any."""
        return next((o for o in self.when.options if o.is_recommended), None)


class InterpretationContext(_CamelModel):
    """Optional disambiguation context for an interpretation request."""

    existing_topics: list[str] = Field(default_factory=list, alias="existingTopics")

"""
Availability Pydantic Schemas
"""

from datetime import datetime
from typing import List
from pydantic import BaseModel, Field, field_validator

from aicalendar.core.timeutils import to_utc_naive


class FindSlotsRequest(BaseModel):
    """Request schema for a common free-time search."""

    participant_user_ids: List[str] = Field(..., min_length=1)
    search_window_start_utc: datetime
    search_window_end_utc: datetime
    meeting_duration_minutes: int = Field(..., ge=5, le=1440, description="5 minutes to one day")

    @field_validator("search_window_start_utc", "search_window_end_utc")
    @classmethod
    def normalize_utc(cls, v):
        return to_utc_naive(v)


class AvailableSlotResponse(BaseModel):
    """A free slot common to every requested participant."""

    start_time_utc: datetime
    end_time_utc: datetime
    duration_minutes: float


class AvailableSlotListResponse(BaseModel):
    """Response schema for a free-time search."""

    slots: List[AvailableSlotResponse]
    total_count: int

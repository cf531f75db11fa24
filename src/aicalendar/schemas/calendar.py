"""
Calendar Pydantic Schemas
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_validator

from aicalendar.core.timeutils import to_utc_naive
from aicalendar.models.enums import ParticipantStatus


class EventParticipantDetails(BaseModel):
    """Participant summary embedded in an event."""

    user_id: str
    username: str
    status: ParticipantStatus


class CreateEventRequest(BaseModel):
    """Request schema for creating a calendar event."""

    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    start_time_utc: datetime
    end_time_utc: datetime
    time_zone_id: Optional[str] = Field(None, max_length=100)
    # Users to invite; the owner is added automatically
    participant_user_ids: List[str] = Field(default_factory=list)

    @field_validator("start_time_utc", "end_time_utc")
    @classmethod
    def normalize_utc(cls, v):
        return to_utc_naive(v)


class UpdateEventRequest(BaseModel):
    """
    Request schema for updating a calendar event.

    Omitted fields are left unchanged. An empty description clears it.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    start_time_utc: Optional[datetime] = None
    end_time_utc: Optional[datetime] = None
    time_zone_id: Optional[str] = Field(None, max_length=100)

    @field_validator("start_time_utc", "end_time_utc")
    @classmethod
    def normalize_utc(cls, v):
        return to_utc_naive(v)


class EventResponse(BaseModel):
    """Response schema for a calendar event with its participants."""

    id: str
    title: str
    description: Optional[str] = None
    start_time_utc: datetime
    end_time_utc: datetime
    owner_user_id: str
    owner_username: str
    time_zone_id: Optional[str] = None
    participants: List[EventParticipantDetails] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class EventListResponse(BaseModel):
    """Response schema for listing calendar events."""

    events: List[EventResponse]
    total_count: int


class AddParticipantRequest(BaseModel):
    """Request schema for inviting a user to an event."""

    user_id: str = Field(..., min_length=1)


class UpdateParticipantStatusRequest(BaseModel):
    """Request schema for changing a participation status. Parsed case-insensitively."""

    status: str = Field(..., min_length=1)


class EventParticipantResponse(BaseModel):
    """Response schema for a single participant record."""

    id: str
    event_id: str
    user_id: str
    username: str
    status: ParticipantStatus
    added_at_utc: datetime

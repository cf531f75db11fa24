"""
Pydantic schemas package.

This package contains all Pydantic models for request/response validation,
organized by domain:
- user: User registration, updates, and responses
- calendar: Events and participant records
- availability: Free-time search
- common: Shared schemas (errors, health)
"""

from aicalendar.schemas.common import ErrorResponse, HealthCheckResponse
from aicalendar.schemas.user import (
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
    UserListResponse,
)
from aicalendar.schemas.calendar import (
    EventParticipantDetails,
    CreateEventRequest,
    UpdateEventRequest,
    EventResponse,
    EventListResponse,
    AddParticipantRequest,
    UpdateParticipantStatusRequest,
    EventParticipantResponse,
)
from aicalendar.schemas.availability import (
    FindSlotsRequest,
    AvailableSlotResponse,
    AvailableSlotListResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthCheckResponse",
    "CreateUserRequest",
    "UpdateUserRequest",
    "UserResponse",
    "UserListResponse",
    "EventParticipantDetails",
    "CreateEventRequest",
    "UpdateEventRequest",
    "EventResponse",
    "EventListResponse",
    "AddParticipantRequest",
    "UpdateParticipantStatusRequest",
    "EventParticipantResponse",
    "FindSlotsRequest",
    "AvailableSlotResponse",
    "AvailableSlotListResponse",
]

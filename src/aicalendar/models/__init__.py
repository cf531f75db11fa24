"""
ORM Models package.

All models are imported here for easy access and to ensure proper
model registration with SQLAlchemy.

Usage:
    from aicalendar.models import Event, EventParticipant, User
    from aicalendar.models.enums import ParticipantStatus
"""

from aicalendar.models.base import Base, IdentifierMixin, new_id
from aicalendar.models.enums import ParticipantStatus, BUSY_STATUSES
from aicalendar.models.user import User
from aicalendar.models.calendar import Event, EventParticipant

__all__ = [
    # Base classes
    "Base",
    "IdentifierMixin",
    "new_id",

    # Enums
    "ParticipantStatus",
    "BUSY_STATUSES",

    # Models
    "User",
    "Event",
    "EventParticipant",
]

"""
Enumeration types used across ORM models.

This module centralizes all enum definitions to ensure consistency
across the application and make them easy to import.
"""

import enum

from aicalendar.core.exceptions import InvalidStatusException


class ParticipantStatus(enum.Enum):
    """
    Status of a user's participation in an event.

    Attributes:
        INVITED: Invitation sent, no answer yet
        ACCEPTED: Attendance confirmed (the owner is always accepted)
        DECLINED: Invitation declined
        TENTATIVE: Likely attending
    """
    INVITED = "Invited"
    ACCEPTED = "Accepted"
    DECLINED = "Declined"
    TENTATIVE = "Tentative"

    @classmethod
    def parse(cls, value) -> "ParticipantStatus":
        """
        Decode external input into a status, ignoring case and surrounding spaces.

        Raises:
            InvalidStatusException: If the value names no known status
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value.lower() == normalized:
                    return member
        raise InvalidStatusException(value)


# Only confirmed or likely attendance blocks a participant's time
BUSY_STATUSES = frozenset({ParticipantStatus.ACCEPTED, ParticipantStatus.TENTATIVE})

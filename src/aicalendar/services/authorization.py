"""
Authorization gate for calendar mutations.

Every check derives permission from the caller id and the stored event
state; nothing here trusts a role asserted by the client.
"""

from typing import Iterable

from aicalendar.core.exceptions import (
    ForbiddenException,
    OwnerCannotLeaveException,
    OwnerStatusFixedException,
)
from aicalendar.models.calendar import Event, EventParticipant
from aicalendar.models.enums import ParticipantStatus


def is_owner(event: Event, user_id: str) -> bool:
    return event.owner_user_id == user_id


def can_view(event: Event, participants: Iterable[EventParticipant], user_id: str) -> bool:
    """Owner and participants (any status) may read an event."""
    return is_owner(event, user_id) or any(p.user_id == user_id for p in participants)


def require_owner(event: Event, user_id: str, action: str) -> None:
    if not is_owner(event, user_id):
        raise ForbiddenException(
            f"Unauthorized to {action}. Only the event owner can do this.",
            {"event_id": event.id, "user_id": user_id},
        )


def authorize_status_change(
    event: Event,
    participant_user_id: str,
    requesting_user_id: str,
    new_status: ParticipantStatus
) -> None:
    """
    The owner may change any record, a participant only its own.

    The owner's own record stays Accepted.
    """
    if not is_owner(event, requesting_user_id) and participant_user_id != requesting_user_id:
        raise ForbiddenException(
            "Unauthorized to update this participant's status",
            {"event_id": event.id, "user_id": requesting_user_id},
        )
    if is_owner(event, participant_user_id) and new_status is not ParticipantStatus.ACCEPTED:
        raise OwnerStatusFixedException(event.id)


def authorize_removal(event: Event, participant_user_id: str, requesting_user_id: str) -> None:
    """
    The owner may remove others, a participant may remove itself.

    The owner can never remove its own record, whoever asks.
    """
    if is_owner(event, participant_user_id) and participant_user_id == requesting_user_id:
        raise OwnerCannotLeaveException(event.id)
    if not is_owner(event, requesting_user_id) and participant_user_id != requesting_user_id:
        raise ForbiddenException(
            "Unauthorized to remove this participant",
            {"event_id": event.id, "user_id": requesting_user_id},
        )

"""
Event participant service.

Manages who attends an event and in which status. The owner invites and
removes others; each participant answers for and may leave on its own
behalf. The owner's own record is always Accepted and cannot be removed.
"""

from typing import List, Optional
from sqlalchemy.orm import Session

from aicalendar.core.exceptions import (
    DatabaseException,
    NotFoundException,
    StoreInconsistencyException,
    ValidationException,
)
from aicalendar.models.calendar import Event, EventParticipant
from aicalendar.models.enums import ParticipantStatus
from aicalendar.schemas.calendar import EventParticipantResponse
from aicalendar.services import authorization
from aicalendar.services.base_service import BaseService
from aicalendar.services.error_handling import Notice, ServiceResult, service_operation
from aicalendar.services.user_service import UNKNOWN_USER, UserService


class ParticipantService(BaseService):
    """Participant lifecycle operations."""

    def __init__(self, db: Session, user_service: Optional[UserService] = None):
        super().__init__(db)
        self.users = user_service or UserService(db)

    def _load_event(self, event_id: str) -> Event:
        event = self.uow.events.get(event_id)
        if event is None:
            raise NotFoundException("Event", event_id)
        return event

    def _load_record(self, event_id: str, user_id: str) -> EventParticipant:
        record = self.uow.participants.get_record(event_id, user_id)
        if record is None:
            raise NotFoundException("Participant", user_id)
        return record

    def _to_response(self, record: EventParticipant, username: Optional[str] = None) -> EventParticipantResponse:
        if username is None:
            username = self.users.resolve_display_name(record.user_id)
        return EventParticipantResponse(
            id=record.id,
            event_id=record.event_id,
            user_id=record.user_id,
            username=username,
            status=record.status,
            added_at_utc=record.added_at_utc,
        )

    @service_operation
    def list_participants(self, event_id: str, requesting_user_id: str) -> List[EventParticipantResponse]:
        event = self._load_event(event_id)
        records = self.uow.participants.get_for_event(event_id)
        if not authorization.can_view(event, records, requesting_user_id):
            self.logger.warning(f"User {requesting_user_id} may not view participants of event {event_id}")
            raise NotFoundException("Event", event_id)

        names = self.users.display_names(record.user_id for record in records)
        return [self._to_response(record, names.get(record.user_id, UNKNOWN_USER)) for record in records]

    @service_operation
    def get_participant(self, event_id: str, user_id: str, requesting_user_id: str) -> EventParticipantResponse:
        event = self._load_event(event_id)
        records = self.uow.participants.get_for_event(event_id)
        if not authorization.can_view(event, records, requesting_user_id):
            raise NotFoundException("Event", event_id)

        for record in records:
            if record.user_id == user_id:
                return self._to_response(record)
        raise NotFoundException("Participant", user_id)

    @service_operation
    def add_participant(self, event_id: str, user_id: str, requesting_user_id: str) -> ServiceResult[EventParticipantResponse]:
        """
        Invite a user to the owner's event.

        Adding someone who already participates returns the existing record
        with a Conflict notice instead of creating a second one.
        """
        event = self._load_event(event_id)
        authorization.require_owner(event, requesting_user_id, "add participants to this event")

        if self.users.find_user(user_id) is None:
            raise NotFoundException("User", user_id)
        if authorization.is_owner(event, user_id):
            raise ValidationException(
                "The event owner is already a participant", {"event_id": event_id, "user_id": user_id}
            )

        existing = self.uow.participants.get_record(event_id, user_id)
        if existing is not None:
            return self._already_participating(existing)

        try:
            with self.uow:
                record = self.uow.participants.add(event_id, user_id, ParticipantStatus.INVITED)
                self.uow.commit()
        except DatabaseException:
            # A concurrent add may have won the unique (event_id, user_id) constraint
            existing = self.uow.participants.get_record(event_id, user_id)
            if existing is None:
                raise
            return self._already_participating(existing)

        self.logger.info(f"User {user_id} invited to event {event_id}")
        return ServiceResult.success(self._to_response(record))

    def _already_participating(self, record: EventParticipant) -> ServiceResult[EventParticipantResponse]:
        return ServiceResult.success(
            self._to_response(record),
            notice=Notice.CONFLICT,
            message=f"User {record.user_id} is already a participant",
        )

    @service_operation
    def update_participant_status(
        self,
        event_id: str,
        participant_user_id: str,
        new_status,
        requesting_user_id: str
    ) -> ServiceResult[EventParticipantResponse]:
        """
        Change a participation status.

        `new_status` may be a ParticipantStatus or any casing of its name.
        Setting the current status again succeeds without writing.
        """
        status = ParticipantStatus.parse(new_status)
        event = self._load_event(event_id)
        authorization.authorize_status_change(event, participant_user_id, requesting_user_id, status)
        record = self._load_record(event_id, participant_user_id)

        if record.status is status:
            return ServiceResult.success(
                self._to_response(record),
                notice=Notice.NO_EFFECTIVE_CHANGE,
                message=f"Status already set to {status.value}",
            )

        with self.uow:
            result = self.uow.participants.update_one(record.id, {"status": status})
            if result.matched_count == 0:
                raise NotFoundException("Participant", participant_user_id)
            if result.modified_count == 0:
                raise StoreInconsistencyException("Participant", participant_user_id)
            self.uow.commit()

        self.logger.info(f"Participant {participant_user_id} of event {event_id} set to {status.value}")
        return ServiceResult.success(self._to_response(self._load_record(event_id, participant_user_id)))

    @service_operation
    def remove_participant(self, event_id: str, participant_user_id: str, requesting_user_id: str) -> None:
        event = self._load_event(event_id)
        authorization.authorize_removal(event, participant_user_id, requesting_user_id)
        self._load_record(event_id, participant_user_id)

        with self.uow:
            deleted = self.uow.participants.delete_one({"event_id": event_id, "user_id": participant_user_id})
            if deleted == 0:
                raise StoreInconsistencyException("Participant", participant_user_id)
            self.uow.commit()

        self.logger.info(f"Participant {participant_user_id} removed from event {event_id} by {requesting_user_id}")

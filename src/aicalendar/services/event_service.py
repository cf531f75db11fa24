"""
Event service.

Creates, reads, updates and deletes calendar events together with the
participant records that make up their attendance. Only the owner mutates
an event; reads are limited to the owner and participants, and anyone else
sees the same "not found" answer as for a missing event.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence
from sqlalchemy.orm import Session

from aicalendar.core.exceptions import (
    NotFoundException,
    OwnerNotFoundException,
    StoreInconsistencyException,
    ValidationException,
)
from aicalendar.core.timeutils import to_utc_naive
from aicalendar.models.calendar import Event
from aicalendar.models.enums import ParticipantStatus
from aicalendar.schemas.calendar import EventParticipantDetails, EventResponse
from aicalendar.services import authorization
from aicalendar.services.base_service import BaseService
from aicalendar.services.error_handling import Notice, ServiceResult, service_operation
from aicalendar.services.user_service import UNKNOWN_USER, UserService

UNKNOWN_OWNER = "Unknown Owner"


class EventService(BaseService):
    """Event lifecycle operations."""

    def __init__(self, db: Session, user_service: Optional[UserService] = None):
        super().__init__(db)
        self.users = user_service or UserService(db)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load_event(self, event_id: str) -> Event:
        event = self.uow.events.get(event_id)
        if event is None:
            raise NotFoundException("Event", event_id)
        return event

    def _to_responses(self, events: Sequence[Event]) -> List[EventResponse]:
        """Attach participants and display names to events in two batched reads."""
        if not events:
            return []

        participants = self.uow.participants.find(
            {"event_id": [event.id for event in events]}, order_by="added_at_utc"
        )
        by_event: Dict[str, list] = {}
        for record in participants:
            by_event.setdefault(record.event_id, []).append(record)

        names = self.users.display_names(
            {event.owner_user_id for event in events} | {record.user_id for record in participants}
        )

        return [
            EventResponse(
                id=event.id,
                title=event.title,
                description=event.description,
                start_time_utc=event.start_time_utc,
                end_time_utc=event.end_time_utc,
                owner_user_id=event.owner_user_id,
                owner_username=names.get(event.owner_user_id, UNKNOWN_OWNER),
                time_zone_id=event.time_zone_id,
                participants=[
                    EventParticipantDetails(
                        user_id=record.user_id,
                        username=names.get(record.user_id, UNKNOWN_USER),
                        status=record.status,
                    )
                    for record in by_event.get(event.id, [])
                ],
            )
            for event in events
        ]

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @service_operation
    def create_event(
        self,
        title: str,
        start_time_utc: datetime,
        end_time_utc: datetime,
        owner_user_id: str,
        description: Optional[str] = None,
        time_zone_id: Optional[str] = None,
        invited_user_ids: Optional[Sequence[str]] = None
    ) -> EventResponse:
        """
        Create an event owned by `owner_user_id`.

        The owner gets an Accepted participation; every distinct invitee that
        resolves to a user gets an Invited one. Unknown invitees are skipped.
        All rows are written in one transaction.
        """
        start_time_utc = to_utc_naive(start_time_utc)
        end_time_utc = to_utc_naive(end_time_utc)
        if not title or not title.strip():
            raise ValidationException("Title is required", {"field": "title"})
        if end_time_utc <= start_time_utc:
            raise ValidationException("end_time_utc must be after start_time_utc")

        if self.users.find_user(owner_user_id) is None:
            raise OwnerNotFoundException(owner_user_id)

        invitees = [uid for uid in dict.fromkeys(invited_user_ids or []) if uid and uid != owner_user_id]
        known = self.users.display_names(invitees)
        skipped = [uid for uid in invitees if uid not in known]
        if skipped:
            self.logger.warning(f"Skipping unknown invitees for new event: {skipped}")

        with self.uow:
            event = self.uow.events.insert_one(Event(
                title=title,
                description=description or None,
                start_time_utc=start_time_utc,
                end_time_utc=end_time_utc,
                owner_user_id=owner_user_id,
                time_zone_id=time_zone_id,
            ))
            self.uow.participants.add(event.id, owner_user_id, ParticipantStatus.ACCEPTED)
            for user_id in invitees:
                if user_id in known:
                    self.uow.participants.add(event.id, user_id, ParticipantStatus.INVITED)
            self.uow.commit()

        self.logger.info(f"Event {event.id} created by {owner_user_id} with {len(known)} invitee(s)")
        return self._to_responses([event])[0]

    @service_operation
    def get_event(self, event_id: str, requesting_user_id: str) -> EventResponse:
        event = self._load_event(event_id)
        participants = self.uow.participants.get_for_event(event_id)
        if not authorization.can_view(event, participants, requesting_user_id):
            self.logger.warning(f"User {requesting_user_id} may not view event {event_id}")
            raise NotFoundException("Event", event_id)
        return self._to_responses([event])[0]

    @service_operation
    def list_events_for_user(
        self,
        user_id: str,
        period_start_utc: Optional[datetime] = None,
        period_end_utc: Optional[datetime] = None
    ) -> List[EventResponse]:
        """
        Events the user participates in, in any status, ascending by start.

        With both period bounds, only events overlapping [start, end) are kept.
        An inverted or empty period yields no events.
        """
        period_start_utc = to_utc_naive(period_start_utc)
        period_end_utc = to_utc_naive(period_end_utc)
        if period_start_utc is not None and period_end_utc is not None and period_end_utc <= period_start_utc:
            self.logger.warning(f"list_events_for_user: invalid period for user {user_id}")
            return []

        event_ids = self.uow.participants.event_ids_for_user(user_id)
        if not event_ids:
            return []

        events = self.uow.events.find_overlapping(event_ids, period_start_utc, period_end_utc)
        return self._to_responses(events)

    @service_operation
    def update_event(self, event_id: str, changes: Dict[str, Any], requesting_user_id: str) -> ServiceResult[EventResponse]:
        """
        Apply a partial update from the owner.

        A new start alone shifts the end by the same amount, a new end alone
        shifts the start, both are taken as given. An empty description
        clears it; a missing or null field leaves it unchanged.
        """
        event = self._load_event(event_id)
        authorization.require_owner(event, requesting_user_id, "update this event")

        new_start = to_utc_naive(changes.get("start_time_utc"))
        new_end = to_utc_naive(changes.get("end_time_utc"))
        duration = event.end_time_utc - event.start_time_utc
        if new_start is not None and new_end is None:
            new_end = new_start + duration
        elif new_start is None and new_end is not None:
            new_start = new_end - duration
        elif new_start is None and new_end is None:
            new_start, new_end = event.start_time_utc, event.end_time_utc

        if new_end <= new_start:
            raise ValidationException("end_time_utc must be after start_time_utc")

        patch: Dict[str, Any] = {}
        title = changes.get("title")
        if title is not None and not title.strip():
            raise ValidationException("Title cannot be blank", {"field": "title"})
        if title is not None and title != event.title:
            patch["title"] = title

        description = changes.get("description")
        if description is not None:
            description = description or None
            if description != event.description:
                patch["description"] = description

        if new_start != event.start_time_utc:
            patch["start_time_utc"] = new_start
        if new_end != event.end_time_utc:
            patch["end_time_utc"] = new_end

        time_zone_id = changes.get("time_zone_id")
        if time_zone_id is not None and time_zone_id != event.time_zone_id:
            patch["time_zone_id"] = time_zone_id

        if not patch:
            return ServiceResult.success(
                self._to_responses([event])[0],
                notice=Notice.NO_EFFECTIVE_CHANGE,
                message="No effective changes were made.",
            )

        with self.uow:
            result = self.uow.events.update_one(event_id, patch)
            if result.matched_count == 0:
                raise NotFoundException("Event", event_id)
            if result.modified_count == 0:
                raise StoreInconsistencyException("Event", event_id)
            self.uow.commit()

        self.logger.info(f"Event {event_id} updated: {sorted(patch)}")
        return ServiceResult.success(self._to_responses([self._load_event(event_id)])[0])

    @service_operation
    def delete_event(self, event_id: str, requesting_user_id: str) -> ServiceResult[None]:
        """Delete an event and all of its participant records in one transaction."""
        event = self._load_event(event_id)
        authorization.require_owner(event, requesting_user_id, "delete this event")

        with self.uow:
            removed = self.uow.participants.delete_many({"event_id": event_id})
            deleted = self.uow.events.delete_one({"id": event_id})
            if deleted == 0 and removed == 0:
                raise StoreInconsistencyException(
                    "Event", event_id, "Event was not found for deletion, though it was initially fetched"
                )
            self.uow.commit()

        self.logger.info(f"Event {event_id} deleted with {removed} participant record(s)")
        if deleted == 0:
            return ServiceResult.success(
                None,
                notice=Notice.ALREADY_REMOVED,
                message="Event was already gone; associated participants cleared.",
            )
        return ServiceResult.success(None)

"""
Calendar Repository

Data access layer for calendar events and their participant records.
"""

from datetime import datetime
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session

from aicalendar.models.calendar import Event, EventParticipant
from aicalendar.models.enums import ParticipantStatus
from aicalendar.repositories.base import BaseRepository


class EventRepository(BaseRepository[Event]):
    """Repository for calendar events."""

    def __init__(self, db: Session):
        super().__init__(Event, db)

    def find_overlapping(
        self,
        event_ids: Iterable[str],
        period_start: Optional[datetime] = None,
        period_end: Optional[datetime] = None
    ) -> List[Event]:
        """
        Events among `event_ids`, optionally restricted to those overlapping a period.

        Overlap is half-open: start < period_end and end > period_start.
        Results are ordered by start time.
        """
        ids = set(event_ids)
        if not ids:
            return []

        query = self.db.query(Event).filter(Event.id.in_(ids))
        if period_start is not None and period_end is not None:
            query = query.filter(
                Event.start_time_utc < period_end,
                Event.end_time_utc > period_start,
            )
        return query.order_by(Event.start_time_utc.asc()).all()


class EventParticipantRepository(BaseRepository[EventParticipant]):
    """Repository for event participant records."""

    def __init__(self, db: Session):
        super().__init__(EventParticipant, db)

    def get_for_event(self, event_id: str) -> List[EventParticipant]:
        return self.find({"event_id": event_id}, order_by="added_at_utc")

    def get_record(self, event_id: str, user_id: str) -> Optional[EventParticipant]:
        return self.find_one({"event_id": event_id, "user_id": user_id})

    def event_ids_for_user(
        self,
        user_id: str,
        statuses: Optional[Iterable[ParticipantStatus]] = None
    ) -> List[str]:
        """Distinct event ids the user participates in, optionally limited to some statuses."""
        query = self.db.query(EventParticipant.event_id).filter(EventParticipant.user_id == user_id)
        if statuses is not None:
            query = query.filter(EventParticipant.status.in_(list(statuses)))
        return [row[0] for row in query.distinct().all()]

    def add(self, event_id: str, user_id: str, status: ParticipantStatus) -> EventParticipant:
        return self.insert_one(EventParticipant(event_id=event_id, user_id=user_id, status=status))

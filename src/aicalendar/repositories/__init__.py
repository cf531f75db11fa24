"""
Repositories package.

This package contains all data access layer repositories following the Repository Pattern.
Each repository extends BaseRepository and provides domain-specific data operations.

Usage:
    from aicalendar.repositories import UnitOfWork
    from aicalendar.core.database import get_db

    def create_event(db: Session = Depends(get_db)):
        with UnitOfWork(db) as uow:
            event = uow.events.insert_one(Event(...))
            uow.commit()
            return event
"""

from aicalendar.repositories.base import BaseRepository, UpdateResult
from aicalendar.repositories.user_repository import UserRepository
from aicalendar.repositories.calendar_repository import EventRepository, EventParticipantRepository
from aicalendar.repositories.unit_of_work import UnitOfWork

__all__ = [
    "BaseRepository",
    "UpdateResult",
    "UserRepository",
    "EventRepository",
    "EventParticipantRepository",
    "UnitOfWork",
]

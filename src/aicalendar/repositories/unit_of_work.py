"""
Transaction boundary for calendar writes.

Creating an event writes the event row and its participant rows; deleting one
removes the participant rows and then the event. Both run inside one
UnitOfWork so that either every row lands or none does.

Usage:
    with self.uow:
        event = self.uow.events.insert_one(Event(...))
        self.uow.participants.add(event.id, owner_id, ParticipantStatus.ACCEPTED)
        self.uow.commit()
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from aicalendar.core.exceptions import DatabaseException
from aicalendar.repositories.user_repository import UserRepository
from aicalendar.repositories.calendar_repository import EventRepository, EventParticipantRepository

logger = logging.getLogger("UNIT_OF_WORK")


class UnitOfWork:
    """
    Users, events and participants repositories over one shared session.

    Entering the context starts a fresh unit; leaving it with an exception
    before ``commit()`` rolls the session back.
    """

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.events = EventRepository(db)
        self.participants = EventParticipantRepository(db)
        self._committed = False

    def commit(self) -> None:
        """
        Commit the pending writes.

        Raises:
            DatabaseException: If the store refuses the commit; the session is rolled back
        """
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Commit failed, rolling back: {e}")
            self.rollback()
            raise DatabaseException("Failed to commit calendar changes") from e
        self._committed = True

    def rollback(self) -> None:
        self.db.rollback()
        logger.debug("Calendar unit rolled back")

    def __enter__(self) -> "UnitOfWork":
        self._committed = False
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None and not self._committed:
            logger.warning(f"{exc_type.__name__} inside calendar unit, rolling back")
            self.rollback()
        return False

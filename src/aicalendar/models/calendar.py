"""
Calendar ORM models.

Events and their participant records live in separate tables with no
foreign keys between them or to users; referential integrity is kept by
the services.
"""

from sqlalchemy import Column, String, DateTime, Text, Enum, UniqueConstraint

from aicalendar.core.timeutils import utcnow
from aicalendar.models.base import Base, IdentifierMixin
from aicalendar.models.enums import ParticipantStatus


class Event(IdentifierMixin, Base):
    """Calendar event owned by the user who created it."""

    __tablename__ = "events"

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    start_time_utc = Column(DateTime, nullable=False, index=True)
    end_time_utc = Column(DateTime, nullable=False, index=True)
    owner_user_id = Column(String(32), nullable=False, index=True)
    # Display hint only; instants are UTC
    time_zone_id = Column(String(100), nullable=True)


class EventParticipant(IdentifierMixin, Base):
    """A user's participation in an event."""

    __tablename__ = "event_participants"
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_participant"),
    )

    event_id = Column(String(32), nullable=False, index=True)
    user_id = Column(String(32), nullable=False, index=True)
    status = Column(
        Enum(
            ParticipantStatus,
            name="participant_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=ParticipantStatus.INVITED,
    )
    added_at_utc = Column(DateTime, default=utcnow, nullable=False)

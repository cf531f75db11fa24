"""
User ORM model.

Stores user records that own and participate in calendar events.
"""

from sqlalchemy import Column, String, DateTime

from aicalendar.core.timeutils import utcnow
from aicalendar.models.base import Base, IdentifierMixin


class User(IdentifierMixin, Base):
    """User record with basic identity fields."""

    __tablename__ = "users"

    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    # Written by the identity provider only
    password_hash = Column(String(255), nullable=True)
    created_at_utc = Column(DateTime, default=utcnow, nullable=False, index=True)

    @property
    def display_name(self) -> str:
        return self.username

"""
Base SQLAlchemy declarative class and common model helpers.

This module provides the foundation for all ORM models in the application.
"""

import uuid
from sqlalchemy import Column, String
from sqlalchemy.orm import declarative_base


# Create base declarative class
Base = declarative_base()


def new_id() -> str:
    """Generate a new opaque string identifier."""
    return uuid.uuid4().hex


class IdentifierMixin:
    """Mixin that adds an opaque string primary key."""

    id = Column(String(32), primary_key=True, default=new_id)

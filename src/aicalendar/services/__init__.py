"""
Service layer.

Each service takes a SQLAlchemy session and returns ServiceResult objects
from its public operations.
"""

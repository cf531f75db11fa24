"""
Custom exceptions for the application.

This module defines domain-specific exceptions for better error handling
and more meaningful error messages throughout the application. Services
raise these; the service boundary turns them into typed results.
"""

from typing import Optional, Any, Dict


class ApplicationException(Exception):
    """Base exception for all application-specific exceptions."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DatabaseException(ApplicationException):
    """Exception raised for database-related errors."""
    pass


class StoreInconsistencyException(DatabaseException):
    """A write matched or modified nothing, implying a race or a stale reference."""

    def __init__(self, resource: str, identifier: Any, message: Optional[str] = None):
        message = message or f"{resource} {identifier} was not modified by the store"
        super().__init__(message, {"resource": resource, "identifier": identifier})


class ValidationException(ApplicationException):
    """Exception raised for validation errors."""
    pass


class InvalidStatusException(ValidationException):
    """Exception raised for an unrecognized participant status string."""

    def __init__(self, value: Any):
        message = f"Invalid status: {value!r}. Must be one of Invited, Accepted, Declined, Tentative"
        super().__init__(message, {"status": value})


class NotFoundException(ApplicationException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: Any):
        message = f"{resource} not found: {identifier}"
        super().__init__(message, {"resource": resource, "identifier": identifier})


class OwnerNotFoundException(NotFoundException):
    """The owner of a new event does not resolve to a user."""

    def __init__(self, identifier: Any):
        super().__init__("Event owner", identifier)


class ForbiddenException(ApplicationException):
    """Exception raised when the caller may not perform the requested mutation."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class OwnerStatusFixedException(ApplicationException):
    """The owner's participation is pinned to Accepted."""

    def __init__(self, event_id: Any):
        message = "The event owner's status is fixed to Accepted"
        super().__init__(message, {"event_id": event_id})


class OwnerCannotLeaveException(ApplicationException):
    """The owner may not remove its own participation; delete the event instead."""

    def __init__(self, event_id: Any):
        message = "The event owner cannot remove themselves; delete the event instead"
        super().__init__(message, {"event_id": event_id})


class DuplicateException(ApplicationException):
    """Exception raised when attempting to create a duplicate resource."""

    def __init__(self, resource: str, field: str, value: Any):
        message = f"{resource} already exists with {field}: {value}"
        super().__init__(message, {"resource": resource, "field": field, "value": value})


class ConfigurationException(ApplicationException):
    """Exception raised for configuration-related errors."""
    pass

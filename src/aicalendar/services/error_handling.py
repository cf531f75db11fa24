"""
Service error handling and typed results.

Services raise the domain exceptions from ``aicalendar.core.exceptions``;
``service_operation`` catches them at the service boundary and returns a
``ServiceResult`` carrying either the value or a ``ServiceFailure``. Reading
``value`` from a failed result raises, so a caller cannot silently ignore the
error arm.
"""

import enum
import logging
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from aicalendar.core.exceptions import (
    ApplicationException,
    DuplicateException,
    ForbiddenException,
    InvalidStatusException,
    NotFoundException,
    OwnerCannotLeaveException,
    OwnerNotFoundException,
    OwnerStatusFixedException,
    StoreInconsistencyException,
    ValidationException,
)

# Get logger without configuring (let uvicorn handle logging configuration)
logger = logging.getLogger(__name__)

T = TypeVar('T')


class ServiceError(Exception):
    """Base exception for unexpected service errors."""
    def __init__(self, message: str, error_code: str = None, details: dict = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class FailureKind(enum.Enum):
    """Typed failure reasons a service operation can return."""
    NOT_FOUND = "NotFound"
    OWNER_NOT_FOUND = "OwnerNotFound"
    FORBIDDEN = "Forbidden"
    OWNER_STATUS_FIXED = "OwnerStatusFixed"
    OWNER_CANNOT_LEAVE = "OwnerCannotLeave"
    INVALID_ARGUMENT = "InvalidArgument"
    INVALID_STATUS = "InvalidStatus"
    CONFLICT = "Conflict"
    STORE_INCONSISTENCY = "StoreInconsistency"


class Notice(enum.Enum):
    """Informational signals attached to a successful result."""
    CONFLICT = "Conflict"
    NO_EFFECTIVE_CHANGE = "NoEffectiveChange"
    ALREADY_REMOVED = "AlreadyRemoved"


# Most specific classes first
_FAILURE_KINDS = (
    (OwnerNotFoundException, FailureKind.OWNER_NOT_FOUND),
    (NotFoundException, FailureKind.NOT_FOUND),
    (ForbiddenException, FailureKind.FORBIDDEN),
    (OwnerStatusFixedException, FailureKind.OWNER_STATUS_FIXED),
    (OwnerCannotLeaveException, FailureKind.OWNER_CANNOT_LEAVE),
    (InvalidStatusException, FailureKind.INVALID_STATUS),
    (ValidationException, FailureKind.INVALID_ARGUMENT),
    (DuplicateException, FailureKind.CONFLICT),
    (StoreInconsistencyException, FailureKind.STORE_INCONSISTENCY),
)


@dataclass(frozen=True)
class ServiceFailure:
    """A business-rule failure returned to the caller."""
    kind: FailureKind
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: ApplicationException) -> Optional["ServiceFailure"]:
        for exc_type, kind in _FAILURE_KINDS:
            if isinstance(exc, exc_type):
                return cls(kind=kind, message=exc.message, details=dict(exc.details))
        return None


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Either a successful value (optionally with a notice) or a failure."""
    _value: Optional[T] = None
    failure: Optional[ServiceFailure] = None
    notice: Optional[Notice] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, value: T = None, notice: Optional[Notice] = None, message: Optional[str] = None) -> "ServiceResult[T]":
        return cls(_value=value, notice=notice, message=message)

    @classmethod
    def fail(cls, failure: ServiceFailure) -> "ServiceResult[T]":
        return cls(failure=failure, message=failure.message)

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def value(self) -> T:
        if self.failure is not None:
            raise ServiceError(
                f"Result holds a failure: {self.failure.message}",
                "UNCHECKED_FAILURE",
                {"kind": self.failure.kind.value},
            )
        return self._value

    def unwrap(self) -> T:
        return self.value


def service_operation(func: Callable) -> Callable:
    """
    Decorator turning a service method into one that returns a ServiceResult.

    Domain exceptions become failures; plain return values become successes;
    anything unexpected is logged and re-raised as a ServiceError.
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs) -> ServiceResult:
        with self._timed_operation(func.__name__) as timer:
            try:
                outcome = func(self, *args, **kwargs)
            except ApplicationException as e:
                failure = ServiceFailure.from_exception(e)
                if failure is None:
                    timer.failed = True
                    logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
                    raise ServiceError(f"Internal service error: {e.message}", "INTERNAL_ERROR") from e
                timer.rejected = True
                self.logger.info(f"{func.__name__} rejected: {failure.kind.value}: {failure.message}")
                return ServiceResult.fail(failure)
            except ServiceError:
                # Re-raise service errors as-is
                timer.failed = True
                raise
            except Exception as e:
                timer.failed = True
                logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
                raise ServiceError(f"Internal service error: {e}", "INTERNAL_ERROR") from e

        if isinstance(outcome, ServiceResult):
            return outcome
        return ServiceResult.success(outcome)
    return wrapper

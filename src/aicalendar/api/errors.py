"""
Translate service results into HTTP responses.
"""

from fastapi import HTTPException, status

from aicalendar.services.error_handling import FailureKind, ServiceResult

STATUS_BY_FAILURE = {
    FailureKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureKind.OWNER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    FailureKind.OWNER_CANNOT_LEAVE: status.HTTP_403_FORBIDDEN,
    FailureKind.OWNER_STATUS_FIXED: status.HTTP_400_BAD_REQUEST,
    FailureKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    FailureKind.INVALID_STATUS: status.HTTP_400_BAD_REQUEST,
    FailureKind.CONFLICT: status.HTTP_409_CONFLICT,
    FailureKind.STORE_INCONSISTENCY: status.HTTP_409_CONFLICT,
}


def unwrap_or_raise(result: ServiceResult):
    """Return the result's value or raise the HTTPException matching its failure."""
    if result.ok:
        return result.value

    failure = result.failure
    raise HTTPException(
        status_code=STATUS_BY_FAILURE.get(failure.kind, status.HTTP_400_BAD_REQUEST),
        detail={"error": failure.kind.value, "message": failure.message},
    )

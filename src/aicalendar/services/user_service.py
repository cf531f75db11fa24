"""
User directory service.

Registers and maintains users, and resolves user ids to display names for
the calendar services.
"""

from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.orm import Session

from aicalendar.core.exceptions import DuplicateException, ForbiddenException, NotFoundException
from aicalendar.models.user import User
from aicalendar.schemas.user import UserResponse
from aicalendar.services.base_service import BaseService
from aicalendar.services.error_handling import Notice, ServiceResult, service_operation

UNKNOWN_USER = "Unknown User"

_UPDATABLE_FIELDS = ("email", "first_name", "last_name")


class UserService(BaseService):
    """User registration, lookup and maintenance."""

    def __init__(self, db: Session):
        super().__init__(db)

    # ------------------------------------------------------------------
    # Directory lookups used by the calendar services
    # ------------------------------------------------------------------

    def find_user(self, user_id: str) -> Optional[User]:
        if not user_id:
            return None
        return self.uow.users.get(user_id)

    def resolve_display_name(self, user_id: str) -> str:
        user = self.find_user(user_id)
        return user.display_name if user is not None else UNKNOWN_USER

    def display_names(self, user_ids: Iterable[str]) -> Dict[str, str]:
        """Map each known id to its display name; unknown ids are absent."""
        return {user.id: user.display_name for user in self.uow.users.get_many(user_ids)}

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @service_operation
    def create_user(
        self,
        username: str,
        email: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None
    ) -> UserResponse:
        with self.uow:
            user = self.uow.users.create_user({
                "username": username,
                "email": email,
                "first_name": first_name,
                "last_name": last_name,
            })
            self.uow.commit()
        self.logger.info(f"User registered: {user.id} ({username})")
        return UserResponse.model_validate(user)

    @service_operation
    def get_user(self, user_id: str) -> UserResponse:
        user = self.find_user(user_id)
        if user is None:
            raise NotFoundException("User", user_id)
        return UserResponse.model_validate(user)

    @service_operation
    def list_users(self) -> List[UserResponse]:
        users = self.uow.users.find(order_by="created_at_utc")
        return [UserResponse.model_validate(user) for user in users]

    @service_operation
    def update_user(self, user_id: str, changes: Dict[str, Any], current_user_id: str) -> ServiceResult[UserResponse]:
        if user_id != current_user_id:
            raise ForbiddenException("Unauthorized to update this user", {"user_id": current_user_id})

        user = self.find_user(user_id)
        if user is None:
            raise NotFoundException("User", user_id)

        patch = {
            key: value for key, value in changes.items()
            if key in _UPDATABLE_FIELDS and getattr(user, key) != value
        }
        # Email cannot be cleared
        if "email" in patch and patch["email"] is None:
            del patch["email"]

        if not patch:
            return ServiceResult.success(
                UserResponse.model_validate(user),
                notice=Notice.NO_EFFECTIVE_CHANGE,
                message="No updatable changes provided or values are the same.",
            )

        if "email" in patch and self.uow.users.email_taken_by_other(patch["email"], user_id):
            raise DuplicateException("User", "email", patch["email"])

        with self.uow:
            result = self.uow.users.update_one(user_id, patch)
            if result.matched_count == 0:
                raise NotFoundException("User", user_id)
            self.uow.commit()

        self.logger.info(f"User {user_id} updated: {sorted(patch)}")
        return ServiceResult.success(UserResponse.model_validate(user))

    @service_operation
    def delete_user(self, user_id: str, current_user_id: str) -> None:
        if user_id == current_user_id:
            raise ForbiddenException("Users cannot delete themselves", {"user_id": user_id})

        with self.uow:
            deleted = self.uow.users.delete_one({"id": user_id})
            if deleted == 0:
                raise NotFoundException("User", user_id)
            self.uow.commit()
        self.logger.info(f"User {user_id} deleted by {current_user_id}")

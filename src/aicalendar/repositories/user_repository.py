"""
User Repository

Data access layer for user records.
"""

from typing import Optional, List
from sqlalchemy.orm import Session

from aicalendar.models.user import User
from aicalendar.repositories.base import BaseRepository
from aicalendar.core.exceptions import DuplicateException


class UserRepository(BaseRepository[User]):
    """Repository for user records."""

    def __init__(self, db: Session):
        super().__init__(User, db)

    def get_by_username(self, username: str) -> Optional[User]:
        return self.find_one({"username": username})

    def get_by_email(self, email: str) -> Optional[User]:
        return self.find_one({"email": email})

    def get_many(self, user_ids) -> List[User]:
        ids = set(user_ids)
        if not ids:
            return []
        return self.find({"id": ids})

    def email_taken_by_other(self, email: str, user_id: str) -> bool:
        return self.db.query(User).filter(User.email == email, User.id != user_id).count() > 0

    def create_user(self, user_data: dict) -> User:
        if self.get_by_username(user_data.get("username")):
            raise DuplicateException("User", "username", user_data.get("username"))
        if self.get_by_email(user_data.get("email")):
            raise DuplicateException("User", "email", user_data.get("email"))
        return self.insert_from_dict(user_data)

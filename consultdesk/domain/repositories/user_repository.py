"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from consultdesk.domain.models.user import User


class UserRepository(ABC):
    """Repository interface for User entity."""

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    def save(self, user: User) -> User:
        """Insert or update a user. Keeps a preset id on insert."""
        pass

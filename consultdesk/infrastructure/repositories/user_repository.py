"""
User repository implementation using SQLAlchemy.
"""

from typing import Optional

from sqlalchemy.orm import Session

from consultdesk.domain.models.user import User
from consultdesk.domain.repositories.user_repository import UserRepository as UserRepositoryInterface
from consultdesk.infrastructure.db.models import UserModel
from consultdesk.infrastructure.mappers.user_mapper import UserMapper


class SQLAlchemyUserRepository(UserRepositoryInterface):
    """SQLAlchemy implementation of user repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = UserMapper()
        self.model = UserModel

    def get_by_id(self, user_id: str) -> Optional[User]:
        model = self.session.get(UserModel, user_id)
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def save(self, user: User) -> User:
        model = self.session.get(UserModel, user.id) if user.id else None
        if model is None:
            model = self.mapper.domain_to_model(user)
            self.session.add(model)
        else:
            self.mapper.update_model(model, user)

        self.session.flush()
        user.id = model.id
        return user

"""
User mapper for converting between domain entities and database models.
"""

from consultdesk.domain.models.user import User
from consultdesk.infrastructure.db.models import UserModel, generate_id


class UserMapper:
    """Maps between User domain entity and UserModel database model."""

    def domain_to_model(self, user: User) -> UserModel:
        model = UserModel(id=user.id or generate_id(), created_at=user.created_at)
        self.update_model(model, user)
        return model

    def update_model(self, model: UserModel, user: User) -> None:
        model.username = user.username
        model.name = user.name
        model.email = user.email
        model.title = user.title
        model.address = user.address
        model.phone = user.phone
        model.updated_at = user.updated_at

    def model_to_domain(self, model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            name=model.name,
            email=model.email,
            title=model.title,
            address=model.address,
            phone=model.phone,
            created_at=model.created_at,
            updated_at=model.updated_at
        )

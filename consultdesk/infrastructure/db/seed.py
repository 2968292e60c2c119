"""
Demo identity seeding.
The configured demo user owns every record and signs the invoice document.
"""

import logging

from sqlalchemy.orm import Session

from consultdesk.config import Settings, settings as default_settings
from consultdesk.domain.models.user import User
from consultdesk.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


logger = logging.getLogger(__name__)


def seed_demo_user(session: Session, settings: Settings = default_settings) -> User:
    """Insert the demo user, or refresh its profile from settings. Commits."""
    repository = SQLAlchemyUserRepository(session)
    user = repository.get_by_id(settings.demo_user_id)

    if user is None:
        user = User(
            id=settings.demo_user_id,
            username=settings.demo_user_username,
            name=settings.demo_user_name,
            email=settings.demo_user_email,
            title=settings.demo_user_title,
            address=settings.demo_user_address,
            phone=settings.demo_user_phone
        )
        logger.info(f"Seeding demo user {user.id}")
    else:
        user.name = settings.demo_user_name
        user.email = settings.demo_user_email
        user.title = settings.demo_user_title
        user.address = settings.demo_user_address
        user.phone = settings.demo_user_phone
        user.validate()
        user.mark_as_updated()

    repository.save(user)
    session.commit()
    return user

"""
Current-user dependency for FastAPI.
There is no login: every request acts as the configured demo user. Tests
and future real authentication replace this dependency.
"""

from typing import Annotated

from fastapi import Depends

from consultdesk.config import settings


def get_current_user_id() -> str:
    """FastAPI dependency returning the id of the acting user."""
    return settings.demo_user_id


CurrentUserId = Annotated[str, Depends(get_current_user_id)]

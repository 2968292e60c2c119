"""
Authentication stand-in.
A configured demo identity owns every request.
"""

from .dependencies import get_current_user_id, CurrentUserId

__all__ = ["get_current_user_id", "CurrentUserId"]

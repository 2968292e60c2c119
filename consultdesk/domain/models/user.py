"""
User domain model.
The consultant account that owns every other record.
"""

from dataclasses import dataclass
from typing import Optional

from consultdesk.domain.models.base import BaseEntity, ValidationError


@dataclass(eq=False)
class User(BaseEntity):
    """Consultant profile. Also used as the issuer block of invoices."""

    username: str
    name: str
    email: str
    title: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None

    def validate(self) -> None:
        if not self.username or not self.username.strip():
            raise ValidationError("Username is required", "username")
        if not self.name or not self.name.strip():
            raise ValidationError("Name is required", "name")
        if not self.email or "@" not in self.email:
            raise ValidationError("A valid email is required", "email")

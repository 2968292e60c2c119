"""
Base DTOs for the application layer.
Provides common patterns for request/response data transfer objects.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, field_validator


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(
        # Allow population by field name or alias
        populate_by_name=True,
        # Convert enum values to their values
        use_enum_values=True,
        # Validate assignment
        validate_assignment=True,
        # Unknown fields are a client error
        extra="forbid",
    )


class RequestDTO(BaseDTO):
    """Base class for request DTOs."""
    pass


class ResponseDTO(BaseDTO):
    """Base class for response DTOs."""

    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateRequestDTO(RequestDTO):
    """Base class for creation request DTOs."""
    pass


class UpdateRequestDTO(RequestDTO):
    """Base class for update request DTOs. Only fields sent by the client are applied."""

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ErrorResponseDTO(BaseDTO):
    """Shape of every error body."""

    error: str
    code: str
    message: str
    retryable: Optional[bool] = Field(
        default=None, description="Set on conflicts; true when repeating the request may succeed"
    )
    details: Optional[List[Dict[str, Any]]] = Field(
        default=None, description="Field errors of a rejected request body"
    )


def clean_tags(v: Optional[List[str]]) -> Optional[List[str]]:
    """Strip tags, dropping blanks and duplicates."""
    if v is None:
        return v
    cleaned = []
    for tag in v:
        tag = tag.strip()
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned


def strip_optional(v: Optional[str]) -> Optional[str]:
    """Blank strings become None."""
    if v is None:
        return None
    v = v.strip()
    return v or None


def require_text(v: str) -> str:
    if v is None or not v.strip():
        raise ValueError("must not be blank")
    return v.strip()


__all__ = [
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "CreateRequestDTO",
    "UpdateRequestDTO",
    "ErrorResponseDTO",
    "clean_tags",
    "strip_optional",
    "require_text",
    "Field",
    "field_validator",
]

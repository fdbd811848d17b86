"""Pydantic models for user profiles."""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, model_validator
from pydantic.alias_generators import to_camel


class User(BaseModel):
    """The profile of an account holder."""

    id: UUID
    name: str
    email: str
    image: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


class UserUpdate(BaseModel):
    """Partial profile update; omitted fields are left unchanged.

    ``image`` may be set to null to remove it, ``name`` may not.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    image: Optional[HttpUrl] = None

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {"name": "Ada Lovelace", "image": "https://cdn.example.com/ada.png"}
        }
    )

    @model_validator(mode="after")
    def check_name_not_null(self):
        if "name" in self.model_fields_set and self.name is None:
            raise ValueError("name must not be null")
        return self

    def changes(self) -> Dict[str, Any]:
        """Column values for the fields present in the request."""
        return self.model_dump(mode="json", include=self.model_fields_set)

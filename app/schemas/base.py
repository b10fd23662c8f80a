"""
HomeChef API - Base Schemas.

Shared configuration for the camelCase JSON wire format.
"""

from typing import Any, TypeVar

from beanie import Document
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


ResponseT = TypeVar("ResponseT", bound="DocumentResponse")


class CamelModel(BaseModel):
    """Model serialised as camelCase, accepting snake_case on input too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class DocumentResponse(CamelModel):
    """Response schema built from a Beanie document."""

    @classmethod
    def from_document(cls: type[ResponseT], document: Document, **extra: Any) -> ResponseT:
        """Validate a stored document (snake_case field names) into the response."""
        return cls.model_validate({**document.model_dump(), **extra})

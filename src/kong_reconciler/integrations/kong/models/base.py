"""Base models for Kong entity records.

An entity record is the wire shape of one Kong entity. Records are built from
declarative state right before a remote call and decoded from the response
right after it; they never outlive a single operation.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class KongEntityBase(BaseModel):
    """Base class for all Kong entity records.

    Kong responses carry more keys than a record models (``created_at``,
    ``tags``, nested references); those are ignored on decode.

    Attributes:
        id: Server-assigned identifier. Never sent in a request body.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
    )

    id: str | None = Field(default=None, description="Server-assigned identifier")

    _entity_name: ClassVar[str] = "entity"

    def to_payload(self) -> dict[str, Any]:
        """Convert the record to a request body.

        Drops ``id`` and every field holding an empty value so that Kong's
        own defaulting applies to anything not explicitly set.

        Returns:
            Dictionary suitable for a POST or PATCH request body.
        """
        return {
            k: v
            for k, v in self.model_dump(exclude={"id"}).items()
            if v is not None and v != ""
        }


class KongErrorBody(BaseModel):
    """Decoded body of a failed Kong Admin API call.

    Kong does not guarantee the shape of error bodies, so every key is kept.
    Only ``message`` and ``name`` are looked at when building an error.
    """

    model_config = ConfigDict(extra="allow")

    message: Any = None
    name: Any = None
    code: Any = None
    fields: Any = None

    def summary(self, status_code: int) -> str:
        """Return a one-line description of the failure.

        Args:
            status_code: HTTP status code of the failed response.

        Returns:
            Human-readable error message.
        """
        detail = str(self.message or self.name or f"Kong API error: {status_code}")
        if isinstance(self.fields, dict) and self.fields:
            invalid = ", ".join(f"{k}: {v}" for k, v in sorted(self.fields.items()))
            detail = f"{detail} ({invalid})"
        return detail

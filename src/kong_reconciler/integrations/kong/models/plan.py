"""Planned lifecycle operation for one reconciled entity."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Operation = Literal["create", "update", "delete", "noop"]


class ResourceDiff(BaseModel):
    """Difference between last-known and desired state of one entity.

    Values of sensitive fields are already redacted, so a diff is safe to
    log or display.

    Attributes:
        entity_type: Entity kind (consumer, jwt, ...).
        operation: Lifecycle operation that reconciles the difference.
        id: Remote identity, "" when the entity does not exist yet.
        changes: Field-level changes as (old, new) tuples.
    """

    model_config = ConfigDict(extra="forbid")

    entity_type: str = Field(description="Entity kind")
    operation: Operation = Field(description="Required operation")
    id: str = Field(default="", description="Remote identity")
    changes: dict[str, tuple[Any, Any]] = Field(
        default_factory=dict,
        description="Field changes as (old, new) tuples",
    )

    @property
    def has_changes(self) -> bool:
        """True unless nothing needs to be done."""
        return self.operation != "noop"

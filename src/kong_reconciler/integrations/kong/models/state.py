"""Declarative state of a single reconciled entity."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ResourceData(BaseModel):
    """The caller's record of one entity: declared values plus remote identity.

    ``id`` is empty until the entity exists in Kong. It is set once, by a
    create or an import, and cleared only when a read finds the entity gone.

    Attributes:
        id: Kong-assigned identifier, or "" when not realized remotely.
        values: Field name to declared or last-known value.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    id: str = ""
    values: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_new(self) -> bool:
        """True when the entity has no remote identity."""
        return not self.id

    def get(self, name: str, default: Any = "") -> Any:
        """Return a field value, or default when unset."""
        return self.values.get(name, default)

    def set(self, name: str, value: Any) -> None:
        """Set a field value."""
        self.values[name] = value

    def set_id(self, entity_id: str | None) -> None:
        """Set the remote identity. None and "" both mean absent."""
        self.id = entity_id or ""

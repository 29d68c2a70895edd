"""Schema declarations for reconcilable Kong entity kinds.

A schema lists the fields a caller may declare for one entity kind, with the
flags a diff or plan needs to present them (required, sensitive) and the
empty value each field takes when unset.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

REDACTED = "(sensitive)"


class FieldSchema(BaseModel):
    """Declaration of one declarative field.

    Attributes:
        name: Field name in declarative state.
        type: Value type of the field.
        required: Whether the caller must declare the field.
        sensitive: Whether the value must be redacted wherever it is displayed.
        default: Value the field takes when unset.
        description: Human-readable description.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    type: Literal["string", "integer"] = "string"
    required: bool = False
    sensitive: bool = False
    default: Any = ""
    description: str = ""


class EntitySchema(BaseModel):
    """Field declarations of one entity kind."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: str = Field(description="Entity kind (consumer, jwt, ...)")
    fields: tuple[FieldSchema, ...] = Field(default=())

    @property
    def field_names(self) -> list[str]:
        """Names of all declared fields, in declaration order."""
        return [f.name for f in self.fields]

    @property
    def sensitive_fields(self) -> frozenset[str]:
        """Names of fields whose values must be redacted."""
        return frozenset(f.name for f in self.fields if f.sensitive)

    def get_field(self, name: str) -> FieldSchema:
        """Look up a field declaration by name.

        Raises:
            KeyError: If the kind declares no such field.
        """
        for field in self.fields:
            if field.name == name:
                return field
        raise KeyError(f"{self.kind} has no field '{name}'")

    def defaults(self) -> dict[str, Any]:
        """Return the value map of an entity with nothing declared."""
        return {f.name: f.default for f in self.fields}

    def missing_required(self, values: dict[str, Any]) -> list[str]:
        """Return required fields that are unset in values."""
        return [
            f.name
            for f in self.fields
            if f.required and values.get(f.name) in (None, "")
        ]

    def redact(self, values: dict[str, Any]) -> dict[str, Any]:
        """Return a copy of values with sensitive, non-empty values masked."""
        sensitive = self.sensitive_fields
        return {
            k: REDACTED if k in sensitive and v not in (None, "") else v
            for k, v in values.items()
        }

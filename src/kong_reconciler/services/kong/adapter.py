"""Entity adapters: translation between declarative state and Kong records.

An adapter captures everything that differs between entity kinds: the record
model, the schema, and where the kind lives in the Admin API. The
reconciliation engine is written once against this interface.
"""

from __future__ import annotations

from abc import ABC
from typing import Any, ClassVar

from kong_reconciler.integrations.kong.client import quote_segment
from kong_reconciler.integrations.kong.models.base import KongEntityBase
from kong_reconciler.integrations.kong.models.consumer import Credential
from kong_reconciler.integrations.kong.models.schema import EntitySchema
from kong_reconciler.integrations.kong.models.state import ResourceData


class EntityAdapter[T: KongEntityBase](ABC):
    """Base adapter for a top-level Kong entity kind.

    Class Attributes:
        _endpoint: Collection path of the kind (e.g. "consumers/").
        _entity_name: Entity kind, used in messages and logs.
        _model_class: Pydantic record class of the kind.
        schema: Field declarations of the kind.

    Example:
        >>> class ConsumerAdapter(EntityAdapter[Consumer]):
        ...     _endpoint = "consumers/"
        ...     _entity_name = "consumer"
        ...     _model_class = Consumer
        ...     schema = CONSUMER_SCHEMA
    """

    _endpoint: ClassVar[str] = ""
    _entity_name: ClassVar[str] = ""
    _model_class: type[T]
    schema: ClassVar[EntitySchema]

    @property
    def entity_name(self) -> str:
        """Return the entity kind handled by this adapter."""
        return self._entity_name

    def record_values(self, state: ResourceData) -> dict[str, Any]:
        """Collect the record fields of state, empty values normalized to None."""
        values: dict[str, Any] = {}
        for field in self.schema.fields:
            if field.name not in self._model_class.model_fields:
                continue
            value = state.get(field.name, field.default)
            values[field.name] = None if value == "" else value
        return values

    def to_record(self, state: ResourceData) -> T:
        """Build the wire record for state."""
        values = {"id": state.id or None, **self.record_values(state)}
        return self._model_class.model_validate(values)

    def from_response(self, body: dict[str, Any], state: ResourceData) -> T:
        """Decode a response body into a record of this kind.

        Args:
            body: Decoded response body.
            state: The state the request was made for.
        """
        return self._model_class.model_validate(body)

    def apply_record(self, state: ResourceData, record: T) -> None:
        """Write every record field back into state.

        Fields Kong leaves unset take their schema default, so state mirrors
        the remote entity exactly. The identity only changes when the record
        carries one.
        """
        if record.id:
            state.set_id(record.id)
        for field in self.schema.fields:
            if field.name not in self._model_class.model_fields:
                continue
            value = getattr(record, field.name)
            state.set(field.name, field.default if value is None else value)

    def collection_path(self, state: ResourceData) -> tuple[str, ...]:
        """Path segments of the collection the entity lives in."""
        return (self._endpoint,)

    def entity_path(self, state: ResourceData) -> tuple[str, ...]:
        """Path segments addressing the entity itself."""
        return (*self.collection_path(state), quote_segment(state.id))

    def split_import_id(self, external_id: str) -> tuple[dict[str, Any], str]:
        """Split an import identifier into owner values and entity identity.

        Returns:
            Tuple of (values to set before reading, remote identity).

        Raises:
            ValueError: If the identifier is empty.
        """
        if not external_id:
            raise ValueError(f"An id is required to import a {self._entity_name}")
        return {}, external_id


class CredentialAdapter[T: Credential](EntityAdapter[T]):
    """Base adapter for credential kinds nested under a consumer.

    The owning consumer is read from the ``consumer`` field of state. It
    scopes every request path and is never part of a request or response
    body, so it survives every round trip unchanged.

    Class Attributes:
        _credential_path: Sub-collection under the consumer (e.g. "jwt/").
        _owner_field: Declarative field naming the owning consumer.
    """

    _endpoint: ClassVar[str] = "consumers/"
    _credential_path: ClassVar[str] = ""
    _owner_field: ClassVar[str] = "consumer"

    def owner(self, state: ResourceData) -> str:
        """Return the owning consumer of state.

        Raises:
            ValueError: If state names no consumer.
        """
        owner = state.get(self._owner_field)
        if not owner:
            raise ValueError(f"A {self._entity_name} credential requires a {self._owner_field}")
        return str(owner)

    def to_record(self, state: ResourceData) -> T:
        """Build the wire record for state, carrying the owner reference."""
        record = super().to_record(state)
        record.owner = self.owner(state)
        return record

    def from_response(self, body: dict[str, Any], state: ResourceData) -> T:
        """Decode a response body, re-attaching the owner from state."""
        record = super().from_response(body, state)
        record.owner = self.owner(state)
        return record

    def collection_path(self, state: ResourceData) -> tuple[str, ...]:
        """Path segments of the credential collection of the owning consumer."""
        return (self._endpoint, f"{quote_segment(self.owner(state))}/", self._credential_path)

    def split_import_id(self, external_id: str) -> tuple[dict[str, Any], str]:
        """Split ``<consumer>/<credential-id>`` into owner and identity.

        Raises:
            ValueError: If the identifier is not of that form.
        """
        owner, sep, credential_id = external_id.partition("/")
        if not sep or not owner or not credential_id or "/" in credential_id:
            raise ValueError(
                f"Invalid {self._entity_name} import id '{external_id}': "
                f"expected <{self._owner_field}>/<credential-id>"
            )
        return {self._owner_field: owner}, credential_id

"""Reconciliation engine for Kong entities.

This module provides the generic lifecycle protocol (create, read, update,
delete, import) shared by every entity kind. Kind-specific details (record
model, schema, request paths) come from an EntityAdapter; the engine owns
request construction, status code interpretation and error classification.

Status code contract:
    201 create, 200 read/update, 204 delete succeed. A 404 on read means the
    entity is gone and is not an error. A 409 on create is a conflict to be
    resolved by importing. Anything else is a KongRemoteError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from kong_reconciler.integrations.kong.exceptions import (
    KongConflictError,
    KongNotFoundError,
    KongRemoteError,
    KongTransportError,
)
from kong_reconciler.integrations.kong.models.base import KongEntityBase
from kong_reconciler.integrations.kong.models.plan import ResourceDiff
from kong_reconciler.integrations.kong.models.schema import REDACTED
from kong_reconciler.integrations.kong.models.state import ResourceData

if TYPE_CHECKING:
    from kong_reconciler.integrations.kong.client import KongAdminClient, KongResponse
    from kong_reconciler.services.kong.adapter import EntityAdapter

logger = structlog.get_logger()


class ReconciliationEngine[T: KongEntityBase]:
    """Drive one entity kind through its lifecycle against Kong.

    The engine keeps no state between calls: every operation takes the
    caller's ResourceData, works on a copy and returns the copy. A failed
    operation therefore leaves the caller's state untouched. Operations are
    never retried; retry policy belongs to the caller.

    Type Parameters:
        T: The record model of the entity kind.

    Example:
        >>> engine = ReconciliationEngine(client, JWTCredentialAdapter())
        >>> state = engine.import_state("c-123/cred-456")
        >>> state.id, state.get("consumer")
        ('cred-456', 'c-123')
    """

    def __init__(self, client: KongAdminClient, adapter: EntityAdapter[T]) -> None:
        """Initialize the engine.

        Args:
            client: Kong Admin API client, shared between engines.
            adapter: Adapter of the entity kind to reconcile.
        """
        self._client = client
        self._adapter = adapter
        self._log = logger.bind(entity=adapter.entity_name)

    @property
    def adapter(self) -> EntityAdapter[T]:
        """Return the adapter of the reconciled entity kind."""
        return self._adapter

    @property
    def entity_name(self) -> str:
        """Return the reconciled entity kind."""
        return self._adapter.entity_name

    # =========================================================================
    # Lifecycle Operations
    # =========================================================================

    def create(self, state: ResourceData) -> ResourceData:
        """Create the entity in Kong.

        Args:
            state: State of an entity not yet realized remotely.

        Returns:
            A copy of state holding the created entity and its new identity.

        Raises:
            ValueError: If state already has an identity or lacks required fields.
            KongConflictError: If an equivalent entity already exists (409).
            KongRemoteError: If Kong answers anything but 201.
            KongTransportError: If the call could not be completed.
        """
        if not state.is_new:
            raise ValueError(
                f"{self.entity_name} '{state.id}' already exists remotely; update it instead"
            )
        self._check_required(state)

        result = state.model_copy(deep=True)
        record = self._adapter.to_record(result)
        payload = record.to_payload()

        self._log.info("creating_entity", payload=self._adapter.schema.redact(payload))
        response = self._send(
            "creating", "POST", self._adapter.collection_path(result), json=payload
        )

        if response.status_code == 409:
            self._log.warning("entity_conflict", endpoint=response.endpoint)
            raise KongConflictError.from_response(
                response.status_code,
                response.body,
                response.endpoint,
                entity_name=self.entity_name,
            )
        self._expect(response, 201)

        self._adapter.apply_record(result, self._adapter.from_response(response.body, result))
        self._log.info("created_entity", id=result.id)
        return result

    def read(self, state: ResourceData) -> ResourceData:
        """Refresh state from Kong.

        A 404 means the entity no longer exists: the returned copy has its
        identity cleared so it gets created again on the next apply.

        Args:
            state: State of an entity realized remotely.

        Returns:
            A copy of state mirroring the remote entity, or with an empty
            identity when the entity is gone.

        Raises:
            ValueError: If state has no identity.
            KongRemoteError: If Kong answers anything but 200 or 404.
            KongTransportError: If the call could not be completed.
        """
        self._require_identity(state, "read")

        result = state.model_copy(deep=True)
        self._log.debug("reading_entity", id=result.id)
        response = self._send("reading", "GET", self._adapter.entity_path(result))

        if response.status_code == 404:
            self._log.info("entity_absent", id=result.id)
            result.set_id("")
            return result
        self._expect(response, 200)

        self._adapter.apply_record(result, self._adapter.from_response(response.body, result))
        self._log.debug("read_entity", id=result.id)
        return result

    def update(self, state: ResourceData) -> ResourceData:
        """Send the complete current state of the entity to Kong.

        Every non-empty field is sent, not just the changed ones; empty fields
        are omitted and therefore keep their remote value.

        Args:
            state: State of an entity realized remotely.

        Returns:
            A copy of state mirroring the updated entity.

        Raises:
            ValueError: If state has no identity or lacks required fields.
            KongRemoteError: If Kong answers anything but 200.
            KongTransportError: If the call could not be completed.
        """
        self._require_identity(state, "update")
        self._check_required(state)

        result = state.model_copy(deep=True)
        payload = self._adapter.to_record(result).to_payload()

        self._log.info(
            "updating_entity", id=result.id, payload=self._adapter.schema.redact(payload)
        )
        response = self._send(
            "updating", "PATCH", self._adapter.entity_path(result), json=payload
        )
        self._expect(response, 200)

        self._adapter.apply_record(result, self._adapter.from_response(response.body, result))
        self._log.info("updated_entity", id=result.id)
        return result

    def delete(self, state: ResourceData) -> None:
        """Delete the entity from Kong.

        The identity of state is left as is; callers drop the state once the
        delete succeeded.

        Raises:
            ValueError: If state has no identity.
            KongRemoteError: If Kong answers anything but 204.
            KongTransportError: If the call could not be completed.
        """
        self._require_identity(state, "delete")

        self._log.info("deleting_entity", id=state.id)
        response = self._send("deleting", "DELETE", self._adapter.entity_path(state))
        self._expect(response, 204)
        self._log.info("deleted_entity", id=state.id)

    def import_state(self, external_id: str) -> ResourceData:
        """Bring an existing Kong entity under management.

        Credential kinds take ``<consumer>/<credential-id>``: the consumer is
        set first, then the credential is read by its own id.

        Args:
            external_id: Identity of the entity to import.

        Returns:
            Fully hydrated state of the entity.

        Raises:
            ValueError: If external_id is malformed for this kind.
            KongNotFoundError: If Kong has no such entity.
            KongRemoteError: If Kong answers anything but 200 or 404.
            KongTransportError: If the call could not be completed.
        """
        owner_values, entity_id = self._adapter.split_import_id(external_id)

        state = ResourceData(id=entity_id, values=self._adapter.schema.defaults())
        for name, value in owner_values.items():
            state.set(name, value)

        self._log.info("importing_entity", external_id=external_id)
        imported = self.read(state)
        if imported.is_new:
            raise KongNotFoundError(resource_type=self.entity_name, resource_id=external_id)

        self._log.info("imported_entity", id=imported.id)
        return imported

    # =========================================================================
    # Planning
    # =========================================================================

    def plan(
        self,
        state: ResourceData,
        desired: dict[str, Any],
        *,
        destroy: bool = False,
    ) -> ResourceDiff:
        """Work out which lifecycle operation reconciles state with desired.

        Desired fields left empty are not managed: Kong keeps (or generates)
        their value, so they never cause an update on their own.

        Args:
            state: Last-known state, typically fresh from read().
            desired: Declared field values.
            destroy: Whether the entity should no longer exist.

        Returns:
            The planned operation with redacted field changes.
        """
        if destroy:
            return ResourceDiff(
                entity_type=self.entity_name,
                operation="noop" if state.is_new else "delete",
                id=state.id,
            )

        changes: dict[str, tuple[Any, Any]] = {}
        for field in self._adapter.schema.fields:
            new = desired.get(field.name, field.default)
            if new in (None, ""):
                continue
            old = None if state.is_new else state.get(field.name, field.default)
            if old != new:
                changes[field.name] = (old, new)

        if state.is_new:
            operation = "create"
        else:
            operation = "update" if changes else "noop"

        return ResourceDiff(
            entity_type=self.entity_name,
            operation=operation,
            id=state.id,
            changes=self._redact_changes(changes),
        )

    def apply(
        self,
        state: ResourceData,
        desired: dict[str, Any],
        *,
        destroy: bool = False,
    ) -> ResourceData | None:
        """Reconcile one entity: plan, then run the planned operation.

        Args:
            state: Last-known state, typically fresh from read().
            desired: Declared field values.
            destroy: Whether the entity should no longer exist.

        Returns:
            The reconciled state, or None once the entity was deleted.
        """
        diff = self.plan(state, desired, destroy=destroy)
        self._log.info(
            "applying_plan", operation=diff.operation, id=diff.id, changes=diff.changes
        )

        if diff.operation == "noop":
            return None if destroy else state.model_copy(deep=True)
        if diff.operation == "delete":
            self.delete(state)
            return None

        target = state.model_copy(deep=True)
        for name, value in desired.items():
            target.set(name, value)

        if diff.operation == "create":
            return self.create(target)
        return self.update(target)

    # =========================================================================
    # Internals
    # =========================================================================

    def _send(
        self,
        verb: str,
        method: str,
        segments: tuple[str, ...],
        json: dict[str, Any] | None = None,
    ) -> KongResponse:
        """Issue one request, naming the operation in transport failures."""
        try:
            return self._client.request(method, *segments, json=json)
        except KongTransportError as e:
            self._log.error("transport_failed", operation=verb, error=str(e))
            raise KongTransportError(
                message=f"Error while {verb} {self.entity_name}: {e.message}",
                endpoint=e.endpoint,
                original_error=e.original_error or e,
            ) from e

    def _expect(self, response: KongResponse, status_code: int) -> None:
        """Raise KongRemoteError unless response has the given status."""
        if response.status_code == status_code:
            return
        error = KongRemoteError.from_response(
            response.status_code, response.body, response.endpoint
        )
        self._log.error(
            "unexpected_status",
            status=response.status_code,
            expected=status_code,
            error=error.message,
        )
        raise error

    def _require_identity(self, state: ResourceData, operation: str) -> None:
        if state.is_new:
            raise ValueError(
                f"Cannot {operation} a {self.entity_name} that does not exist remotely"
            )

    def _check_required(self, state: ResourceData) -> None:
        missing = self._adapter.schema.missing_required(state.values)
        if missing:
            raise ValueError(
                f"{self.entity_name} is missing required fields: {', '.join(missing)}"
            )

    def _redact_changes(
        self, changes: dict[str, tuple[Any, Any]]
    ) -> dict[str, tuple[Any, Any]]:
        sensitive = self._adapter.schema.sensitive_fields
        return {
            name: (
                REDACTED if old not in (None, "") else old,
                REDACTED if new not in (None, "") else new,
            )
            if name in sensitive
            else (old, new)
            for name, (old, new) in changes.items()
        }

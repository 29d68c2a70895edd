"""Unit tests for Kong records, schemas and declarative state."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from kong_reconciler.integrations.kong.models import (
    Consumer,
    EntitySchema,
    FieldSchema,
    JWTCredential,
    ResourceData,
    ResourceDiff,
)


class TestKongEntityBase:
    """Tests for record payload building."""

    @pytest.mark.unit
    def test_payload_excludes_id(self) -> None:
        """The server-assigned id should never be sent."""
        consumer = Consumer(id="u1", username="alice")

        assert consumer.to_payload() == {"username": "alice"}

    @pytest.mark.unit
    def test_payload_omits_empty_values(self) -> None:
        """None and empty strings should be left to Kong's defaults."""
        consumer = Consumer(username="alice", custom_id="")

        assert consumer.to_payload() == {"username": "alice"}

    @pytest.mark.unit
    def test_unknown_response_keys_ignored(self) -> None:
        """Extra keys in Kong responses should not fail decoding."""
        consumer = Consumer.model_validate(
            {"id": "u1", "username": "alice", "created_at": 1700000000, "tags": None}
        )

        assert consumer.id == "u1"
        assert consumer.custom_id is None


class TestCredentialRecords:
    """Tests for credential records."""

    @pytest.mark.unit
    def test_owner_never_serialized(self) -> None:
        """The owning consumer should be kept out of the body."""
        credential = JWTCredential(owner="c-1", key="iss", algorithm="HS256", secret="s3cr3t")

        payload = credential.to_payload()

        assert payload == {"key": "iss", "algorithm": "HS256", "secret": "s3cr3t"}
        assert "owner" not in payload
        assert "consumer" not in payload

    @pytest.mark.unit
    def test_response_consumer_reference_ignored(self) -> None:
        """The consumer object in Kong responses should not populate the owner."""
        credential = JWTCredential.model_validate(
            {"id": "j-1", "key": "iss", "consumer": {"id": "c-1"}}
        )

        assert credential.owner is None
        assert credential.key == "iss"


class TestEntitySchema:
    """Tests for EntitySchema helpers."""

    @pytest.fixture
    def schema(self) -> EntitySchema:
        """Create a small schema with a sensitive and a required field."""
        return EntitySchema(
            kind="sample",
            fields=(
                FieldSchema(name="name"),
                FieldSchema(name="secret", sensitive=True),
                FieldSchema(name="owner", required=True),
            ),
        )

    @pytest.mark.unit
    def test_defaults(self, schema: EntitySchema) -> None:
        """Unset fields should take their declared default."""
        assert schema.defaults() == {"name": "", "secret": "", "owner": ""}

    @pytest.mark.unit
    def test_sensitive_fields(self, schema: EntitySchema) -> None:
        """Sensitive flags should be collected by name."""
        assert schema.sensitive_fields == frozenset({"secret"})

    @pytest.mark.unit
    def test_redact_masks_only_set_sensitive_values(self, schema: EntitySchema) -> None:
        """Sensitive values should be masked; empty ones stay visibly empty."""
        assert schema.redact({"name": "a", "secret": "s"}) == {
            "name": "a",
            "secret": "(sensitive)",
        }
        assert schema.redact({"secret": ""}) == {"secret": ""}

    @pytest.mark.unit
    def test_missing_required(self, schema: EntitySchema) -> None:
        """Unset required fields should be reported."""
        assert schema.missing_required({"name": "a"}) == ["owner"]
        assert schema.missing_required({"owner": "c-1"}) == []

    @pytest.mark.unit
    def test_get_field(self, schema: EntitySchema) -> None:
        """Fields should be looked up by name."""
        assert schema.get_field("secret").sensitive is True
        with pytest.raises(KeyError):
            schema.get_field("missing")

    @pytest.mark.unit
    def test_schema_is_frozen(self, schema: EntitySchema) -> None:
        """Schemas are shared between adapters and must not change."""
        with pytest.raises(ValidationError):
            schema.kind = "other"  # type: ignore[misc]


class TestResourceData:
    """Tests for declarative state."""

    @pytest.mark.unit
    def test_new_state_has_no_identity(self) -> None:
        """A fresh state should not be realized remotely."""
        state = ResourceData(values={"username": "alice"})

        assert state.is_new
        assert state.id == ""

    @pytest.mark.unit
    def test_get_returns_default_for_unset(self) -> None:
        """Unset fields should read as the given default."""
        state = ResourceData()

        assert state.get("username") == ""
        assert state.get("ttl", None) is None

    @pytest.mark.unit
    def test_set_id_none_means_absent(self) -> None:
        """Clearing the identity with None should leave it empty."""
        state = ResourceData(id="u1")

        state.set_id(None)

        assert state.is_new


class TestResourceDiff:
    """Tests for ResourceDiff."""

    @pytest.mark.unit
    def test_noop_has_no_changes(self) -> None:
        """A noop diff should report nothing to do."""
        diff = ResourceDiff(entity_type="consumer", operation="noop", id="u1")

        assert not diff.has_changes

    @pytest.mark.unit
    def test_invalid_operation_rejected(self) -> None:
        """Only lifecycle operations should be accepted."""
        with pytest.raises(ValidationError):
            ResourceDiff(entity_type="consumer", operation="upsert")  # type: ignore[arg-type]

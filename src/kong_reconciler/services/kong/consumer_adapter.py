"""Adapter for Kong Consumers."""

from __future__ import annotations

from kong_reconciler.integrations.kong.models.consumer import Consumer
from kong_reconciler.integrations.kong.models.schema import EntitySchema, FieldSchema
from kong_reconciler.services.kong.adapter import EntityAdapter

CONSUMER_SCHEMA = EntitySchema(
    kind="consumer",
    fields=(
        FieldSchema(
            name="username",
            description=(
                "The username of the consumer. You must send either this field "
                "or custom_id with the request."
            ),
        ),
        FieldSchema(
            name="custom_id",
            description=(
                "Field for storing an existing ID for the consumer, useful for mapping "
                "Kong with users in your existing database. You must send either this "
                "field or username with the request."
            ),
        ),
    ),
)


class ConsumerAdapter(EntityAdapter[Consumer]):
    """Adapter for Kong Consumer entities.

    Example:
        >>> engine = ReconciliationEngine(client, ConsumerAdapter())
        >>> state = engine.create(ResourceData(values={"username": "alice"}))
        >>> state.id
        'u1'
    """

    _endpoint = "consumers/"
    _entity_name = "consumer"
    _model_class = Consumer
    schema = CONSUMER_SCHEMA

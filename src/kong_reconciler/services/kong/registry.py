"""Registry of reconcilable entity kinds."""

from __future__ import annotations

from typing import Any

from kong_reconciler.services.kong.adapter import EntityAdapter
from kong_reconciler.services.kong.consumer_adapter import ConsumerAdapter
from kong_reconciler.services.kong.credential_adapters import (
    HMACAuthCredentialAdapter,
    JWTCredentialAdapter,
    KeyAuthCredentialAdapter,
)

# Mapping of entity kinds to adapter classes
ADAPTER_TYPES: dict[str, type[EntityAdapter[Any]]] = {
    "consumer": ConsumerAdapter,
    "jwt": JWTCredentialAdapter,
    "key-auth": KeyAuthCredentialAdapter,
    "hmac-auth": HMACAuthCredentialAdapter,
}


def get_adapter(kind: str) -> EntityAdapter[Any]:
    """Get an adapter instance for an entity kind.

    Args:
        kind: Entity kind (consumer, jwt, key-auth, hmac-auth).

    Returns:
        A new adapter for the kind.

    Raises:
        ValueError: If the kind is unknown.
    """
    adapter_class = ADAPTER_TYPES.get(kind)
    if adapter_class is None:
        valid_kinds = ", ".join(ADAPTER_TYPES.keys())
        raise ValueError(f"Unknown entity kind: {kind}. Valid kinds: {valid_kinds}")
    return adapter_class()

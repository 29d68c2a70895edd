"""Kong reconciliation service layer.

One generic ReconciliationEngine drives every entity kind through its
lifecycle; per-kind EntityAdapters describe records, schemas and paths.
"""

from kong_reconciler.services.kong.adapter import CredentialAdapter, EntityAdapter
from kong_reconciler.services.kong.consumer_adapter import CONSUMER_SCHEMA, ConsumerAdapter
from kong_reconciler.services.kong.credential_adapters import (
    HMAC_AUTH_SCHEMA,
    JWT_SCHEMA,
    KEY_AUTH_SCHEMA,
    HMACAuthCredentialAdapter,
    JWTCredentialAdapter,
    KeyAuthCredentialAdapter,
)
from kong_reconciler.services.kong.engine import ReconciliationEngine
from kong_reconciler.services.kong.registry import ADAPTER_TYPES, get_adapter

__all__ = [
    "ADAPTER_TYPES",
    "CONSUMER_SCHEMA",
    "HMAC_AUTH_SCHEMA",
    "JWT_SCHEMA",
    "KEY_AUTH_SCHEMA",
    "ConsumerAdapter",
    "CredentialAdapter",
    "EntityAdapter",
    "HMACAuthCredentialAdapter",
    "JWTCredentialAdapter",
    "KeyAuthCredentialAdapter",
    "ReconciliationEngine",
    "get_adapter",
]

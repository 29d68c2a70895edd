"""Kong entity records and declarative state models."""

from kong_reconciler.integrations.kong.models.base import KongEntityBase, KongErrorBody
from kong_reconciler.integrations.kong.models.consumer import (
    Consumer,
    Credential,
    HMACAuthCredential,
    JWTCredential,
    KeyAuthCredential,
)
from kong_reconciler.integrations.kong.models.plan import Operation, ResourceDiff
from kong_reconciler.integrations.kong.models.schema import EntitySchema, FieldSchema
from kong_reconciler.integrations.kong.models.state import ResourceData

__all__ = [
    "Consumer",
    "Credential",
    "EntitySchema",
    "FieldSchema",
    "HMACAuthCredential",
    "JWTCredential",
    "KeyAuthCredential",
    "KongEntityBase",
    "KongErrorBody",
    "Operation",
    "ResourceData",
    "ResourceDiff",
]

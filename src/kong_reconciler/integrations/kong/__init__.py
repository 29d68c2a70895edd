"""Kong Gateway integration - HTTP transport, configuration and entity models."""

from kong_reconciler.integrations.kong.client import KongAdminClient, KongResponse
from kong_reconciler.integrations.kong.config import (
    KongAuthConfig,
    KongConnectionConfig,
    ReconcilerConfig,
)
from kong_reconciler.integrations.kong.exceptions import (
    KongAPIError,
    KongConfigError,
    KongConflictError,
    KongNotFoundError,
    KongRemoteError,
    KongTransportError,
)

__all__ = [
    "KongAPIError",
    "KongAdminClient",
    "KongAuthConfig",
    "KongConfigError",
    "KongConflictError",
    "KongConnectionConfig",
    "KongNotFoundError",
    "KongRemoteError",
    "KongResponse",
    "KongTransportError",
    "ReconcilerConfig",
]

"""Adapters for consumer credential kinds.

Every credential kind lives at ``consumers/{consumer}/{kind}/`` and declares
the owning consumer in its ``consumer`` field. Import identifiers take the
form ``<consumer>/<credential-id>``.
"""

from __future__ import annotations

from kong_reconciler.integrations.kong.models.consumer import (
    HMACAuthCredential,
    JWTCredential,
    KeyAuthCredential,
)
from kong_reconciler.integrations.kong.models.schema import EntitySchema, FieldSchema
from kong_reconciler.services.kong.adapter import CredentialAdapter

CONSUMER_FIELD = FieldSchema(
    name="consumer",
    required=True,
    description="The id of the consumer owning this credential.",
)

JWT_SCHEMA = EntitySchema(
    kind="jwt",
    fields=(
        FieldSchema(
            name="key",
            description=(
                "A unique string identifying the credential. "
                "If left out, it will be auto-generated."
            ),
        ),
        FieldSchema(
            name="algorithm",
            description=(
                "The algorithm used to verify the token's signature. Can be HS256 or RS256."
            ),
        ),
        FieldSchema(
            name="rsa_public_key",
            description=(
                "If algorithm is RS256, the public key (in PEM format) to use to "
                "verify the token's signature."
            ),
        ),
        FieldSchema(
            name="secret",
            sensitive=True,
            description=(
                "If algorithm is HS256, the secret used to sign JWTs for this "
                "credential. If left out, will be auto-generated."
            ),
        ),
        CONSUMER_FIELD,
    ),
)

KEY_AUTH_SCHEMA = EntitySchema(
    kind="key-auth",
    fields=(
        FieldSchema(
            name="key",
            sensitive=True,
            description="The API key. If left out, it will be auto-generated.",
        ),
        CONSUMER_FIELD,
    ),
)

HMAC_AUTH_SCHEMA = EntitySchema(
    kind="hmac-auth",
    fields=(
        FieldSchema(
            name="username",
            description="The username to use in the HMAC signature verification.",
        ),
        FieldSchema(
            name="secret",
            sensitive=True,
            description=(
                "The secret to use in the HMAC signature verification. "
                "If left out, it will be auto-generated."
            ),
        ),
        CONSUMER_FIELD,
    ),
)


class JWTCredentialAdapter(CredentialAdapter[JWTCredential]):
    """Adapter for JWT credentials (``consumers/{consumer}/jwt/``)."""

    _credential_path = "jwt/"
    _entity_name = "jwt"
    _model_class = JWTCredential
    schema = JWT_SCHEMA


class KeyAuthCredentialAdapter(CredentialAdapter[KeyAuthCredential]):
    """Adapter for key-auth credentials (``consumers/{consumer}/key-auth/``)."""

    _credential_path = "key-auth/"
    _entity_name = "key-auth"
    _model_class = KeyAuthCredential
    schema = KEY_AUTH_SCHEMA


class HMACAuthCredentialAdapter(CredentialAdapter[HMACAuthCredential]):
    """Adapter for hmac-auth credentials (``consumers/{consumer}/hmac-auth/``)."""

    _credential_path = "hmac-auth/"
    _entity_name = "hmac-auth"
    _model_class = HMACAuthCredential
    schema = HMAC_AUTH_SCHEMA

"""Pydantic records for Kong Consumers and their credentials.

A Consumer represents a user or application consuming APIs through Kong.
Credentials are nested under a consumer: the owning consumer is part of the
request path (``consumers/{consumer}/jwt/``) and never of the request body.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from kong_reconciler.integrations.kong.models.base import KongEntityBase


class Consumer(KongEntityBase):
    """Kong Consumer record.

    Kong requires at least one of username or custom_id; that rule is left
    to Kong so the error reported is Kong's own.

    Attributes:
        username: Consumer username (unique).
        custom_id: Identifier mapping the consumer to an external user store.
    """

    _entity_name: ClassVar[str] = "consumer"

    username: str | None = Field(default=None, description="Consumer username (unique)")
    custom_id: str | None = Field(default=None, description="Custom identifier (unique)")


class Credential(KongEntityBase):
    """Base record for consumer credentials.

    Attributes:
        owner: Identity of the owning consumer. Used to build request paths,
            excluded from every serialized body.
    """

    _entity_name: ClassVar[str] = "credential"

    owner: str | None = Field(default=None, exclude=True, description="Owning consumer")


class JWTCredential(Credential):
    """JWT credential, used with the jwt plugin.

    Attributes:
        key: Unique key identifying the credential (the ``iss`` claim).
        algorithm: Signature algorithm, HS256 or RS256.
        rsa_public_key: PEM public key for RS256.
        secret: Signing secret for HS256.
    """

    _entity_name: ClassVar[str] = "jwt"

    key: str | None = Field(default=None, description="JWT key (iss claim)")
    algorithm: str | None = Field(default=None, description="Signing algorithm")
    rsa_public_key: str | None = Field(default=None, description="RSA public key for RS256")
    secret: str | None = Field(default=None, description="Secret for HS256")


class KeyAuthCredential(Credential):
    """Key authentication credential, used with the key-auth plugin.

    Attributes:
        key: The API key. Generated by Kong when omitted.
    """

    _entity_name: ClassVar[str] = "key-auth"

    key: str | None = Field(default=None, description="API key value")


class HMACAuthCredential(Credential):
    """HMAC authentication credential, used with the hmac-auth plugin."""

    _entity_name: ClassVar[str] = "hmac-auth"

    username: str | None = Field(default=None, description="HMAC username")
    secret: str | None = Field(default=None, description="HMAC secret key")

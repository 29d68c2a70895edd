"""Integration test fixtures: an in-memory Kong Admin API.

The fake follows Kong's observable contract for consumers and their
credentials closely enough to drive full lifecycles through the real
client: 201 on create, 200 on read and update, 204 on delete, 404 for
unknown entities and 409 on unique constraint violations. Credentials get
generated keys and secrets when none are given.
"""

from __future__ import annotations

import itertools
import json
from collections.abc import Generator
from typing import Any

import httpx
import pytest

from kong_reconciler.integrations.kong.client import KongAdminClient
from kong_reconciler.integrations.kong.config import KongAuthConfig, KongConnectionConfig

ADMIN_TOKEN = "integration-token"

# Per-kind fields that must be unique and fields Kong generates when omitted.
UNIQUE_FIELDS: dict[str, tuple[str, ...]] = {
    "consumers": ("username", "custom_id"),
    "jwt": ("key",),
    "key-auth": ("key",),
    "hmac-auth": ("username",),
}
GENERATED_FIELDS: dict[str, tuple[str, ...]] = {
    "jwt": ("key", "secret"),
    "key-auth": ("key",),
    "hmac-auth": ("secret",),
}
CREDENTIAL_DEFAULTS: dict[str, dict[str, Any]] = {
    "jwt": {"algorithm": "HS256", "rsa_public_key": None},
}


class InMemoryKong:
    """Minimal stateful Kong Admin API served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.entities: dict[str, dict[str, dict[str, Any]]] = {
            kind: {} for kind in UNIQUE_FIELDS
        }
        self.requests: list[httpx.Request] = []
        self._ids = itertools.count(1)

    def handle(self, request: httpx.Request) -> httpx.Response:
        """Route one Admin API request."""
        self.requests.append(request)
        if request.headers.get("Kong-Admin-Token") != ADMIN_TOKEN:
            return httpx.Response(401, json={"message": "Invalid credentials"})

        parts = [part for part in request.url.path.split("/") if part]
        body = json.loads(request.content) if request.content else {}

        if parts == ["status"]:
            return httpx.Response(200, json={"database": {"reachable": True}})
        if not parts or parts[0] != "consumers":
            return httpx.Response(404, json={"message": "Not found"})

        if len(parts) <= 2:
            return self._dispatch("consumers", parts[1:], request.method, body, owner=None)

        consumer_id, kind = parts[1], parts[2]
        if kind not in GENERATED_FIELDS:
            return httpx.Response(404, json={"message": "Not found"})
        if consumer_id not in self.entities["consumers"]:
            return httpx.Response(404, json={"message": "Not found"})
        return self._dispatch(kind, parts[3:], request.method, body, owner=consumer_id)

    def seed(self, kind: str, **fields: Any) -> dict[str, Any]:
        """Store an entity directly, as if created outside the reconciler."""
        entity = {"id": f"{kind}-{next(self._ids)}", **fields}
        self.entities[kind][entity["id"]] = entity
        return entity

    def _dispatch(
        self,
        kind: str,
        rest: list[str],
        method: str,
        body: dict[str, Any],
        owner: str | None,
    ) -> httpx.Response:
        store = self.entities[kind]

        if not rest:
            if method != "POST":
                return httpx.Response(405, json={"message": "Method not allowed"})
            return self._create(kind, body, owner)

        entity = store.get(rest[0])
        if entity is None or (owner is not None and entity["consumer"]["id"] != owner):
            return httpx.Response(404, json={"message": "Not found"})

        if method == "GET":
            return httpx.Response(200, json=entity)
        if method == "PATCH":
            conflict = self._conflict(kind, body, exclude=entity["id"])
            if conflict:
                return conflict
            entity.update(body)
            return httpx.Response(200, json=entity)
        if method == "DELETE":
            del store[entity["id"]]
            if kind == "consumers":
                for credentials in self.entities.values():
                    for cred_id, cred in list(credentials.items()):
                        if cred.get("consumer", {}).get("id") == entity["id"]:
                            del credentials[cred_id]
            return httpx.Response(204)
        return httpx.Response(405, json={"message": "Method not allowed"})

    def _create(self, kind: str, body: dict[str, Any], owner: str | None) -> httpx.Response:
        if kind == "consumers" and not (body.get("username") or body.get("custom_id")):
            return httpx.Response(
                400,
                json={
                    "code": 2,
                    "name": "schema violation",
                    "message": "schema violation (username or custom_id required)",
                },
            )
        conflict = self._conflict(kind, body)
        if conflict:
            return conflict

        entity: dict[str, Any] = {"id": f"{kind}-{next(self._ids)}", "created_at": 1700000000}
        entity.update(CREDENTIAL_DEFAULTS.get(kind, {}))
        for name in GENERATED_FIELDS.get(kind, ()):
            entity[name] = f"generated-{name}-{entity['id']}"
        entity.update(body)
        if owner is not None:
            entity["consumer"] = {"id": owner}
        self.entities[kind][entity["id"]] = entity
        return httpx.Response(201, json=entity)

    def _conflict(
        self,
        kind: str,
        body: dict[str, Any],
        exclude: str | None = None,
    ) -> httpx.Response | None:
        for name in UNIQUE_FIELDS[kind]:
            value = body.get(name)
            if value is None:
                continue
            for entity in self.entities[kind].values():
                if entity["id"] != exclude and entity.get(name) == value:
                    return httpx.Response(
                        409,
                        json={
                            "code": 5,
                            "name": "unique constraint violation",
                            "message": f"UNIQUE violation detected on '{{{name}=\"{value}\"}}'",
                            "fields": {name: value},
                        },
                    )
        return None


@pytest.fixture
def kong() -> InMemoryKong:
    """Create an empty in-memory Kong."""
    return InMemoryKong()


@pytest.fixture
def kong_client(kong: InMemoryKong) -> Generator[KongAdminClient]:
    """Create a real client talking to the in-memory Kong."""
    client = KongAdminClient(
        KongConnectionConfig(base_url="http://kong.test:8001", retries=0),
        KongAuthConfig(type="api_key", api_key=ADMIN_TOKEN),
        transport=httpx.MockTransport(kong.handle),
    )
    yield client
    client.close()

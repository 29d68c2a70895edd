"""Kong Admin API HTTP client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx
import structlog
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from kong_reconciler.integrations.kong.exceptions import (
    KongAPIError,
    KongRemoteError,
    KongTransportError,
)

if TYPE_CHECKING:
    from kong_reconciler.integrations.kong.config import (
        KongAuthConfig,
        KongConnectionConfig,
        ReconcilerConfig,
    )

logger = structlog.get_logger()


@dataclass(frozen=True)
class KongResponse:
    """Status code and decoded body of one Kong Admin API call.

    Attributes:
        status_code: HTTP status code.
        body: Decoded JSON body; empty for bodiless responses such as 204.
        endpoint: The endpoint that was called.
    """

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)
    endpoint: str = ""


def join_path(*segments: str) -> str:
    """Compose a request path by successive segment concatenation.

    Each segment is appended under the previous one; a trailing slash on the
    last segment is kept, so ``join_path("consumers/")`` stays a collection
    path and ``join_path("consumers/", "c-1/", "jwt/", "j-1")`` addresses a
    single credential. Segments are expected to be quoted already (see
    quote_segment).
    """
    path = ""
    for segment in segments:
        if path and not path.endswith("/"):
            path += "/"
        path += segment.lstrip("/")
    return path


def quote_segment(value: str) -> str:
    """Percent-encode an identifier for use as a single path segment.

    ``/``, ``?`` and ``#`` are encoded too, so a caller-supplied identity can
    never address a different path, a query or a fragment.
    """
    return quote(value, safe="")


def _is_retryable(error: BaseException) -> bool:
    """Only retry calls that never reached Kong."""
    return isinstance(error, KongTransportError) and isinstance(
        error.original_error, httpx.ConnectError
    )


class KongAdminClient:
    """HTTP transport for the Kong Admin API.

    The client reports what Kong answered and leaves classification of the
    status code to the caller. Only failures to complete a call surface as
    exceptions (KongTransportError). A single client is safe to share between
    threads reconciling different entities.

    Example:
        ```python
        from kong_reconciler.integrations.kong import KongAdminClient
        from kong_reconciler.integrations.kong.config import ReconcilerConfig

        config = ReconcilerConfig.from_env()
        with KongAdminClient.from_config(config) as client:
            response = client.request("GET", "consumers/", "alice")
            print(response.status_code, response.body)
        ```
    """

    def __init__(
        self,
        connection_config: KongConnectionConfig,
        auth_config: KongAuthConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize Kong Admin API client.

        Args:
            connection_config: Connection settings (URL, timeout, SSL, retries).
            auth_config: Authentication settings (type, credentials).
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests.
        """
        self.connection_config = connection_config
        self.auth_config = auth_config
        self._retries = connection_config.retries

        client_kwargs: dict[str, Any] = {
            "base_url": connection_config.base_url,
            "timeout": httpx.Timeout(connection_config.timeout),
            "verify": connection_config.verify_ssl,
        }
        if transport is not None:
            client_kwargs["transport"] = transport

        headers: dict[str, str] = {}
        if auth_config:
            if auth_config.type == "api_key" and auth_config.api_key:
                headers[auth_config.header_name] = auth_config.api_key
                logger.debug("Kong client configured with API key auth")
            elif auth_config.type == "mtls" and auth_config.cert_path and auth_config.key_path:
                client_kwargs["cert"] = (auth_config.cert_path, auth_config.key_path)
                if auth_config.ca_path:
                    client_kwargs["verify"] = auth_config.ca_path
                logger.debug("Kong client configured with mTLS auth")

        if headers:
            client_kwargs["headers"] = headers

        self._client = httpx.Client(**client_kwargs)

        logger.info(
            "Kong Admin API client initialized",
            base_url=connection_config.base_url,
            auth_type=auth_config.type if auth_config else "none",
        )

    @classmethod
    def from_config(
        cls,
        config: ReconcilerConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> KongAdminClient:
        """Build a client from a complete reconciler configuration."""
        return cls(config.connection, config.auth, transport=transport)

    def _make_retry_decorator(self) -> Any:
        """Create a retry decorator for calls that failed to connect."""
        return retry(
            retry=retry_if_exception(_is_retryable),
            stop=stop_after_attempt(max(self._retries, 1)),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        )

    def _decode_body(self, response: httpx.Response, endpoint: str) -> dict[str, Any]:
        """Decode a response body.

        Bodiless responses decode to an empty mapping. A failed response whose
        body is not a JSON object is kept as ``{"raw": text}`` so it can still
        be shown; a successful one is a transport failure.

        Raises:
            KongTransportError: If a successful response cannot be decoded.
        """
        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError as e:
            if response.is_success:
                raise KongTransportError(
                    message=f"Kong returned an undecodable body: {e}",
                    endpoint=endpoint,
                    original_error=e,
                ) from e
            return {"raw": response.text}

        if isinstance(body, dict):
            return body
        if response.is_success:
            raise KongTransportError(
                message=f"Kong returned a {type(body).__name__} where an object was expected",
                endpoint=endpoint,
            )
        return {"raw": response.text}

    def _request(
        self,
        method: str,
        endpoint: str,
        json: dict[str, Any] | None = None,
    ) -> KongResponse:
        """Make one HTTP request to the Kong Admin API.

        Raises:
            KongTransportError: If the call could not be completed or decoded.
        """
        url = f"/{endpoint.lstrip('/')}"
        log = logger.bind(method=method, endpoint=url)

        try:
            log.debug("Kong API request")
            response = self._client.request(method, url, json=json)
        except httpx.ConnectError as e:
            log.error("Kong connection error", error=str(e))
            raise KongTransportError(
                message=f"Failed to connect to Kong: {e}",
                endpoint=url,
                original_error=e,
            ) from e
        except httpx.TimeoutException as e:
            log.error("Kong request timeout", error=str(e))
            raise KongTransportError(
                message=f"Kong request timed out: {e}",
                endpoint=url,
                original_error=e,
            ) from e
        except httpx.TransportError as e:
            log.error("Kong transport error", error=str(e))
            raise KongTransportError(
                message=f"Kong request failed: {e}",
                endpoint=url,
                original_error=e,
            ) from e
        except httpx.DecodingError as e:
            log.error("Kong response decoding error", error=str(e))
            raise KongTransportError(
                message=f"Kong returned an undecodable body: {e}",
                endpoint=url,
                original_error=e,
            ) from e

        log.debug("Kong API response", status=response.status_code)
        return KongResponse(
            status_code=response.status_code,
            body=self._decode_body(response, url),
            endpoint=url,
        )

    def request(
        self,
        method: str,
        *segments: str,
        json: dict[str, Any] | None = None,
    ) -> KongResponse:
        """Send a request and return Kong's answer, whatever its status.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE).
            *segments: Path segments, joined with join_path.
            json: Optional request body.

        Returns:
            The status code and decoded body.

        Raises:
            KongTransportError: If the call could not be completed or decoded.
        """
        retry_decorator = self._make_retry_decorator()
        result: KongResponse = retry_decorator(self._request)(
            method, join_path(*segments), json=json
        )
        return result

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()
        logger.debug("Kong client closed")

    def __enter__(self) -> KongAdminClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def get_status(self) -> dict[str, Any]:
        """Get Kong node status.

        Raises:
            KongRemoteError: If Kong does not answer 200.
        """
        response = self.request("GET", "status")
        if response.status_code != 200:
            raise KongRemoteError.from_response(
                response.status_code, response.body, response.endpoint
            )
        return response.body

    def check_connection(self) -> bool:
        """Check if connection to Kong Admin API is working."""
        try:
            self.get_status()
            return True
        except KongAPIError:
            return False

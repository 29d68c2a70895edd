"""Kong reconciliation exceptions."""

from __future__ import annotations

from typing import Any

from kong_reconciler.integrations.kong.models.base import KongErrorBody


class KongAPIError(Exception):
    """Base exception for failed Kong Admin API operations.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from Kong (if a response was received).
        response_body: Decoded error body from Kong (if available).
        endpoint: The API endpoint that was called.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: dict[str, Any] | None = None,
        endpoint: str | None = None,
    ) -> None:
        """Initialize KongAPIError.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code from Kong.
            response_body: Decoded error body from Kong.
            endpoint: The API endpoint that was called.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.endpoint = endpoint

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        if self.endpoint:
            parts.append(f"[endpoint: {self.endpoint}]")
        return " ".join(parts)


class KongTransportError(KongAPIError):
    """Raised when a call to Kong could not be completed or decoded.

    Covers network errors, timeouts and undecodable response bodies. The
    reconciliation engine never retries these.
    """

    def __init__(
        self,
        message: str = "Failed to reach Kong Admin API",
        endpoint: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize KongTransportError.

        Args:
            message: Human-readable error message.
            endpoint: The API endpoint that was attempted.
            original_error: The exception that caused this error.
        """
        super().__init__(message=message, endpoint=endpoint)
        self.original_error = original_error


class KongRemoteError(KongAPIError):
    """Raised when Kong answers with a status the operation does not expect."""

    @classmethod
    def from_response(
        cls,
        status_code: int,
        body: dict[str, Any],
        endpoint: str | None = None,
    ) -> KongRemoteError:
        """Build an error from a decoded Kong error body.

        Kong error bodies are free-form; only ``message`` (or ``name``) is
        lifted into the error message, the full body is kept for display.

        Args:
            status_code: HTTP status code of the response.
            body: Decoded error body.
            endpoint: The API endpoint that was called.

        Returns:
            The classified error.
        """
        error_body = KongErrorBody.model_validate(body)
        return cls(
            message=error_body.summary(status_code),
            status_code=status_code,
            response_body=body,
            endpoint=endpoint,
        )


class KongConflictError(KongRemoteError):
    """Raised when creating an entity that already exists in Kong (409).

    The entity must be brought under management with an import instead of
    being created again.
    """

    def __init__(
        self,
        entity_name: str,
        response_body: dict[str, Any] | None = None,
        endpoint: str | None = None,
    ) -> None:
        """Initialize KongConflictError.

        Args:
            entity_name: Kind of the conflicting entity (e.g. "consumer").
            response_body: Decoded error body from Kong.
            endpoint: The API endpoint that was called.
        """
        super().__init__(
            message=f"409 Conflict - import this {entity_name} to manage it",
            status_code=409,
            response_body=response_body,
            endpoint=endpoint,
        )
        self.entity_name = entity_name

    @classmethod
    def from_response(
        cls,
        status_code: int,
        body: dict[str, Any],
        endpoint: str | None = None,
        entity_name: str = "entity",
    ) -> KongConflictError:
        """Build a conflict from a decoded 409 body.

        The message always directs to import; Kong's own message stays
        available in response_body.

        Args:
            status_code: HTTP status code of the response (always 409).
            body: Decoded error body.
            endpoint: The API endpoint that was called.
            entity_name: Kind of the conflicting entity.
        """
        return cls(entity_name=entity_name, response_body=body, endpoint=endpoint)


class KongNotFoundError(KongAPIError):
    """Raised when an entity to import does not exist in Kong."""

    def __init__(
        self,
        message: str = "Kong resource not found",
        resource_type: str | None = None,
        resource_id: str | None = None,
        endpoint: str | None = None,
    ) -> None:
        """Initialize KongNotFoundError.

        Args:
            message: Human-readable error message.
            resource_type: Kind of entity (e.g. "consumer", "jwt").
            resource_id: External identifier that was looked up.
            endpoint: The API endpoint that was called.
        """
        if resource_type and resource_id:
            message = f"{resource_type} '{resource_id}' not found"
        super().__init__(message=message, status_code=404, endpoint=endpoint)
        self.resource_type = resource_type
        self.resource_id = resource_id


class KongConfigError(Exception):
    """Raised when reconciler configuration is missing or invalid."""

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize exception.

        Args:
            message: Error message.
            details: Additional details.
        """
        super().__init__(message)
        self.message = message
        self.details = details

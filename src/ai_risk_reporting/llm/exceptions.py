"""
Custom exceptions for the generation client layer.

These are capability failures (network, auth, quota, server errors). They
are distinct from validation failures: the orchestrator never retries them
and lets them propagate to the caller unchanged.
"""


class LLMClientError(Exception):
    """
    Base exception for all generation client errors.

    All client-specific exceptions inherit from this to allow catching
    any capability failure with a single except clause.
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class LLMConnectionError(LLMClientError):
    """
    Raised when unable to reach the generation service.

    Includes network errors, DNS failures, refused connections, etc.
    """
    pass


class LLMTimeoutError(LLMConnectionError):
    """Raised when a request exceeds the configured timeout."""
    pass


class LLMAuthenticationError(LLMClientError):
    """
    Raised on 401/403 responses.

    A missing or rejected API key fails every attempt the same way, so
    callers should fix configuration rather than retry.
    """
    pass


class LLMRateLimitError(LLMClientError):
    """
    Raised when the service rate-limits the request (HTTP 429).

    `details["retry_after"]` carries the server's Retry-After header when
    present; callers may layer their own backoff on it.
    """
    pass


class LLMGenerationError(LLMClientError):
    """
    Raised when the service returns an error during generation.

    Examples:
    - Invalid request parameters
    - Server overloaded (5xx)
    - Empty or malformed response body
    """
    pass


class LLMModelNotAvailableError(LLMGenerationError):
    """Raised when the requested model does not exist (HTTP 404)."""
    pass

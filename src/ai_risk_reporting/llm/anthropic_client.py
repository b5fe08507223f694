"""
Anthropic Messages API client.

Communicates with POST /v1/messages using httpx AsyncClient. Supports:
- System prompt plus a single user turn per request
- Connection pooling through a persistent AsyncClient
- Mapping of transport and HTTP failures onto the LLMClientError hierarchy
- Token and latency metrics

No retries happen here: a failed call surfaces immediately and the
orchestrator lets it propagate.
"""

import time
from typing import Optional

import httpx
import structlog

from ai_risk_reporting.config import Settings
from ai_risk_reporting.llm.base_client import BaseLLMClient
from ai_risk_reporting.llm.exceptions import (
    LLMAuthenticationError,
    LLMConnectionError,
    LLMGenerationError,
    LLMModelNotAvailableError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from ai_risk_reporting.models.llm_models import LLMGenerationRequest, LLMGenerationResponse
from ai_risk_reporting.monitoring.metrics import generation_latency_seconds, generation_tokens_total


logger = structlog.get_logger(__name__)

MESSAGES_PATH = "/v1/messages"
MODELS_PATH = "/v1/models"


class AnthropicClient(BaseLLMClient):
    """
    Messages API client using httpx for async HTTP communication.

    Request body:
    {
        "model": "...",
        "max_tokens": 4096,
        "temperature": 0.1,
        "system": "...",
        "messages": [{"role": "user", "content": "..."}]
    }

    Response body (fields used):
    {
        "model": "...",
        "content": [{"type": "text", "text": "..."}],
        "stop_reason": "end_turn",
        "usage": {"input_tokens": 1200, "output_tokens": 900}
    }
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://api.anthropic.com",
        anthropic_version: str = "2023-06-01",
        timeout: int = 120,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        connection_limits: Optional[httpx.Limits] = None,
        **kwargs
    ):
        """
        Initialize the client.

        Args:
            api_key: API key sent as x-api-key (None fails each request with LLMAuthenticationError)
            base_url: Service URL
            anthropic_version: Value of the anthropic-version header
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport)
            connection_limits: httpx connection pool limits
            **kwargs: Additional config
        """
        super().__init__(base_url, timeout, **kwargs)
        self.api_key = api_key
        self.anthropic_version = anthropic_version
        self._transport = transport
        self._connection_limits = connection_limits or httpx.Limits(
            max_keepalive_connections=5,
            max_connections=10,
            keepalive_expiry=30.0,
        )
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "AnthropicClient":
        return cls(
            api_key=settings.ANTHROPIC_API_KEY,
            base_url=settings.ANTHROPIC_BASE_URL,
            anthropic_version=settings.ANTHROPIC_VERSION,
            timeout=settings.LLM_TIMEOUT,
            **kwargs
        )

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.api_key or "",
            "anthropic-version": self.anthropic_version,
            "content-type": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                transport=self._transport,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        if not self.api_key:
            raise LLMAuthenticationError(
                "ANTHROPIC_API_KEY is not configured",
                details={"base_url": self.base_url},
            )

        payload = {
            "model": request.model,
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
            "system": request.system_prompt,
            "messages": [{"role": "user", "content": request.user_prompt}],
        }

        logger.info(
            "Sending generation request",
            stage=request.stage,
            model=request.model,
            system_prompt_length=len(request.system_prompt),
            user_prompt_length=len(request.user_prompt),
            temperature=request.temperature,
            max_tokens=request.max_tokens,
        )

        start_time = time.monotonic()
        try:
            data = await self._post_messages(payload, request.model)
        except Exception:
            generation_latency_seconds.labels(model=request.model, success="false").observe(
                time.monotonic() - start_time
            )
            raise
        latency_ms = int((time.monotonic() - start_time) * 1000)

        content = "".join(
            block.get("text", "")
            for block in data.get("content") or []
            if block.get("type") == "text"
        )
        if not content.strip():
            generation_latency_seconds.labels(model=request.model, success="false").observe(latency_ms / 1000.0)
            raise LLMGenerationError(
                "Empty response from generation service",
                details={"stop_reason": data.get("stop_reason"), "id": data.get("id")},
            )

        model_version = data.get("model", request.model)
        usage = data.get("usage") or {}
        prompt_tokens = usage.get("input_tokens")
        completion_tokens = usage.get("output_tokens")
        finish_reason = data.get("stop_reason") or "unknown"

        generation_latency_seconds.labels(model=request.model, success="true").observe(latency_ms / 1000.0)
        if prompt_tokens:
            generation_tokens_total.labels(model=model_version, token_type="input").inc(prompt_tokens)
        if completion_tokens:
            generation_tokens_total.labels(model=model_version, token_type="output").inc(completion_tokens)

        if finish_reason == "max_tokens":
            # Output is most likely truncated JSON; the parser will reject it
            logger.warning(
                "Generation stopped at max_tokens",
                stage=request.stage,
                max_tokens=request.max_tokens,
            )

        logger.info(
            "Generation successful",
            stage=request.stage,
            model=model_version,
            latency_ms=latency_ms,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            finish_reason=finish_reason,
        )

        return LLMGenerationResponse(
            content=content,
            model_version=model_version,
            finish_reason=finish_reason,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            latency_ms=latency_ms,
            raw_metadata={"id": data.get("id"), "usage": usage},
        )

    async def _post_messages(self, payload: dict, model: str) -> dict:
        """POST the payload and return the decoded body, mapping failures to client errors."""
        client = await self._get_client()
        try:
            response = await client.post(MESSAGES_PATH, json=payload, headers=self._headers())
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("Generation request timeout", timeout=self.timeout, error=str(e))
            raise LLMTimeoutError(
                f"Request timeout after {self.timeout}s",
                details={"timeout": self.timeout},
            ) from e
        except httpx.HTTPStatusError as e:
            raise self._map_status_error(e.response, model) from e
        except httpx.TransportError as e:
            logger.warning("Generation network error", error=str(e))
            raise LLMConnectionError(
                f"Network error: {str(e)}",
                details={"error_type": type(e).__name__},
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Failed to decode generation response", error=str(e))
            raise LLMGenerationError(
                "Invalid JSON response from generation service",
                details={"parse_error": str(e)},
            ) from e
        if not isinstance(data, dict):
            raise LLMGenerationError(
                "Unexpected response body from generation service",
                details={"body_type": type(data).__name__},
            )
        return data

    def _map_status_error(self, response: httpx.Response, model: str) -> Exception:
        status_code = response.status_code
        error_text = response.text

        logger.error("Generation HTTP error", status_code=status_code, error_text=error_text[:500])

        details = {"status": status_code, "error": error_text}
        if status_code in (401, 403):
            return LLMAuthenticationError(f"Authentication failed: {status_code}", details=details)
        if status_code == 404:
            return LLMModelNotAvailableError(f"Model not found: {model}", details={**details, "model": model})
        if status_code == 429:
            details["retry_after"] = response.headers.get("retry-after")
            return LLMRateLimitError("Rate limit exceeded", details=details)
        if status_code >= 500:
            return LLMGenerationError(f"Generation service error: {status_code}", details=details)
        return LLMGenerationError(f"Generation request rejected: {status_code}", details=details)

    async def health_check(self) -> bool:
        """
        Check the service via GET /v1/models.

        Returns True if the service answers with a 2xx, False otherwise.
        """
        try:
            client = await self._get_client()
            response = await client.get(MODELS_PATH, headers=self._headers(), timeout=5.0)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Generation service health check failed", error=str(e))
            return False
        logger.debug("Generation service health check passed")
        return True

    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed generation client connection")

"""Unit test fixtures (mocks and stubs).

Provides objects for testing without external services.
"""

import json
from typing import Any, Callable, Dict, Optional

import httpx
import pytest

from ai_risk_reporting.config import PACKAGED_TEMPLATES_DIR
from ai_risk_reporting.llm.anthropic_client import AnthropicClient
from ai_risk_reporting.llm.prompt_builder import PromptBuilder
from ai_risk_reporting.models.llm_models import LLMGenerationRequest


@pytest.fixture
def prompt_builder() -> PromptBuilder:
    """PromptBuilder over the templates shipped with the package."""
    return PromptBuilder(PACKAGED_TEMPLATES_DIR)


@pytest.fixture
def generation_request() -> LLMGenerationRequest:
    return LLMGenerationRequest(
        system_prompt="You produce risk flag reports.",
        user_prompt="Tool profile and classification follow.",
        model="claude-test",
        temperature=0.1,
        max_tokens=4000,
        stage="risk_flags",
    )


def _messages_body(
    text: str = '{"ok": true}',
    stop_reason: str = "end_turn",
    model: str = "claude-test-20260101",
) -> Dict[str, Any]:
    """Minimal Messages API response body."""
    return {
        "id": "msg_test_001",
        "type": "message",
        "role": "assistant",
        "model": model,
        "content": [{"type": "text", "text": text}] if text is not None else [],
        "stop_reason": stop_reason,
        "usage": {"input_tokens": 1200, "output_tokens": 900},
    }


@pytest.fixture
def messages_body() -> Callable[..., Dict[str, Any]]:
    """Builder for Messages API response bodies (see _messages_body)."""
    return _messages_body


@pytest.fixture
def mock_anthropic() -> Callable[..., AnthropicClient]:
    """Factory fixture for an AnthropicClient backed by httpx.MockTransport.

    Usage:
        def test_something(mock_anthropic):
            client = mock_anthropic(status_code=429, headers={"retry-after": "30"})
            ...
            client.captured  # list of httpx.Request seen by the transport

    Pass `body` for a custom JSON body, `raw` for a non-JSON body, or `error`
    for an exception raised by the transport instead of answering.
    """
    def _create(
        status_code: int = 200,
        body: Optional[Any] = None,
        raw: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        error: Optional[Exception] = None,
        api_key: Optional[str] = "test-key",
    ) -> AnthropicClient:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            if error is not None:
                raise error
            if raw is not None:
                return httpx.Response(status_code, text=raw, headers=headers)
            payload = _messages_body() if body is None else body
            return httpx.Response(status_code, content=json.dumps(payload), headers=headers)

        client = AnthropicClient(
            api_key=api_key,
            base_url="https://api.anthropic.test",
            timeout=5,
            transport=httpx.MockTransport(handler),
        )
        client.captured = captured
        return client

    return _create

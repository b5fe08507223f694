"""
Generation capability clients and prompt construction.

Components:
- BaseLLMClient: Abstract base class for generation clients
- AnthropicClient: Messages API implementation over httpx
- PromptBuilder: Renders per-stage Jinja2 templates into requests
- exceptions: Capability errors (never retried by the orchestrator)
"""

from ai_risk_reporting.llm.anthropic_client import AnthropicClient
from ai_risk_reporting.llm.base_client import BaseLLMClient
from ai_risk_reporting.llm.exceptions import (
    LLMAuthenticationError,
    LLMClientError,
    LLMConnectionError,
    LLMGenerationError,
    LLMModelNotAvailableError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from ai_risk_reporting.llm.prompt_builder import PromptBuilder

__all__ = [
    "BaseLLMClient",
    "AnthropicClient",
    "PromptBuilder",
    "LLMClientError",
    "LLMConnectionError",
    "LLMTimeoutError",
    "LLMAuthenticationError",
    "LLMRateLimitError",
    "LLMGenerationError",
    "LLMModelNotAvailableError",
]

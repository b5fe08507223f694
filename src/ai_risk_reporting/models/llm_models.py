"""
Generation-capability data models for the request/response cycle.

These models are internal to the LLM layer and abstract the wire format of
the text-generation service. They are separate from the artifact models so
that the client implementation can change without touching validation.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, ConfigDict


class LLMGenerationRequest(BaseModel):
    """
    Standardized generation request.

    Built deterministically by PromptBuilder: the same stage, upstream
    artifacts and attempt history always yield an equal request.
    """
    model_config = ConfigDict(frozen=True)

    system_prompt: str = Field(..., min_length=1, description="Stage instructions (rubric, output shape)")
    user_prompt: str = Field(..., min_length=1, description="Upstream data plus corrective context")
    model: str = Field(..., description="Model identifier")
    temperature: float = Field(default=0.0, ge=0.0, le=1.0, description="Sampling temperature")
    max_tokens: int = Field(default=4096, ge=1, le=64000, description="Maximum tokens to generate")
    stage: Optional[str] = Field(default=None, description="Originating stage id (for logging only)")


class LLMGenerationResponse(BaseModel):
    """
    Raw generation output plus metadata for audit/logging.

    Parsing and validation of `content` happen in the validation layer.
    """
    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Generated text (expected to be a JSON object)")
    model_version: str = Field(..., description="Model version reported by the service")
    finish_reason: str = Field(..., description="Why generation stopped: 'end_turn', 'max_tokens', etc.")
    prompt_tokens: Optional[int] = Field(default=None, description="Input tokens")
    completion_tokens: Optional[int] = Field(default=None, description="Output tokens")
    latency_ms: int = Field(default=0, ge=0, description="Generation latency in milliseconds")
    raw_metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Provider-specific metadata (for debugging)"
    )

    @property
    def usage_tokens(self) -> Optional[int]:
        if self.prompt_tokens is None or self.completion_tokens is None:
            return None
        return self.prompt_tokens + self.completion_tokens

"""
Abstract base client for the text generation capability.

Defines the interface the orchestrator depends on. The capability is opaque:
given system instructions and a user request it returns raw text, or raises
an LLMClientError subclass.
"""

from abc import ABC, abstractmethod

import structlog

from ai_risk_reporting.models.llm_models import LLMGenerationRequest, LLMGenerationResponse


logger = structlog.get_logger(__name__)


class BaseLLMClient(ABC):
    """
    Abstract base class for generation clients.

    Responsibilities:
    - Send generation requests to the service
    - Parse responses into LLMGenerationResponse
    - Map transport and HTTP failures to LLMClientError subclasses

    Does NOT handle:
    - Prompt construction (that's PromptBuilder's job)
    - Parsing or validating the generated text (that's the validation layer's job)
    - Retrying invalid output (that's GenerationOrchestrator's job)
    """

    def __init__(self, base_url: str, timeout: int = 120, **kwargs):
        """
        Initialize base client.

        Args:
            base_url: Base URL of the generation service
            timeout: Request timeout in seconds
            **kwargs: Additional provider-specific config
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.extra_config = kwargs

        logger.info(
            "Initialized generation client",
            client_class=self.__class__.__name__,
            base_url=self.base_url,
            timeout=timeout,
        )

    @abstractmethod
    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        """
        Generate a completion.

        Args:
            request: System and user prompts plus sampling parameters

        Returns:
            LLMGenerationResponse with the raw generated text and metadata

        Raises:
            LLMConnectionError: Network errors
            LLMTimeoutError: Request exceeded timeout
            LLMAuthenticationError: Credentials missing or rejected
            LLMRateLimitError: Quota exceeded
            LLMModelNotAvailableError: Model not found
            LLMGenerationError: Any other service-side failure
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check whether the service is reachable.

        Returns:
            True if the service answered, False otherwise (never raises)
        """

    async def close(self):
        """
        Release connections. Default implementation does nothing.
        """
        logger.debug("Closing generation client", client_class=self.__class__.__name__)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}s)"
        )

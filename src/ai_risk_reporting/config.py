"""
Configuration settings for AI Risk Reporting.

All settings are loaded from environment variables with sensible defaults.
A .env file in the working directory is read for local development.
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGED_TEMPLATES_DIR = Path(__file__).parent / "llm" / "templates"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Anthropic Messages API ===
    ANTHROPIC_API_KEY: Optional[str] = None
    ANTHROPIC_BASE_URL: str = "https://api.anthropic.com"
    ANTHROPIC_VERSION: str = "2023-06-01"
    LLM_MODEL: str = "claude-sonnet-4-5"
    LLM_TIMEOUT: int = 120  # seconds

    # === Per-stage generation parameters ===
    PROFILE_TEMPERATURE: float = 0.1
    PROFILE_MAX_TOKENS: int = 4096
    CLASSIFICATION_TEMPERATURE: float = 0.0  # Scoring must be reproducible
    CLASSIFICATION_MAX_TOKENS: int = 3000
    FLAGS_TEMPERATURE: float = 0.1
    FLAGS_MAX_TOKENS: int = 4000
    REMEDIATION_TEMPERATURE: float = 0.2
    REMEDIATION_MAX_TOKENS: int = 5000
    BOARD_SUMMARY_TEMPERATURE: float = 0.3
    BOARD_SUMMARY_MAX_TOKENS: int = 8000

    # === Generate-validate-retry ===
    MAX_ATTEMPTS: int = 3
    SCHEMA_ERROR_LIMIT: int = 10  # Secondary schema errors kept for diagnostics

    # === Prompts ===
    PROMPT_TEMPLATES_DIR: Optional[str] = None  # None = templates shipped with the package

    def templates_dir(self) -> Path:
        """Directory holding the stage prompt templates."""
        if self.PROMPT_TEMPLATES_DIR:
            return Path(self.PROMPT_TEMPLATES_DIR)
        return PACKAGED_TEMPLATES_DIR

    def generation_params(self, prefix: str) -> tuple[float, int]:
        """(temperature, max_tokens) for a stage settings prefix such as "FLAGS"."""
        return getattr(self, f"{prefix}_TEMPERATURE"), getattr(self, f"{prefix}_MAX_TOKENS")


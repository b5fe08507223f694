"""
Pydantic data models for the risk reporting pipeline.

Includes:
- Enums (RiskTier, Severity, GovernanceStatus, Effort, StageId, ...)
- Artifact models, one module per stage (profile, classification, flags,
  remediation, board_summary)
- Input models (ExtractionRequest, ClassificationInput, ..., BoardSummaryInput)
- Artifact (frozen dataclass wrapping an accepted payload)
- LLM models (LLMGenerationRequest, LLMGenerationResponse)
"""

from ai_risk_reporting.models.artifact import Artifact
from ai_risk_reporting.models.board_summary import BoardSummaryResponse
from ai_risk_reporting.models.classification import ClassificationResponse, DIMENSIONS
from ai_risk_reporting.models.enums import (
    Effort,
    GovernanceStatus,
    RiskTier,
    Severity,
    StageId,
    Timeframe,
)
from ai_risk_reporting.models.flags import FlagReportResponse
from ai_risk_reporting.models.input_models import (
    BoardSummaryInput,
    ClassificationInput,
    EnrichmentAnswer,
    ExtractionRequest,
    FlagInput,
    OrganizationContext,
    RemediationInput,
    RemediationProgress,
    ToolAssessment,
)
from ai_risk_reporting.models.llm_models import LLMGenerationRequest, LLMGenerationResponse
from ai_risk_reporting.models.profile import ToolProfileResponse
from ai_risk_reporting.models.remediation import RemediationResponse

__all__ = [
    # Enums
    "Effort",
    "GovernanceStatus",
    "RiskTier",
    "Severity",
    "StageId",
    "Timeframe",
    # Artifact models
    "ToolProfileResponse",
    "ClassificationResponse",
    "DIMENSIONS",
    "FlagReportResponse",
    "RemediationResponse",
    "BoardSummaryResponse",
    # Input models
    "ExtractionRequest",
    "EnrichmentAnswer",
    "ClassificationInput",
    "FlagInput",
    "RemediationInput",
    "RemediationProgress",
    "ToolAssessment",
    "OrganizationContext",
    "BoardSummaryInput",
    # Accepted artifact
    "Artifact",
    # LLM models
    "LLMGenerationRequest",
    "LLMGenerationResponse",
]

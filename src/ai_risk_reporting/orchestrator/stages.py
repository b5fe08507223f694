"""
Stage registry.

Each stage plugs the same generate-validate-retry loop with its own input
model, artifact model and business rules. Adding a stage means adding one
StageDefinition and its two prompt templates.
"""

from dataclasses import dataclass
from typing import Type

from ai_risk_reporting.models.board_summary import BoardSummaryResponse
from ai_risk_reporting.models.classification import ClassificationResponse
from ai_risk_reporting.models.common import ArtifactModel, InputModel
from ai_risk_reporting.models.enums import StageId
from ai_risk_reporting.models.flags import FlagReportResponse
from ai_risk_reporting.models.input_models import (
    BoardSummaryInput,
    ClassificationInput,
    ExtractionRequest,
    FlagInput,
    RemediationInput,
)
from ai_risk_reporting.models.profile import ToolProfileResponse
from ai_risk_reporting.models.remediation import RemediationResponse
from ai_risk_reporting.validation.board_summary_rules import BoardSummaryRules
from ai_risk_reporting.validation.business_rules import BusinessRuleValidator
from ai_risk_reporting.validation.classification_rules import ClassificationRules
from ai_risk_reporting.validation.flag_rules import FlagReportRules
from ai_risk_reporting.validation.profile_rules import ProfileRules
from ai_risk_reporting.validation.remediation_rules import RemediationRules


@dataclass(frozen=True)
class StageDefinition:
    """
    Everything the orchestrator needs to run one stage.

    Attributes:
        stage_id: Stage identifier
        input_model: Upstream bundle type (plain mappings are coerced through it)
        artifact_model: Schema the generated JSON must satisfy
        rules: Stateless business rule validator
        schema_version: Version recorded on accepted artifacts
        prompt_version: Version the prompt asks the model to echo in metadata
        settings_prefix: Prefix of the <PREFIX>_TEMPERATURE / <PREFIX>_MAX_TOKENS settings
    """

    stage_id: StageId
    input_model: Type[InputModel]
    artifact_model: Type[ArtifactModel]
    rules: BusinessRuleValidator
    schema_version: str
    prompt_version: str
    settings_prefix: str

    @property
    def system_template(self) -> str:
        return f"{self.stage_id.value}_system.txt"

    @property
    def user_template(self) -> str:
        return f"{self.stage_id.value}_user.txt"


STAGES: dict[StageId, StageDefinition] = {
    definition.stage_id: definition
    for definition in (
        StageDefinition(
            stage_id=StageId.TOOL_PROFILE,
            input_model=ExtractionRequest,
            artifact_model=ToolProfileResponse,
            rules=ProfileRules(),
            schema_version="1.0",
            prompt_version="tool_profile_v1",
            settings_prefix="PROFILE",
        ),
        StageDefinition(
            stage_id=StageId.RISK_CLASSIFICATION,
            input_model=ClassificationInput,
            artifact_model=ClassificationResponse,
            rules=ClassificationRules(),
            schema_version="1.0",
            prompt_version="risk_classification_v1",
            settings_prefix="CLASSIFICATION",
        ),
        StageDefinition(
            stage_id=StageId.RISK_FLAGS,
            input_model=FlagInput,
            artifact_model=FlagReportResponse,
            rules=FlagReportRules(),
            schema_version="1.0",
            prompt_version="risk_flags_v1",
            settings_prefix="FLAGS",
        ),
        StageDefinition(
            stage_id=StageId.REMEDIATION_PLAN,
            input_model=RemediationInput,
            artifact_model=RemediationResponse,
            rules=RemediationRules(),
            schema_version="1.0",
            prompt_version="recommendation_engine_v1",
            settings_prefix="REMEDIATION",
        ),
        StageDefinition(
            stage_id=StageId.BOARD_SUMMARY,
            input_model=BoardSummaryInput,
            artifact_model=BoardSummaryResponse,
            rules=BoardSummaryRules(),
            schema_version="1.0",
            prompt_version="board_summary_v1",
            settings_prefix="BOARD_SUMMARY",
        ),
    )
}


def get_stage(stage_id: StageId | str) -> StageDefinition:
    """
    Look up a stage definition.

    Raises:
        ValueError: Unknown stage id
    """
    try:
        return STAGES[StageId(stage_id)]
    except ValueError:
        valid = ", ".join(s.value for s in StageId)
        raise ValueError(f"Unknown stage id: {stage_id!r} (expected one of: {valid})") from None

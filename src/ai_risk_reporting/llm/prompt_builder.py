"""
Prompt builder for generation requests.

Responsible for:
- Loading and rendering Jinja2 templates (system + user prompt per stage)
- Serializing upstream artifacts into the user prompt
- Appending corrective context listing every rejected attempt so far
- Constructing the complete LLMGenerationRequest

Rendering is a pure function of (stage, upstream, history, parameters):
the same inputs always produce an equal request.
"""

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Sequence

import structlog
from jinja2 import Environment, FileSystemLoader, StrictUndefined
from pydantic import BaseModel

from ai_risk_reporting.models import enums
from ai_risk_reporting.models.common import InputModel
from ai_risk_reporting.models.llm_models import LLMGenerationRequest
from ai_risk_reporting.validation.board_summary_rules import (
    FRAMEWORK_TERMS,
    GOVERNANCE_CHART_LABELS,
    REMEDIATION_CHART_LABELS,
    RISK_CHART_LABELS,
)

if TYPE_CHECKING:
    from ai_risk_reporting.orchestrator.result import AttemptRecord
    from ai_risk_reporting.orchestrator.stages import StageDefinition


logger = structlog.get_logger(__name__)

CORRECTIVE_TEMPLATE = "corrective_context.txt"


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def tojson_pretty(value: Any) -> str:
    """Jinja filter: models and plain values as indented JSON (key order preserved)."""
    return json.dumps(_jsonable(value), indent=2, ensure_ascii=False)


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


ENUM_CONTEXT = {
    "tool_category": _enum_values(enums.ToolCategory),
    "answer_format": _enum_values(enums.AnswerFormat),
    "risk_dimension": _enum_values(enums.RiskDimension),
    "severity": _enum_values(enums.Severity),
    "confidence": _enum_values(enums.Confidence),
    "risk_tier": _enum_values(enums.RiskTier),
    "governance_status": _enum_values(enums.GovernanceStatus),
    "score_direction": _enum_values(enums.ScoreDirection),
    "assessment_confidence": _enum_values(enums.AssessmentConfidence),
    "flag_category": _enum_values(enums.FlagCategory),
    "effort": _enum_values(enums.Effort),
    "timeframe": _enum_values(enums.Timeframe),
    "recommendation_type": _enum_values(enums.RecommendationType),
    "resolution_type": _enum_values(enums.ResolutionType),
    "action_type": _enum_values(enums.ActionType),
    "urgency": _enum_values(enums.Urgency),
}


class PromptBuilder:
    """
    Build generation requests from stage definitions and upstream bundles.

    Templates live in one directory:
    - <stage_id>_system.txt: instructions, rubric and output shape
    - <stage_id>_user.txt: the upstream data
    - corrective_context.txt: appended to the user prompt on retries
    """

    def __init__(self, templates_dir: Path):
        """
        Initialize prompt builder.

        Args:
            templates_dir: Directory containing prompt templates
        """
        self.templates_dir = Path(templates_dir)
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,  # We're generating prompts, not HTML
            undefined=StrictUndefined,
        )
        self.jinja_env.filters["tojson_pretty"] = tojson_pretty

        logger.info("PromptBuilder initialized", templates_dir=str(self.templates_dir))

    def build_system_prompt(self, definition: "StageDefinition") -> str:
        template = self.jinja_env.get_template(definition.system_template)
        return template.render(
            enums=ENUM_CONTEXT,
            schema_version=definition.schema_version,
            prompt_version=definition.prompt_version,
            framework_terms=FRAMEWORK_TERMS,
            chart_labels={
                "risk": RISK_CHART_LABELS,
                "governance": GOVERNANCE_CHART_LABELS,
                "remediation": REMEDIATION_CHART_LABELS,
            },
        ).strip()

    def build_user_prompt(
        self,
        definition: "StageDefinition",
        upstream: InputModel,
        history: Sequence["AttemptRecord"] = (),
    ) -> str:
        """
        Render the user prompt, followed by corrective context when retrying.

        Args:
            definition: Stage being generated
            upstream: Validated stage input
            history: Rejected attempts so far (empty on the first attempt)
        """
        rendered = self.jinja_env.get_template(definition.user_template).render(upstream=upstream).strip()
        if not history:
            return rendered

        corrective = self.jinja_env.get_template(CORRECTIVE_TEMPLATE).render(history=history).strip()
        return f"{rendered}\n\n{corrective}"

    def build_request(
        self,
        definition: "StageDefinition",
        upstream: InputModel,
        history: Sequence["AttemptRecord"],
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> LLMGenerationRequest:
        system_prompt = self.build_system_prompt(definition)
        user_prompt = self.build_user_prompt(definition, upstream, history)

        logger.debug(
            "Prompt built",
            stage=definition.stage_id,
            system_prompt_length=len(system_prompt),
            user_prompt_length=len(user_prompt),
            corrective_attempts=len(history),
        )

        return LLMGenerationRequest(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            stage=definition.stage_id.value,
        )

"""Shared test fixtures and configuration for all tests.

This conftest.py provides the accepted artifacts of every stage for one
tool, the stage input bundles built from them, and a scripted generation
client used by the orchestrator tests.
"""

import copy
import json
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Union

import pytest

from ai_risk_reporting.config import Settings
from ai_risk_reporting.llm.base_client import BaseLLMClient
from ai_risk_reporting.models.board_summary import BoardSummaryResponse
from ai_risk_reporting.models.classification import ClassificationResponse
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


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            settings = test_settings.model_copy(update={"MAX_ATTEMPTS": 1})
    """
    return Settings(
        # === Application ===
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Anthropic ===
        ANTHROPIC_API_KEY="test-key",
        ANTHROPIC_BASE_URL="https://api.anthropic.test",
        LLM_MODEL="claude-test",
        LLM_TIMEOUT=5,

        # === Generate-validate-retry ===
        MAX_ATTEMPTS=3,
        PROMPT_TEMPLATES_DIR=None,  # Packaged templates
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return FIXTURES_DIR


def _load(name: str) -> Any:
    with open(FIXTURES_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def load_fixture() -> Callable[[str], Any]:
    """Factory fixture returning a fresh copy of a JSON fixture.

    Usage:
        def test_something(load_fixture):
            data = load_fixture("flag_report.json")
            data["flag_report"]["flags"][0]["severity"] = "Low"
    """
    return lambda name: copy.deepcopy(_load(name))


# === Raw artifact dicts (safe to mutate, one copy per test) ===

@pytest.fixture
def tool_profile_data(load_fixture) -> Dict[str, Any]:
    return load_fixture("tool_profile.json")


@pytest.fixture
def classification_data(load_fixture) -> Dict[str, Any]:
    return load_fixture("risk_classification.json")


@pytest.fixture
def flag_report_data(load_fixture) -> Dict[str, Any]:
    return load_fixture("flag_report.json")


@pytest.fixture
def remediation_data(load_fixture) -> Dict[str, Any]:
    return load_fixture("remediation_plan.json")


@pytest.fixture
def board_summary_data(load_fixture) -> Dict[str, Any]:
    return load_fixture("board_summary.json")


# === Typed artifacts ===

@pytest.fixture
def tool_profile(tool_profile_data) -> ToolProfileResponse:
    return ToolProfileResponse.model_validate(tool_profile_data)


@pytest.fixture
def risk_classification(classification_data) -> ClassificationResponse:
    return ClassificationResponse.model_validate(classification_data)


@pytest.fixture
def flag_report(flag_report_data) -> FlagReportResponse:
    return FlagReportResponse.model_validate(flag_report_data)


@pytest.fixture
def remediation_plan(remediation_data) -> RemediationResponse:
    return RemediationResponse.model_validate(remediation_data)


@pytest.fixture
def board_summary(board_summary_data) -> BoardSummaryResponse:
    return BoardSummaryResponse.model_validate(board_summary_data)


# === Stage inputs ===

@pytest.fixture
def extraction_request() -> ExtractionRequest:
    return ExtractionRequest(
        tool_name="ChatGPT",
        vendor="OpenAI",
        tier="Free",
        additional_context="Used by the consulting team to draft client reports.",
    )


@pytest.fixture
def enrichment_answers(load_fixture) -> list[EnrichmentAnswer]:
    return [EnrichmentAnswer(**answer) for answer in load_fixture("enrichment_answers.json")]


@pytest.fixture
def classification_input(tool_profile, enrichment_answers) -> ClassificationInput:
    return ClassificationInput(tool_profile=tool_profile, enrichment_answers=enrichment_answers)


@pytest.fixture
def flag_input(tool_profile, risk_classification) -> FlagInput:
    return FlagInput(tool_profile=tool_profile, risk_classification=risk_classification)


@pytest.fixture
def remediation_input(tool_profile, risk_classification, flag_report) -> RemediationInput:
    return RemediationInput(
        tool_profile=tool_profile,
        risk_classification=risk_classification,
        flag_report=flag_report,
    )


def otter_variant(
    profile: Dict[str, Any],
    classification: Dict[str, Any],
    flags: Dict[str, Any],
    remediation: Dict[str, Any],
) -> ToolAssessment:
    """Second portfolio tool: a High risk, unmanaged meeting transcription service.

    Built from the ChatGPT fixture dicts (which are modified in place), with
    three flags of its own and no tracked remediation progress.
    """
    profile["tool_profile"].update(
        tool_name="Otter.ai",
        vendor="Otter.ai",
        tier="Pro",
        category="AI Transcription/Meeting",
    )

    c = classification["classification"]
    c["tool_name"] = "Otter.ai"
    c["tool_tier"] = "Pro"
    c["overall_risk"]["tier"] = "High"
    c["governance_status"]["level"] = "Unmanaged"

    report = flags["flag_report"]
    report["tool_name"] = "Otter.ai"
    report["risk_tier"] = "High"
    report["flags"] = [
        {
            "flag_id": "flag_07",
            "title": "Meeting Recordings Retained Indefinitely",
            "severity": "High",
            "category": "data_exposure",
            "description": "Recordings and transcripts of client meetings are kept with no deletion schedule.",
            "trigger_rule": "data_retention == Indefinite",
            "risk_summary": "Old client conversations remain exposed to any breach at the vendor.",
        },
        {
            "flag_id": "flag_08",
            "title": "Participants Not Told About Recording",
            "severity": "Medium",
            "category": "regulatory_exposure",
            "description": "The assistant joins meetings automatically without announcing itself to guests.",
            "trigger_rule": "auto_join == Yes",
            "risk_summary": "External participants may not have agreed to be recorded.",
        },
        {
            "flag_id": "flag_09",
            "title": "Transcripts Shared Through Personal Links",
            "severity": "Low",
            "category": "access_control",
            "description": "Transcripts can be shared with anyone holding a link, outside company control.",
            "trigger_rule": "link_sharing == Public",
            "risk_summary": "Transcripts could be forwarded beyond the intended audience.",
        },
    ]
    report["flag_summary"] = {"critical": 0, "high": 1, "medium": 1, "low": 1, "total": 3}

    plan = remediation["remediation_plan"]
    plan["tool_name"] = "Otter.ai"
    plan["tool_tier"] = "Pro"
    plan["current_risk_tier"] = "High"
    plan["current_governance_status"] = "Unmanaged"

    return ToolAssessment(
        tool_profile=ToolProfileResponse.model_validate(profile),
        risk_classification=ClassificationResponse.model_validate(classification),
        flag_report=FlagReportResponse.model_validate(flags),
        remediation_plan=RemediationResponse.model_validate(remediation),
    )


@pytest.fixture
def chatgpt_assessment(tool_profile, risk_classification, flag_report, remediation_plan) -> ToolAssessment:
    return ToolAssessment(
        tool_profile=tool_profile,
        risk_classification=risk_classification,
        flag_report=flag_report,
        remediation_plan=remediation_plan,
        remediation_progress=RemediationProgress(completed=3, in_progress=2, not_started=1, deferred=0),
    )


@pytest.fixture
def otter_assessment(load_fixture) -> ToolAssessment:
    return otter_variant(
        load_fixture("tool_profile.json"),
        load_fixture("risk_classification.json"),
        load_fixture("flag_report.json"),
        load_fixture("remediation_plan.json"),
    )


@pytest.fixture
def organization() -> OrganizationContext:
    return OrganizationContext(
        company_name="Halden & Pryce LLP",
        industry="Professional Services",
        employee_count=120,
        report_period="Q1 2026",
        report_type="Quarterly",
        previous_report_date=None,
    )


@pytest.fixture
def board_summary_input(organization, chatgpt_assessment, otter_assessment) -> BoardSummaryInput:
    """Two-tool portfolio matching board_summary.json."""
    return BoardSummaryInput(
        organization=organization,
        tool_assessments=[chatgpt_assessment, otter_assessment],
    )


# === Scripted generation client ===

ScriptedOutput = Union[str, Dict[str, Any], Exception]


class ScriptedLLMClient(BaseLLMClient):
    """Generation client that replays queued outputs in order.

    Each output is returned as the generated text (dicts are JSON-encoded)
    or, if it is an exception, raised. Every request received is recorded.
    """

    def __init__(self, outputs: Iterable[ScriptedOutput], model_version: str = "claude-test"):
        super().__init__("http://scripted.test", timeout=1)
        self.outputs = list(outputs)
        self.model_version = model_version
        self.requests: list[LLMGenerationRequest] = []

    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        self.requests.append(request)
        if not self.outputs:
            raise AssertionError("ScriptedLLMClient has no outputs left")

        output = self.outputs.pop(0)
        if isinstance(output, Exception):
            raise output
        if isinstance(output, dict):
            output = json.dumps(output)

        return LLMGenerationResponse(
            content=output,
            model_version=self.model_version,
            finish_reason="end_turn",
            prompt_tokens=1000,
            completion_tokens=800,
            latency_ms=5,
        )

    async def health_check(self) -> bool:
        return True


@pytest.fixture
def scripted_client() -> Callable[..., ScriptedLLMClient]:
    """Factory fixture for ScriptedLLMClient.

    Usage:
        async def test_something(scripted_client):
            client = scripted_client("not json", valid_artifact_dict)
    """
    return lambda *outputs: ScriptedLLMClient(outputs)

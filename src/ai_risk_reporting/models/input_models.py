"""
Input data models for each pipeline stage.

These are the upstream bundles handed to the orchestrator by the surrounding
application. Upstream artifacts arrive already accepted by their own stage,
so they are typed with the artifact models themselves.
"""

from typing import Optional, Union

from pydantic import Field, model_validator

from ai_risk_reporting.models.classification import ClassificationResponse
from ai_risk_reporting.models.common import Count, InputModel, NonEmptyStr
from ai_risk_reporting.models.enums import ReportType
from ai_risk_reporting.models.flags import FlagReportResponse
from ai_risk_reporting.models.profile import ToolProfileResponse
from ai_risk_reporting.models.remediation import RemediationResponse


class ExtractionRequest(InputModel):
    """Request to profile a tool (tool_profile stage)."""

    tool_name: NonEmptyStr = Field(..., description="Name of the AI tool (e.g., 'ChatGPT')")
    vendor: str = Field(default="Unknown", description="Vendor, if known")
    tier: str = Field(default="Not specified", description="Subscription tier, if known")
    additional_context: Optional[str] = Field(
        default=None,
        description="Free-text context from the requester (how the tool is used, etc.)"
    )


class EnrichmentAnswer(InputModel):
    question_id: NonEmptyStr
    question: NonEmptyStr
    answer: Union[str, tuple[str, ...]]


class ClassificationInput(InputModel):
    """Upstream for the risk_classification stage."""

    tool_profile: ToolProfileResponse
    enrichment_answers: tuple[EnrichmentAnswer, ...] = ()
    unanswered_question_ids: tuple[str, ...] = ()
    previous_classification: Optional[ClassificationResponse] = Field(
        default=None,
        description="Prior classification of the same tool; set for reassessments"
    )


class FlagInput(InputModel):
    """Upstream for the risk_flags stage."""

    tool_profile: ToolProfileResponse
    risk_classification: ClassificationResponse


class RemediationInput(InputModel):
    """Upstream for the remediation_plan stage."""

    tool_profile: ToolProfileResponse
    risk_classification: ClassificationResponse
    flag_report: FlagReportResponse


class RemediationProgress(InputModel):
    """Recommendation status counts tracked by the application for one tool."""

    completed: Count = 0
    in_progress: Count = 0
    not_started: Count = 0
    deferred: Count = 0

    @property
    def total(self) -> int:
        return self.completed + self.in_progress + self.not_started + self.deferred


class ToolAssessment(InputModel):
    """All accepted artifacts for one tool, as fed to the board summary."""

    tool_profile: ToolProfileResponse
    risk_classification: ClassificationResponse
    flag_report: FlagReportResponse
    remediation_plan: RemediationResponse
    remediation_progress: Optional[RemediationProgress] = None

    @model_validator(mode="after")
    def _progress_covers_plan(self) -> "ToolAssessment":
        if self.remediation_progress is None:
            return self
        planned = self.planned_recommendations
        if self.remediation_progress.total != planned:
            raise ValueError(
                f"remediation_progress counts {self.remediation_progress.total} recommendation(s) "
                f"but the remediation plan has {planned}"
            )
        return self

    @property
    def planned_recommendations(self) -> int:
        return sum(1 for _ in self.remediation_plan.remediation_plan.iter_recommendations())

    @property
    def tool_name(self) -> str:
        return self.tool_profile.tool_profile.tool_name


class OrganizationContext(InputModel):
    company_name: NonEmptyStr
    industry: NonEmptyStr
    employee_count: int = Field(..., gt=0)
    report_period: NonEmptyStr
    report_type: ReportType
    previous_report_date: Optional[str] = None


class BoardSummaryInput(InputModel):
    """Upstream for the board_summary stage."""

    organization: OrganizationContext
    tool_assessments: tuple[ToolAssessment, ...] = Field(..., min_length=1)

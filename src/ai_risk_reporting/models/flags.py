"""
Risk flag report: output of the risk_flags stage.

Each flag is a discrete risk finding raised by a trigger rule against the
tool profile and classification. Flag ids are referenced by the remediation
plan, and Critical/High flag titles must surface in the board summary.
"""

from typing import Literal

from pydantic import Field

from ai_risk_reporting.models.common import ArtifactModel, Count, NonEmptyStr
from ai_risk_reporting.models.enums import FlagCategory, RiskTier, Severity


class Flag(ArtifactModel):
    flag_id: NonEmptyStr
    title: NonEmptyStr
    severity: Severity
    category: FlagCategory
    description: str = Field(..., min_length=10)
    trigger_rule: NonEmptyStr
    risk_summary: NonEmptyStr


class FlagSummary(ArtifactModel):
    critical: Count
    high: Count
    medium: Count
    low: Count
    total: Count


class FlagReport(ArtifactModel):
    tool_name: NonEmptyStr
    risk_tier: RiskTier
    flags: tuple[Flag, ...]
    flag_summary: FlagSummary
    executive_summary: str = Field(..., min_length=10)

    def flag_ids(self) -> set[str]:
        return {flag.flag_id for flag in self.flags}


class FlagMetadata(ArtifactModel):
    flags_generated_at: NonEmptyStr
    schema_version: Literal["1.0"]
    prompt_version: Literal["risk_flags_v1"]


class FlagReportResponse(ArtifactModel):
    flag_report: FlagReport
    metadata: FlagMetadata

"""
Board summary: output of the board_summary stage.

Aggregates every tool assessment in the portfolio into a board-ready report.
Snapshot counts, chart series and the appendix table are derived data and
must agree exactly with the per-tool artifacts they summarize.
"""

from typing import Optional

from pydantic import Field

from ai_risk_reporting.models.common import ArtifactModel, Count, NonEmptyStr
from ai_risk_reporting.models.enums import (
    ActionType,
    ChartType,
    DataCompleteness,
    PostureTrend,
    RemediationStatus,
    ReportType,
    Urgency,
)


class ReportMetadata(ArtifactModel):
    company_name: NonEmptyStr
    industry: NonEmptyStr
    report_period: NonEmptyStr
    report_type: ReportType
    generated_at: NonEmptyStr
    previous_report_date: Optional[str]
    is_first_report: bool
    data_as_of: NonEmptyStr


class ToolsByRiskTier(ArtifactModel):
    critical: Count
    high: Count
    moderate: Count
    low: Count


class ToolsByGovernanceStatus(ArtifactModel):
    managed: Count
    partially_managed: Count
    unmanaged: Count
    shadow_ai: Count


class CategoryCount(ArtifactModel):
    category: NonEmptyStr
    count: int = Field(..., gt=0)


class ActiveFlags(ArtifactModel):
    critical: Count
    high: Count
    medium: Count
    low: Count


class PortfolioSnapshot(ArtifactModel):
    total_tools_registered: Count
    total_estimated_users: Count
    tools_by_risk_tier: ToolsByRiskTier
    tools_by_governance_status: ToolsByGovernanceStatus
    tools_by_category: tuple[CategoryCount, ...]
    total_active_flags: ActiveFlags
    total_recommendations: Count
    recommendations_completed: Count
    recommendations_in_progress: Count
    recommendations_not_started: Count
    recommendations_deferred: Count
    remediation_completion_percentage: float = Field(..., ge=0, le=100)


class ToolAdded(ArtifactModel):
    tool_name: NonEmptyStr
    risk_tier: NonEmptyStr
    date_added: NonEmptyStr


class ToolRemoved(ArtifactModel):
    tool_name: NonEmptyStr
    reason: NonEmptyStr
    date_removed: NonEmptyStr


class TierChange(ArtifactModel):
    tool_name: NonEmptyStr
    previous_tier: NonEmptyStr
    current_tier: NonEmptyStr
    change_driver: NonEmptyStr


class ChangesSinceLastReport(ArtifactModel):
    included: bool
    tools_added: tuple[ToolAdded, ...]
    tools_removed: tuple[ToolRemoved, ...]
    tier_changes: tuple[TierChange, ...]
    flags_resolved: Count
    flags_new: Count
    recommendations_completed_this_period: Count
    posture_trend: PostureTrend
    trend_summary: NonEmptyStr


class FindingDetail(ArtifactModel):
    tool_name: NonEmptyStr
    tool_tier: NonEmptyStr
    risk_tier: NonEmptyStr
    flag_title: NonEmptyStr
    flag_severity: NonEmptyStr
    plain_language_description: NonEmptyStr
    remediation_status: RemediationStatus
    expected_resolution: Optional[str]


class ActionItem(ArtifactModel):
    action_id: NonEmptyStr
    action_type: ActionType
    description: NonEmptyStr
    estimated_cost: Optional[str]
    urgency: Urgency
    related_tools: tuple[NonEmptyStr, ...] = Field(..., min_length=1)


class CriticalAndHighFindings(ArtifactModel):
    narrative: NonEmptyStr
    findings_detail: tuple[FindingDetail, ...]


class LeadershipActionItems(ArtifactModel):
    narrative: NonEmptyStr
    action_items: tuple[ActionItem, ...]
    no_action_needed: bool


class Narrative(ArtifactModel):
    executive_overview: NonEmptyStr
    portfolio_overview: NonEmptyStr
    risk_posture_analysis: NonEmptyStr
    critical_and_high_findings: CriticalAndHighFindings
    remediation_progress: NonEmptyStr
    leadership_action_items: LeadershipActionItems
    outlook_and_next_steps: NonEmptyStr

    def sections(self) -> dict[str, str]:
        """Free-text narrative per section name, nested narratives included."""
        return {
            "executive_overview": self.executive_overview,
            "portfolio_overview": self.portfolio_overview,
            "risk_posture_analysis": self.risk_posture_analysis,
            "critical_and_high_findings.narrative": self.critical_and_high_findings.narrative,
            "remediation_progress": self.remediation_progress,
            "leadership_action_items.narrative": self.leadership_action_items.narrative,
            "outlook_and_next_steps": self.outlook_and_next_steps,
        }


class ToolSummaryRow(ArtifactModel):
    tool_name: NonEmptyStr
    vendor: NonEmptyStr
    tier: NonEmptyStr
    category: NonEmptyStr
    risk_tier: NonEmptyStr
    governance_status: NonEmptyStr
    active_flags_critical: Count
    active_flags_high: Count
    active_flags_medium: Count
    active_flags_low: Count
    remediation_completion: NonEmptyStr
    next_reassessment_date: NonEmptyStr


class ChartData(ArtifactModel):
    labels: tuple[str, ...]
    values: tuple[Count, ...]
    chart_type: ChartType


class RiskTrendData(ArtifactModel):
    included: bool
    periods: tuple[str, ...]
    critical_count: tuple[Count, ...]
    high_count: tuple[Count, ...]
    moderate_count: tuple[Count, ...]
    low_count: tuple[Count, ...]
    chart_type: ChartType


class AppendixData(ArtifactModel):
    tool_summary_table: tuple[ToolSummaryRow, ...]
    risk_distribution_data: ChartData
    governance_distribution_data: ChartData
    remediation_progress_data: ChartData
    risk_trend_data: RiskTrendData


class BoardSummary(ArtifactModel):
    report_metadata: ReportMetadata
    portfolio_snapshot: PortfolioSnapshot
    changes_since_last_report: ChangesSinceLastReport
    narrative: Narrative
    appendix_data: AppendixData


class BoardSummaryMetadata(ArtifactModel):
    schema_version: NonEmptyStr
    prompt_version: NonEmptyStr
    tools_included: Count
    tools_excluded: Count
    exclusion_note: Optional[str]
    data_completeness: DataCompleteness


class BoardSummaryResponse(ArtifactModel):
    board_summary: BoardSummary
    metadata: BoardSummaryMetadata

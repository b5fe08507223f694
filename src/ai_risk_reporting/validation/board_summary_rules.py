"""
Business rules for board summaries.

The snapshot, charts and appendix are derived views over the per-tool
artifacts, so most checks recompute a figure from the tool assessments and
compare it with the declared one:

- risk tier, governance and remediation buckets sum to their totals
- buckets equal the tallies derived from the tool assessments
- completion percentage within +/-0.5 of completed/total x 100
- every Critical/High flag title appears verbatim in findings_detail
- every tool appears in the appendix table
- chart series carry 4 values in a fixed label order matching the snapshot
- first reports mark changes and risk trend as not included
- narrative text is free of regulatory framework names
- action items present if and only if no_action_needed is false
"""

from collections import Counter
from typing import Optional

from ai_risk_reporting.models.board_summary import BoardSummaryResponse, ChartData
from ai_risk_reporting.models.enums import GovernanceStatus, RiskTier, Severity
from ai_risk_reporting.models.input_models import BoardSummaryInput
from .business_rules import BusinessRuleValidator

FRAMEWORK_TERMS = (
    "NIST",
    "ISO 27001",
    "ISO 42001",
    "EU AI Act",
    "SOC 2",
    "SOC2",
    "HIPAA",
    "GDPR",
    "CCPA",
    "PCI DSS",
    "PCI-DSS",
    "FedRAMP",
    "AI RMF",
    "RMF",
)
"""Regulatory framework names that must not appear in narrative sections (case-sensitive)."""

PERCENTAGE_TOLERANCE = 0.5

RISK_CHART_LABELS = ("Critical", "High", "Moderate", "Low")
GOVERNANCE_CHART_LABELS = ("Managed", "Partially Managed", "Unmanaged", "Shadow AI")
REMEDIATION_CHART_LABELS = ("Completed", "In Progress", "Not Started", "Deferred")


def expected_completion_percentage(completed: int, total: int) -> float:
    """completed / total x 100 rounded to one decimal; 0 when there is nothing to complete."""
    if total == 0:
        return 0.0
    return round(completed / total * 100, 1)


def check_completion_percentage(completed: int, total: int, declared: float) -> Optional[str]:
    """
    Compare a declared completion percentage with the computed one.

    With no recommendations the percentage must be exactly 0; otherwise it
    may differ from the one-decimal expected value by at most 0.5.

    Returns:
        Violation message, or None if the declared value is acceptable
    """
    expected = expected_completion_percentage(completed, total)
    if total == 0:
        if declared != 0:
            return (
                f"remediation_completion_percentage ({declared}) must be 0 when "
                f"total_recommendations is 0"
            )
        return None
    # Epsilon absorbs float error at the tolerance boundary
    if abs(declared - expected) > PERCENTAGE_TOLERANCE + 1e-9:
        return (
            f"remediation_completion_percentage ({declared}) does not match "
            f"calculated value ({expected:.1f})"
        )
    return None


class BoardSummaryRules(BusinessRuleValidator[BoardSummaryResponse, BoardSummaryInput]):
    name = "board_summary"

    def _checks(self) -> list:
        return [
            self._check_bucket_sums,
            self._check_derived_tallies,
            self._check_completion_percentage,
            self._check_findings_detail,
            self._check_appendix_tools,
            self._check_chart_data,
            self._check_first_report,
            self._check_framework_terms,
            self._check_action_items,
            self._check_metadata,
        ]

    def _check_bucket_sums(self, response: BoardSummaryResponse, upstream: BoardSummaryInput) -> list[str]:
        violations = []
        snapshot = response.board_summary.portfolio_snapshot

        tiers = snapshot.tools_by_risk_tier
        tier_sum = tiers.critical + tiers.high + tiers.moderate + tiers.low
        if tier_sum != snapshot.total_tools_registered:
            violations.append(
                f"tools_by_risk_tier sum ({tier_sum}) does not equal "
                f"total_tools_registered ({snapshot.total_tools_registered})"
            )

        gov = snapshot.tools_by_governance_status
        gov_sum = gov.managed + gov.partially_managed + gov.unmanaged + gov.shadow_ai
        if gov_sum != snapshot.total_tools_registered:
            violations.append(
                f"tools_by_governance_status sum ({gov_sum}) does not equal "
                f"total_tools_registered ({snapshot.total_tools_registered})"
            )

        remediation_sum = (
            snapshot.recommendations_completed
            + snapshot.recommendations_in_progress
            + snapshot.recommendations_not_started
            + snapshot.recommendations_deferred
        )
        if remediation_sum != snapshot.total_recommendations:
            violations.append(
                f"Remediation counts sum ({remediation_sum}) does not equal "
                f"total_recommendations ({snapshot.total_recommendations})"
            )
        return violations

    def _check_derived_tallies(self, response: BoardSummaryResponse, upstream: BoardSummaryInput) -> list[str]:
        """
        Compare snapshot buckets with counts derived from the tool assessments.

        total_recommendations is the number of planned recommendations across
        all remediation plans. Remediation progress, where supplied for a tool,
        splits that tool's planned count into status buckets; otherwise all of
        the tool's planned recommendations count as not started.
        """
        snapshot = response.board_summary.portfolio_snapshot
        assessments = upstream.tool_assessments

        tier_counts = Counter(a.risk_classification.classification.overall_risk.tier for a in assessments)
        gov_counts = Counter(a.risk_classification.classification.governance_status.level for a in assessments)
        flag_counts = Counter(
            flag.severity for a in assessments for flag in a.flag_report.flag_report.flags
        )

        planned_total = 0
        status = Counter()
        for a in assessments:
            planned = a.planned_recommendations
            planned_total += planned
            progress = a.remediation_progress
            if progress is None:
                status["not_started"] += planned
            else:
                status["completed"] += progress.completed
                status["in_progress"] += progress.in_progress
                status["not_started"] += progress.not_started
                status["deferred"] += progress.deferred

        expected = [
            ("tools_by_risk_tier.critical", snapshot.tools_by_risk_tier.critical, tier_counts[RiskTier.CRITICAL]),
            ("tools_by_risk_tier.high", snapshot.tools_by_risk_tier.high, tier_counts[RiskTier.HIGH]),
            ("tools_by_risk_tier.moderate", snapshot.tools_by_risk_tier.moderate, tier_counts[RiskTier.MODERATE]),
            ("tools_by_risk_tier.low", snapshot.tools_by_risk_tier.low, tier_counts[RiskTier.LOW]),
            ("tools_by_governance_status.managed", snapshot.tools_by_governance_status.managed,
             gov_counts[GovernanceStatus.MANAGED]),
            ("tools_by_governance_status.partially_managed", snapshot.tools_by_governance_status.partially_managed,
             gov_counts[GovernanceStatus.PARTIALLY_MANAGED]),
            ("tools_by_governance_status.unmanaged", snapshot.tools_by_governance_status.unmanaged,
             gov_counts[GovernanceStatus.UNMANAGED]),
            ("tools_by_governance_status.shadow_ai", snapshot.tools_by_governance_status.shadow_ai,
             gov_counts[GovernanceStatus.SHADOW_AI]),
            ("total_active_flags.critical", snapshot.total_active_flags.critical, flag_counts[Severity.CRITICAL]),
            ("total_active_flags.high", snapshot.total_active_flags.high, flag_counts[Severity.HIGH]),
            ("total_active_flags.medium", snapshot.total_active_flags.medium, flag_counts[Severity.MEDIUM]),
            ("total_active_flags.low", snapshot.total_active_flags.low, flag_counts[Severity.LOW]),
            ("total_recommendations", snapshot.total_recommendations, planned_total),
            ("recommendations_completed", snapshot.recommendations_completed, status["completed"]),
            ("recommendations_in_progress", snapshot.recommendations_in_progress, status["in_progress"]),
            ("recommendations_not_started", snapshot.recommendations_not_started, status["not_started"]),
            ("recommendations_deferred", snapshot.recommendations_deferred, status["deferred"]),
        ]
        return [
            f"portfolio_snapshot.{field} ({declared}) does not match the {actual} derived from tool assessments"
            for field, declared, actual in expected
            if declared != actual
        ]

    def _check_completion_percentage(self, response: BoardSummaryResponse, upstream: BoardSummaryInput) -> list[str]:
        snapshot = response.board_summary.portfolio_snapshot
        violation = check_completion_percentage(
            snapshot.recommendations_completed,
            snapshot.total_recommendations,
            snapshot.remediation_completion_percentage,
        )
        return [violation] if violation else []

    def _check_findings_detail(self, response: BoardSummaryResponse, upstream: BoardSummaryInput) -> list[str]:
        findings = response.board_summary.narrative.critical_and_high_findings.findings_detail
        titles = {finding.flag_title for finding in findings}
        violations = []
        for a in upstream.tool_assessments:
            for flag in a.flag_report.flag_report.flags:
                if flag.severity in (Severity.CRITICAL, Severity.HIGH) and flag.title not in titles:
                    violations.append(
                        f'Critical/High flag "{flag.title}" from {a.tool_name} is missing from findings_detail'
                    )
        return violations

    def _check_appendix_tools(self, response: BoardSummaryResponse, upstream: BoardSummaryInput) -> list[str]:
        listed = {row.tool_name for row in response.board_summary.appendix_data.tool_summary_table}
        return [
            f'Tool "{a.tool_name}" is missing from appendix tool_summary_table'
            for a in upstream.tool_assessments
            if a.tool_name not in listed
        ]

    def _check_chart_data(self, response: BoardSummaryResponse, upstream: BoardSummaryInput) -> list[str]:
        summary = response.board_summary
        snapshot = summary.portfolio_snapshot
        appendix = summary.appendix_data
        tiers = snapshot.tools_by_risk_tier
        gov = snapshot.tools_by_governance_status

        violations = []
        violations.extend(self._check_series(
            "risk_distribution_data",
            appendix.risk_distribution_data,
            RISK_CHART_LABELS,
            (tiers.critical, tiers.high, tiers.moderate, tiers.low),
            "tools_by_risk_tier",
        ))
        violations.extend(self._check_series(
            "governance_distribution_data",
            appendix.governance_distribution_data,
            GOVERNANCE_CHART_LABELS,
            (gov.managed, gov.partially_managed, gov.unmanaged, gov.shadow_ai),
            "tools_by_governance_status",
        ))
        violations.extend(self._check_series(
            "remediation_progress_data",
            appendix.remediation_progress_data,
            REMEDIATION_CHART_LABELS,
            (
                snapshot.recommendations_completed,
                snapshot.recommendations_in_progress,
                snapshot.recommendations_not_started,
                snapshot.recommendations_deferred,
            ),
            "portfolio_snapshot remediation counts",
        ))
        return violations

    @staticmethod
    def _check_series(
        name: str,
        chart: ChartData,
        labels: tuple[str, ...],
        expected: tuple[int, ...],
        source: str,
    ) -> list[str]:
        violations = []
        if tuple(chart.labels) != labels:
            violations.append(
                f"{name} labels must be {list(labels)} in that order, got {list(chart.labels)}"
            )
        if len(chart.values) != len(expected):
            violations.append(f"{name} should have {len(expected)} values, got {len(chart.values)}")
        elif tuple(chart.values) != expected:
            violations.append(f"{name} values do not match {source}")
        return violations

    def _check_first_report(self, response: BoardSummaryResponse, upstream: BoardSummaryInput) -> list[str]:
        summary = response.board_summary
        if not summary.report_metadata.is_first_report:
            return []
        violations = []
        if summary.changes_since_last_report.included:
            violations.append("changes_since_last_report.included must be false when is_first_report is true")
        if summary.appendix_data.risk_trend_data.included:
            violations.append("risk_trend_data.included must be false when is_first_report is true")
        return violations

    def _check_framework_terms(self, response: BoardSummaryResponse, upstream: BoardSummaryInput) -> list[str]:
        sections = response.board_summary.narrative.sections()
        return [
            f'Framework term "{term}" found in narrative section "{section}"'
            for term in FRAMEWORK_TERMS
            for section, text in sections.items()
            if term in text
        ]

    def _check_action_items(self, response: BoardSummaryResponse, upstream: BoardSummaryInput) -> list[str]:
        items = response.board_summary.narrative.leadership_action_items
        if not items.no_action_needed and not items.action_items:
            return ["no_action_needed is false but action_items array is empty"]
        if items.no_action_needed and items.action_items:
            return ["no_action_needed is true but action_items array is not empty"]
        return []

    def _check_metadata(self, response: BoardSummaryResponse, upstream: BoardSummaryInput) -> list[str]:
        included = response.metadata.tools_included
        count = len(upstream.tool_assessments)
        if included != count:
            return [f"metadata.tools_included ({included}) does not match tool_assessments count ({count})"]
        return []

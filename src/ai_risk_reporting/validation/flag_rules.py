"""
Business rules for risk flag reports.

- flag ids are unique within the report
- flag_summary counts equal the itemized flags per severity and in total
- tool_name and risk_tier agree with the accepted classification
"""

from collections import Counter

from ai_risk_reporting.models.enums import Severity
from ai_risk_reporting.models.flags import FlagReportResponse
from ai_risk_reporting.models.input_models import FlagInput
from .business_rules import BusinessRuleValidator


class FlagReportRules(BusinessRuleValidator[FlagReportResponse, FlagInput]):
    name = "risk_flags"

    def _checks(self) -> list:
        return [self._check_identity, self._check_unique_ids, self._check_summary_counts]

    def _check_identity(self, response: FlagReportResponse, upstream: FlagInput) -> list[str]:
        violations = []
        report = response.flag_report
        classification = upstream.risk_classification.classification
        if report.tool_name != classification.tool_name:
            violations.append(
                f'flag_report.tool_name is "{report.tool_name}" but the classification is for '
                f'"{classification.tool_name}"'
            )
        if report.risk_tier != classification.overall_risk.tier:
            violations.append(
                f'flag_report.risk_tier is "{report.risk_tier.value}" but the classification tier is '
                f'"{classification.overall_risk.tier.value}"'
            )
        return violations

    def _check_unique_ids(self, response: FlagReportResponse, upstream: FlagInput) -> list[str]:
        counts = Counter(flag.flag_id for flag in response.flag_report.flags)
        return [f"Duplicate flag ID: {flag_id}" for flag_id, n in counts.items() if n > 1]

    def _check_summary_counts(self, response: FlagReportResponse, upstream: FlagInput) -> list[str]:
        violations = []
        report = response.flag_report
        actual = Counter(flag.severity for flag in report.flags)
        for severity in Severity:
            key = severity.value.lower()
            declared = getattr(report.flag_summary, key)
            if declared != actual[severity]:
                violations.append(
                    f"flag_summary.{key} ({declared}) does not match actual {severity.value} flag count "
                    f"({actual[severity]})"
                )
        if report.flag_summary.total != len(report.flags):
            violations.append(
                f"flag_summary.total ({report.flag_summary.total}) does not match actual flag count "
                f"({len(report.flags)})"
            )
        return violations

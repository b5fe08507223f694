"""
Unit tests for board summary business rules.
"""

import pytest

from ai_risk_reporting.models.board_summary import BoardSummaryResponse
from ai_risk_reporting.models.input_models import BoardSummaryInput, RemediationProgress
from ai_risk_reporting.validation.board_summary_rules import (
    BoardSummaryRules,
    check_completion_percentage,
    expected_completion_percentage,
)


class TestCompletionPercentage:

    def test_zero_total_requires_zero(self):
        assert check_completion_percentage(0, 0, 0.0) is None
        assert check_completion_percentage(0, 0, 10.0) == (
            "remediation_completion_percentage (10.0) must be 0 when total_recommendations is 0"
        )

    @pytest.mark.parametrize("declared", [40.7, 41.2, 41.7])
    def test_within_half_point_accepted(self, declared):
        # 7 / 17 = 41.18%
        assert check_completion_percentage(7, 17, declared) is None

    @pytest.mark.parametrize("declared", [40.6, 41.8, 50.0])
    def test_outside_half_point_rejected(self, declared):
        violation = check_completion_percentage(7, 17, declared)
        assert violation == (
            f"remediation_completion_percentage ({declared}) does not match calculated value (41.2)"
        )

    def test_expected_percentage(self):
        assert expected_completion_percentage(3, 12) == 25.0
        assert expected_completion_percentage(0, 0) == 0.0
        assert expected_completion_percentage(1, 3) == 33.3


class TestBoardSummaryRules:

    def setup_method(self):
        self.rules = BoardSummaryRules()

    def _validate(self, data, upstream):
        return self.rules.validate(BoardSummaryResponse.model_validate(data), upstream)

    def test_valid_summary(self, board_summary, board_summary_input):
        assert self.rules.validate(board_summary, board_summary_input) == []

    def test_risk_tier_buckets_must_sum_to_total(self, board_summary_data, board_summary_input):
        board_summary_data["board_summary"]["portfolio_snapshot"]["total_tools_registered"] = 3

        violations = self._validate(board_summary_data, board_summary_input)

        assert violations == [
            "tools_by_risk_tier sum (2) does not equal total_tools_registered (3)",
            "tools_by_governance_status sum (2) does not equal total_tools_registered (3)",
        ]

    def test_bucket_must_match_tool_assessments(self, board_summary_data, board_summary_input):
        snapshot = board_summary_data["board_summary"]["portfolio_snapshot"]
        # Sums still add up, but Otter.ai is High, not Moderate
        snapshot["tools_by_risk_tier"] = {"critical": 1, "high": 0, "moderate": 1, "low": 0}
        board_summary_data["board_summary"]["appendix_data"]["risk_distribution_data"]["values"] = [1, 0, 1, 0]

        violations = self._validate(board_summary_data, board_summary_input)

        assert violations == [
            "portfolio_snapshot.tools_by_risk_tier.high (0) does not match the 1 derived from tool assessments",
            "portfolio_snapshot.tools_by_risk_tier.moderate (1) does not match the 0 derived from tool assessments",
        ]

    def test_flag_tallies_derived_from_flag_reports(self, board_summary_data, board_summary_input):
        board_summary_data["board_summary"]["portfolio_snapshot"]["total_active_flags"]["low"] = 0

        violations = self._validate(board_summary_data, board_summary_input)

        assert violations == [
            "portfolio_snapshot.total_active_flags.low (0) does not match the 1 derived from tool assessments"
        ]

    def test_remediation_counts_must_sum(self, board_summary_data, board_summary_input):
        snapshot = board_summary_data["board_summary"]["portfolio_snapshot"]
        snapshot["recommendations_deferred"] = 1

        violations = self._validate(board_summary_data, board_summary_input)

        assert violations[0] == "Remediation counts sum (13) does not equal total_recommendations (12)"
        assert (
            "portfolio_snapshot.recommendations_deferred (1) does not match the 0 derived from tool assessments"
            in violations
        )

    def test_completion_percentage_mismatch(self, board_summary_data, board_summary_input):
        board_summary_data["board_summary"]["portfolio_snapshot"]["remediation_completion_percentage"] = 30.0

        violations = self._validate(board_summary_data, board_summary_input)

        assert violations == [
            "remediation_completion_percentage (30.0) does not match calculated value (25.0)"
        ]

    def test_completion_percentage_rounding_tolerated(self, board_summary_data, board_summary_input):
        board_summary_data["board_summary"]["portfolio_snapshot"]["remediation_completion_percentage"] = 25.5

        assert self._validate(board_summary_data, board_summary_input) == []

    def test_missing_critical_or_high_finding(self, board_summary_data, board_summary_input):
        findings = board_summary_data["board_summary"]["narrative"]["critical_and_high_findings"]["findings_detail"]
        board_summary_data["board_summary"]["narrative"]["critical_and_high_findings"]["findings_detail"] = [
            finding for finding in findings
            if finding["flag_title"] != "Meeting Recordings Retained Indefinitely"
        ]

        violations = self._validate(board_summary_data, board_summary_input)

        assert violations == [
            'Critical/High flag "Meeting Recordings Retained Indefinitely" from Otter.ai is missing from findings_detail'
        ]

    def test_finding_title_must_match_verbatim(self, board_summary_data, board_summary_input):
        findings = board_summary_data["board_summary"]["narrative"]["critical_and_high_findings"]["findings_detail"]
        findings[0]["flag_title"] = "Client data exposed to vendor model training"

        violations = self._validate(board_summary_data, board_summary_input)

        assert len(violations) == 1
        assert '"Client Data Exposed to Vendor Model Training" from ChatGPT' in violations[0]

    def test_medium_and_low_flags_not_required_in_findings(self, board_summary_data, board_summary_input):
        findings = board_summary_data["board_summary"]["narrative"]["critical_and_high_findings"]["findings_detail"]
        assert not any(finding["flag_severity"] in ("Medium", "Low") for finding in findings)

        assert self._validate(board_summary_data, board_summary_input) == []

    def test_tool_missing_from_appendix(self, board_summary_data, board_summary_input):
        table = board_summary_data["board_summary"]["appendix_data"]["tool_summary_table"]
        board_summary_data["board_summary"]["appendix_data"]["tool_summary_table"] = table[:1]

        violations = self._validate(board_summary_data, board_summary_input)

        assert violations == ['Tool "Otter.ai" is missing from appendix tool_summary_table']

    def test_chart_labels_in_fixed_order(self, board_summary_data, board_summary_input):
        chart = board_summary_data["board_summary"]["appendix_data"]["governance_distribution_data"]
        chart["labels"] = ["Shadow AI", "Unmanaged", "Partially Managed", "Managed"]

        violations = self._validate(board_summary_data, board_summary_input)

        assert violations == [
            "governance_distribution_data labels must be ['Managed', 'Partially Managed', 'Unmanaged', "
            "'Shadow AI'] in that order, got ['Shadow AI', 'Unmanaged', 'Partially Managed', 'Managed']"
        ]

    def test_chart_values_must_match_snapshot(self, board_summary_data, board_summary_input):
        chart = board_summary_data["board_summary"]["appendix_data"]["remediation_progress_data"]
        chart["values"] = [3, 2, 6, 1]

        violations = self._validate(board_summary_data, board_summary_input)

        assert violations == ["remediation_progress_data values do not match portfolio_snapshot remediation counts"]

    def test_chart_value_count(self, board_summary_data, board_summary_input):
        chart = board_summary_data["board_summary"]["appendix_data"]["risk_distribution_data"]
        chart["values"] = [1, 1, 0]

        violations = self._validate(board_summary_data, board_summary_input)

        assert violations == ["risk_distribution_data should have 4 values, got 3"]

    def test_first_report_excludes_comparisons(self, board_summary_data, board_summary_input):
        summary = board_summary_data["board_summary"]
        summary["changes_since_last_report"]["included"] = True
        summary["appendix_data"]["risk_trend_data"]["included"] = True

        violations = self._validate(board_summary_data, board_summary_input)

        assert violations == [
            "changes_since_last_report.included must be false when is_first_report is true",
            "risk_trend_data.included must be false when is_first_report is true",
        ]

    def test_later_report_may_include_comparisons(self, board_summary_data, board_summary_input):
        summary = board_summary_data["board_summary"]
        summary["report_metadata"]["is_first_report"] = False
        summary["report_metadata"]["previous_report_date"] = "2025-12-31"
        summary["changes_since_last_report"]["included"] = True

        assert self._validate(board_summary_data, board_summary_input) == []

    def test_framework_terms_rejected_in_narrative(self, board_summary_data, board_summary_input):
        narrative = board_summary_data["board_summary"]["narrative"]
        narrative["risk_posture_analysis"] += " Gaps map to the NIST AI RMF."
        narrative["leadership_action_items"]["narrative"] += " This also helps with GDPR."

        violations = self._validate(board_summary_data, board_summary_input)

        assert violations == [
            'Framework term "NIST" found in narrative section "risk_posture_analysis"',
            'Framework term "GDPR" found in narrative section "leadership_action_items.narrative"',
            'Framework term "AI RMF" found in narrative section "risk_posture_analysis"',
            'Framework term "RMF" found in narrative section "risk_posture_analysis"',
        ]

    def test_framework_terms_case_sensitive(self, board_summary_data, board_summary_input):
        board_summary_data["board_summary"]["narrative"]["executive_overview"] += " Privacy rules (gdpr-style) apply."

        assert self._validate(board_summary_data, board_summary_input) == []

    def test_action_items_required_unless_no_action_needed(self, board_summary_data, board_summary_input):
        board_summary_data["board_summary"]["narrative"]["leadership_action_items"]["action_items"] = []

        violations = self._validate(board_summary_data, board_summary_input)

        assert violations == ["no_action_needed is false but action_items array is empty"]

    def test_no_action_needed_with_items(self, board_summary_data, board_summary_input):
        board_summary_data["board_summary"]["narrative"]["leadership_action_items"]["no_action_needed"] = True

        violations = self._validate(board_summary_data, board_summary_input)

        assert violations == ["no_action_needed is true but action_items array is not empty"]

    def test_tools_included_matches_assessments(self, board_summary_data, board_summary_input):
        board_summary_data["metadata"]["tools_included"] = 3

        violations = self._validate(board_summary_data, board_summary_input)

        assert violations == ["metadata.tools_included (3) does not match tool_assessments count (2)"]

    def test_untracked_progress_counts_as_not_started(
        self, board_summary_data, organization, chatgpt_assessment, otter_assessment
    ):
        # Without tracked progress all 12 planned recommendations are not started
        upstream = BoardSummaryInput(
            organization=organization,
            tool_assessments=[
                chatgpt_assessment.model_copy(update={"remediation_progress": None}),
                otter_assessment,
            ],
        )

        violations = self._validate(board_summary_data, upstream)

        assert violations == [
            "portfolio_snapshot.recommendations_completed (3) does not match the 0 derived from tool assessments",
            "portfolio_snapshot.recommendations_in_progress (2) does not match the 0 derived from tool assessments",
            "portfolio_snapshot.recommendations_not_started (7) does not match the 12 derived from tool assessments",
        ]

    def test_total_recommendations_follows_plans_not_progress(
        self, board_summary_data, organization, chatgpt_assessment, otter_assessment
    ):
        # model_copy skips validation, so progress can under-count the 6-item plan
        upstream = BoardSummaryInput(
            organization=organization,
            tool_assessments=[
                chatgpt_assessment.model_copy(update={"remediation_progress": RemediationProgress(completed=1)}),
                otter_assessment,
            ],
        )
        snapshot = board_summary_data["board_summary"]["portfolio_snapshot"]
        snapshot.update(
            total_recommendations=7,
            recommendations_completed=1,
            recommendations_in_progress=0,
            recommendations_not_started=6,
            remediation_completion_percentage=14.3,
        )
        board_summary_data["board_summary"]["appendix_data"]["remediation_progress_data"]["values"] = [1, 0, 6, 0]

        violations = self._validate(board_summary_data, upstream)

        assert violations == [
            "portfolio_snapshot.total_recommendations (7) does not match the 12 derived from tool assessments",
        ]

    def test_validation_is_idempotent(self, board_summary_data, board_summary_input):
        board_summary_data["metadata"]["tools_included"] = 5
        response = BoardSummaryResponse.model_validate(board_summary_data)

        first = self.rules.validate(response, board_summary_input)
        second = self.rules.validate(response, board_summary_input)

        assert first == second
        assert len(first) == 1

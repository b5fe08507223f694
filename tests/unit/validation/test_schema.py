"""
Unit tests for schema validation against artifact models.
"""

import pytest

from ai_risk_reporting.models.classification import ClassificationResponse
from ai_risk_reporting.models.flags import FlagReportResponse
from ai_risk_reporting.models.remediation import RemediationResponse
from ai_risk_reporting.validation.schema import SchemaValidator, format_path


class TestSchemaValidator:
    """Structural typing only: first offending field is reported."""

    def test_valid_flag_report(self, flag_report_data):
        result = SchemaValidator(FlagReportResponse).validate(flag_report_data)

        assert result.ok
        assert isinstance(result.artifact, FlagReportResponse)
        assert len(result.artifact.flag_report.flags) == 6

    def test_missing_required_field(self, flag_report_data):
        del flag_report_data["flag_report"]["executive_summary"]

        result = SchemaValidator(FlagReportResponse).validate(flag_report_data)

        assert not result.ok
        assert result.error.path == "flag_report.executive_summary"
        assert result.error.expected == "required field"
        assert result.error.actual == "missing"
        assert result.error.kind == "schema"

    def test_enum_violation_reports_path_and_allowed_values(self, flag_report_data):
        flag_report_data["flag_report"]["flags"][2]["severity"] = "Severe"

        result = SchemaValidator(FlagReportResponse).validate(flag_report_data)

        assert not result.ok
        assert result.error.path == "flag_report.flags.2.severity"
        assert "Critical" in result.error.expected
        assert "Severe" in result.error.actual

    def test_short_description_rejected(self, flag_report_data):
        flag_report_data["flag_report"]["flags"][0]["description"] = "Too short"

        result = SchemaValidator(FlagReportResponse).validate(flag_report_data)

        assert not result.ok
        assert result.error.path == "flag_report.flags.0.description"
        assert result.error.expected == "at least 10 characters"

    def test_negative_count_rejected(self, flag_report_data):
        flag_report_data["flag_report"]["flag_summary"]["low"] = -1

        result = SchemaValidator(FlagReportResponse).validate(flag_report_data)

        assert not result.ok
        assert result.error.path == "flag_report.flag_summary.low"
        assert result.error.expected == ">= 0"

    def test_empty_recommendation_list_rejected(self, remediation_data):
        remediation_data["remediation_plan"]["strategies"][2]["recommendations"] = []

        result = SchemaValidator(RemediationResponse).validate(remediation_data)

        assert not result.ok
        assert result.error.path == "remediation_plan.strategies.2.recommendations"
        assert result.error.expected == "at least 1 items"

    def test_wrong_schema_version_rejected(self, remediation_data):
        remediation_data["metadata"]["schema_version"] = "2.0"

        result = SchemaValidator(RemediationResponse).validate(remediation_data)

        assert not result.ok
        assert result.error.path == "metadata.schema_version"

    def test_unknown_keys_ignored(self, flag_report_data):
        flag_report_data["commentary"] = "Here is your report."

        result = SchemaValidator(FlagReportResponse).validate(flag_report_data)

        assert result.ok

    @pytest.mark.parametrize(
        "score, expected",
        [(0, ">= 1"), (6, "<= 5")],
    )
    def test_dimension_score_out_of_range_rejected(self, classification_data, score, expected):
        classification_data["classification"]["dimensions"]["data_sensitivity"]["score"] = score

        result = SchemaValidator(ClassificationResponse).validate(classification_data)

        assert not result.ok
        assert result.error.path == "classification.dimensions.data_sensitivity.score"
        assert result.error.expected == expected
        assert result.error.actual == f"int {score}"

    def test_short_justification_rejected(self, classification_data):
        classification_data["classification"]["dimensions"]["human_oversight"]["justification"] = "Weak."

        result = SchemaValidator(ClassificationResponse).validate(classification_data)

        assert not result.ok
        assert result.error.path == "classification.dimensions.human_oversight.justification"
        assert result.error.expected == "at least 10 characters"

    def test_error_count_and_limit(self, flag_report_data):
        for flag in flag_report_data["flag_report"]["flags"]:
            flag["severity"] = "Severe"

        result = SchemaValidator(FlagReportResponse, error_limit=2).validate(flag_report_data)

        assert not result.ok
        assert result.error_count == 6
        assert len(result.other_errors) == 2

    def test_non_object_rejected(self):
        result = SchemaValidator(FlagReportResponse).validate(["not", "an", "object"])

        assert not result.ok
        assert result.error.path == "root"
        assert result.error.actual == "list"

    def test_structural_error_str(self, flag_report_data):
        del flag_report_data["metadata"]

        result = SchemaValidator(FlagReportResponse).validate(flag_report_data)

        assert str(result.error) == "metadata: Field required (expected required field, got missing)"


@pytest.mark.parametrize(
    "loc, expected",
    [
        ((), "root"),
        (("flag_report",), "flag_report"),
        (("flag_report", "flags", 3, "title"), "flag_report.flags.3.title"),
    ],
)
def test_format_path(loc, expected):
    assert format_path(loc) == expected

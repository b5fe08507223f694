"""
Business rules for risk classifications.

Checks the arithmetic of the rubric (score = base + modifiers, average,
tier bucketing and override floors), the comparison against the profile's
default scores, enrichment coverage and reassessment consistency.
"""

from ai_risk_reporting.models.classification import DIMENSIONS, ClassificationResponse
from ai_risk_reporting.models.enums import AssessmentConfidence, AssessmentType
from ai_risk_reporting.models.input_models import ClassificationInput
from .business_rules import BusinessRuleValidator
from .tiers import (
    classification_floors,
    compute_classification_tier,
    dimension_average,
    expected_dimension_score,
    expected_direction,
    tier_below,
    tier_from_average,
)

AVERAGE_TOLERANCE = 0.005


class ClassificationRules(BusinessRuleValidator[ClassificationResponse, ClassificationInput]):
    name = "risk_classification"

    def _checks(self) -> list:
        return [
            self._check_tool_identity,
            self._check_dimension_scores,
            self._check_average,
            self._check_overall_tier,
            self._check_score_comparisons,
            self._check_enrichment_coverage,
            self._check_assessment_confidence,
            self._check_reassessment,
        ]

    def _check_tool_identity(self, response: ClassificationResponse, upstream: ClassificationInput) -> list[str]:
        expected = upstream.tool_profile.tool_profile.tool_name
        actual = response.classification.tool_name
        if actual != expected:
            return [f'tool_name is "{actual}" but the tool profile is for "{expected}"']
        return []

    def _check_dimension_scores(self, response: ClassificationResponse, upstream: ClassificationInput) -> list[str]:
        violations = []
        dimensions = response.classification.dimensions
        for name in DIMENSIONS:
            dim = getattr(dimensions, name)
            adjustments = [m.adjustment for m in dim.modifiers_applied]
            expected = expected_dimension_score(dim.base_score, adjustments)
            if dim.score != expected:
                shown = ", ".join(str(a) for a in adjustments) or "none"
                violations.append(
                    f"{name}: final score {dim.score} does not match base_score ({dim.base_score}) "
                    f"+ modifiers ({shown}) = expected {expected}"
                )
        return violations

    def _check_average(self, response: ClassificationResponse, upstream: ClassificationInput) -> list[str]:
        overall = response.classification.overall_risk
        average = dimension_average(response.classification.dimensions.scores())
        violations = []
        if abs(overall.dimension_average - average) > AVERAGE_TOLERANCE:
            violations.append(
                f"dimension_average is {overall.dimension_average} but computed average is {average:g}"
            )
        expected_bucket = tier_from_average(average)
        if overall.tier_from_average != expected_bucket:
            violations.append(
                f'tier_from_average is "{overall.tier_from_average.value}" but average {average:g} '
                f'maps to "{expected_bucket.value}"'
            )
        return violations

    def _check_overall_tier(self, response: ClassificationResponse, upstream: ClassificationInput) -> list[str]:
        c = response.classification
        scores = c.dimensions.scores()
        floor = compute_classification_tier(*scores, c.governance_status.level)
        if tier_below(c.overall_risk.tier, floor):
            applied = classification_floors(*scores, c.governance_status.level)
            rules = ", ".join(f"{rule} -> {tier.value}" for rule, tier in applied) or "none"
            return [
                f'overall tier "{c.overall_risk.tier.value}" is below the minimum required '
                f'"{floor.value}" per rubric overrides (overrides: {rules})'
            ]
        return []

    def _check_score_comparisons(self, response: ClassificationResponse, upstream: ClassificationInput) -> list[str]:
        violations = []
        c = response.classification
        defaults = upstream.tool_profile.default_risk_assessment
        for name in DIMENSIONS:
            key = f"{name}_change"
            change = getattr(c.score_comparison_to_defaults, key)
            expected = expected_direction(change.default_score, change.final_score)
            if change.direction != expected:
                violations.append(
                    f'{key}.direction is "{change.direction.value}" but default={change.default_score} '
                    f'-> final={change.final_score} implies "{expected.value}"'
                )
            score = getattr(c.dimensions, name).score
            if change.final_score != score:
                violations.append(
                    f"{key}.final_score ({change.final_score}) does not match dimension score ({score})"
                )
            default = defaults.default_for(name)
            if change.default_score != default:
                violations.append(
                    f"{key}.default_score ({change.default_score}) does not match the profile default ({default})"
                )
        return violations

    def _check_enrichment_coverage(self, response: ClassificationResponse, upstream: ClassificationInput) -> list[str]:
        violations = []
        cov = response.classification.enrichment_coverage
        if cov.questions_answered + cov.questions_unanswered != cov.questions_total:
            violations.append(
                f"Enrichment coverage: answered ({cov.questions_answered}) + unanswered "
                f"({cov.questions_unanswered}) != total ({cov.questions_total})"
            )
        answered = len(upstream.enrichment_answers)
        if cov.questions_answered != answered:
            violations.append(
                f"Enrichment coverage: questions_answered ({cov.questions_answered}) does not match "
                f"the {answered} answer(s) supplied"
            )
        unanswered = len(upstream.unanswered_question_ids)
        if cov.questions_unanswered != unanswered:
            violations.append(
                f"Enrichment coverage: questions_unanswered ({cov.questions_unanswered}) does not match "
                f"the {unanswered} unanswered question(s) supplied"
            )
        return violations

    def _check_assessment_confidence(self, response: ClassificationResponse, upstream: ClassificationInput) -> list[str]:
        cov = response.classification.enrichment_coverage
        if cov.questions_total == 0:
            return []
        violations = []
        ratio = cov.questions_answered / cov.questions_total
        if ratio >= 1 and cov.assessment_confidence != AssessmentConfidence.HIGH:
            violations.append(
                f'All questions answered but assessment_confidence is '
                f'"{cov.assessment_confidence.value}" instead of "High"'
            )
        if ratio < 0.5 and cov.assessment_confidence == AssessmentConfidence.HIGH:
            violations.append('Less than half of questions answered but assessment_confidence is "High"')
        return violations

    def _check_reassessment(self, response: ClassificationResponse, upstream: ClassificationInput) -> list[str]:
        violations = []
        assessment_type = response.classification.assessment_type
        is_reassessment = response.reassessment_comparison.is_reassessment
        if assessment_type == AssessmentType.REASSESSMENT and not is_reassessment:
            violations.append(
                'assessment_type is "reassessment" but reassessment_comparison.is_reassessment is false'
            )
        if assessment_type == AssessmentType.INITIAL and is_reassessment:
            violations.append(
                'assessment_type is "initial" but reassessment_comparison.is_reassessment is true'
            )
        has_previous = upstream.previous_classification is not None
        if has_previous and not is_reassessment:
            violations.append(
                "A previous classification was supplied but reassessment_comparison.is_reassessment is false"
            )
        if not has_previous and is_reassessment:
            violations.append(
                "reassessment_comparison.is_reassessment is true but no previous classification was supplied"
            )
        return violations

"""
Business rules for tool profiles.

- overall_default_tier must match the rubric applied to the four defaults
- enrichment question ids must be unique
"""

from collections import Counter

from ai_risk_reporting.models.input_models import ExtractionRequest
from ai_risk_reporting.models.profile import ToolProfileResponse
from .business_rules import BusinessRuleValidator
from .tiers import compute_default_tier


class ProfileRules(BusinessRuleValidator[ToolProfileResponse, ExtractionRequest]):
    name = "tool_profile"

    def _checks(self) -> list:
        return [self._check_default_tier, self._check_question_ids]

    def _check_default_tier(self, profile: ToolProfileResponse, request: ExtractionRequest) -> list[str]:
        risk = profile.default_risk_assessment
        scores = (
            risk.data_sensitivity_default.score,
            risk.decision_impact_default.score,
            risk.affected_parties_default.score,
            risk.human_oversight_default.score,
        )
        expected = compute_default_tier(scores)
        if risk.overall_default_tier != expected:
            return [
                f'overall_default_tier is "{risk.overall_default_tier.value}" but rubric expects '
                f'"{expected.value}" (scores: {", ".join(str(s) for s in scores)})'
            ]
        return []

    def _check_question_ids(self, profile: ToolProfileResponse, request: ExtractionRequest) -> list[str]:
        counts = Counter(q.question_id for q in profile.enrichment_questions)
        return [
            f"Duplicate enrichment question ID: {question_id}"
            for question_id, n in counts.items()
            if n > 1
        ]

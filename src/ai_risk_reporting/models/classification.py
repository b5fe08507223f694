"""
Risk classification: output of the risk_classification stage.

Four dimension scores (data sensitivity, decision impact, affected parties,
human oversight) are each derived from a rubric base score plus modifiers,
then averaged and bucketed into an overall tier with override floors.
"""

from typing import Literal, Optional

from pydantic import Field

from ai_risk_reporting.models.common import ArtifactModel, Count, NonEmptyStr, Score
from ai_risk_reporting.models.enums import (
    AssessmentConfidence,
    AssessmentType,
    GovernanceStatus,
    InputBasis,
    RiskTier,
    ScoreDirection,
)

DIMENSIONS = (
    "data_sensitivity",
    "decision_impact",
    "affected_parties",
    "human_oversight",
)
"""The four scored risk dimensions, in canonical order."""


class Modifier(ArtifactModel):
    modifier: NonEmptyStr
    adjustment: int
    reason: NonEmptyStr


class DimensionScore(ArtifactModel):
    """
    One 1-5 risk sub-score.

    `score` must equal `base_score` plus the sum of modifier adjustments,
    clamped to the 1-5 range. That relation is a business rule, not a
    structural one, so it is checked by the classification rules.
    """

    score: Score
    base_score: Score
    modifiers_applied: tuple[Modifier, ...]
    input_basis: InputBasis
    key_inputs: tuple[NonEmptyStr, ...] = Field(..., min_length=1)
    justification: str = Field(..., min_length=10)

    @property
    def modifier_total(self) -> int:
        return sum(m.adjustment for m in self.modifiers_applied)


class Dimensions(ArtifactModel):
    data_sensitivity: DimensionScore
    decision_impact: DimensionScore
    affected_parties: DimensionScore
    human_oversight: DimensionScore

    def scores(self) -> tuple[int, int, int, int]:
        """Final scores in canonical dimension order."""
        return tuple(getattr(self, name).score for name in DIMENSIONS)


class GovernanceAssessment(ArtifactModel):
    level: GovernanceStatus
    key_inputs: tuple[NonEmptyStr, ...]
    gaps_identified: tuple[str, ...]
    justification: str = Field(..., min_length=10)


class OverrideApplied(ArtifactModel):
    override_rule: NonEmptyStr
    effect: NonEmptyStr


class OverallRisk(ArtifactModel):
    tier: RiskTier
    dimension_average: float = Field(..., ge=1, le=5)
    tier_from_average: RiskTier
    overrides_applied: tuple[OverrideApplied, ...]
    calculation_trace: str = Field(..., min_length=10)
    summary: str = Field(..., min_length=20)


class ScoreChange(ArtifactModel):
    default_score: Score
    final_score: Score
    direction: ScoreDirection
    reason: NonEmptyStr


class ScoreComparison(ArtifactModel):
    data_sensitivity_change: ScoreChange
    decision_impact_change: ScoreChange
    affected_parties_change: ScoreChange
    human_oversight_change: ScoreChange


class EnrichmentCoverage(ArtifactModel):
    questions_total: Count
    questions_answered: Count
    questions_unanswered: Count
    unanswered_dimensions: tuple[str, ...]
    assessment_confidence: AssessmentConfidence
    confidence_note: str = Field(..., min_length=10)


class Classification(ArtifactModel):
    tool_name: NonEmptyStr
    tool_tier: NonEmptyStr
    assessment_type: AssessmentType
    dimensions: Dimensions
    governance_status: GovernanceAssessment
    overall_risk: OverallRisk
    score_comparison_to_defaults: ScoreComparison
    enrichment_coverage: EnrichmentCoverage


class PreviousScores(ArtifactModel):
    data_sensitivity: Optional[Score]
    decision_impact: Optional[Score]
    affected_parties: Optional[Score]
    human_oversight: Optional[Score]


class ReassessmentChange(ArtifactModel):
    dimension: NonEmptyStr
    previous_score: Score
    new_score: Score
    change_driver: NonEmptyStr


class ReassessmentComparison(ArtifactModel):
    is_reassessment: bool
    previous_tier: Optional[RiskTier]
    previous_scores: PreviousScores
    changes: tuple[ReassessmentChange, ...]
    tier_changed: bool
    change_summary: Optional[str]


class ClassificationMetadata(ArtifactModel):
    classification_generated_at: NonEmptyStr
    schema_version: Literal["1.0"]
    prompt_version: Literal["risk_classification_v1"]
    tool_profile_version: NonEmptyStr
    rubric_version: Literal["risk_rubric_v1"]


class ClassificationResponse(ArtifactModel):
    """Complete risk classification for one tool."""

    classification: Classification
    reassessment_comparison: ReassessmentComparison
    metadata: ClassificationMetadata

"""
Remediation plan: output of the remediation_plan stage.

Recommendations are grouped into prioritized strategies and scheduled into
ordered implementation phases. Recommendation dependencies form a directed
graph that must stay acyclic (see validation.dependency_graph).
"""

from typing import Iterator, Literal

from pydantic import Field

from ai_risk_reporting.models.common import ArtifactModel, Count, NonEmptyStr, Score
from ai_risk_reporting.models.enums import (
    Effort,
    GovernanceStatus,
    RecommendationType,
    ResolutionType,
    RiskTier,
    Timeframe,
)


class FlagResolution(ArtifactModel):
    flag_id: NonEmptyStr
    flag_title: NonEmptyStr
    resolution_type: ResolutionType


class Recommendation(ArtifactModel):
    rec_id: NonEmptyStr
    title: NonEmptyStr
    type: RecommendationType
    effort: Effort
    timeframe: Timeframe
    description: NonEmptyStr
    steps: tuple[NonEmptyStr, ...] = Field(..., min_length=1)
    owner_suggestion: NonEmptyStr
    flags_addressed: tuple[str, ...]
    dependencies: tuple[str, ...]
    success_criteria: NonEmptyStr


class Strategy(ArtifactModel):
    strategy_id: NonEmptyStr
    strategy_name: NonEmptyStr
    strategy_goal: NonEmptyStr
    priority: int = Field(..., gt=0)
    timeframe: Timeframe
    flags_resolved: tuple[FlagResolution, ...]
    recommendations: tuple[Recommendation, ...] = Field(..., min_length=1)


class ImplementationPhase(ArtifactModel):
    phase_number: int = Field(..., gt=0)
    phase_name: NonEmptyStr
    recommendations: tuple[NonEmptyStr, ...] = Field(..., min_length=1)
    milestone: NonEmptyStr


class ImplementationSequence(ArtifactModel):
    description: NonEmptyStr
    phases: tuple[ImplementationPhase, ...] = Field(..., min_length=1)


class RiskState(ArtifactModel):
    risk_tier: RiskTier
    data_sensitivity: Score
    decision_impact: Score
    affected_parties: Score
    human_oversight: Score
    governance_status: GovernanceStatus


class ProjectedRiskState(ArtifactModel):
    risk_tier: RiskTier
    changes: tuple[NonEmptyStr, ...] = Field(..., min_length=1)


class RiskReductionProjection(ArtifactModel):
    current_state: RiskState
    after_quick_wins: ProjectedRiskState
    after_full_remediation: ProjectedRiskState
    residual_risk_note: NonEmptyStr


class PlanSummary(ArtifactModel):
    total_recommendations: Count
    total_strategies: Count
    flags_addressed: Count
    flags_total: Count
    quick_wins_available: Count
    projected_risk_tier_after_full_remediation: RiskTier
    projected_risk_tier_after_quick_wins: RiskTier
    executive_summary: NonEmptyStr


class RemediationPlan(ArtifactModel):
    tool_name: NonEmptyStr
    tool_tier: NonEmptyStr
    current_risk_tier: RiskTier
    current_governance_status: GovernanceStatus
    generated_at: NonEmptyStr
    plan_summary: PlanSummary
    strategies: tuple[Strategy, ...]
    implementation_sequence: ImplementationSequence
    risk_reduction_projection: RiskReductionProjection

    def iter_recommendations(self) -> Iterator[Recommendation]:
        """All recommendations across strategies, in listed order."""
        for strategy in self.strategies:
            yield from strategy.recommendations


class ConsolidationRecord(ArtifactModel):
    merged_from: tuple[NonEmptyStr, ...] = Field(..., min_length=1)
    merged_into: NonEmptyStr
    reason: NonEmptyStr


class RemediationMetadata(ArtifactModel):
    schema_version: Literal["1.0"]
    prompt_version: NonEmptyStr
    generation_rules_applied: tuple[str, ...]
    consolidations_performed: tuple[ConsolidationRecord, ...]


class RemediationResponse(ArtifactModel):
    remediation_plan: RemediationPlan
    metadata: RemediationMetadata

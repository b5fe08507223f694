"""
Rubric tier arithmetic shared by the profile and classification rules.

Average bucketing: <= 2.0 Low, <= 3.0 Moderate, <= 4.0 High, > 4.0 Critical.
Override floors are combined by taking the most severe applicable floor.
"""

from typing import Sequence

from ai_risk_reporting.models.enums import GovernanceStatus, RiskTier, ScoreDirection


def dimension_average(scores: Sequence[int]) -> float:
    return sum(scores) / len(scores)


def tier_from_average(average: float) -> RiskTier:
    if average <= 2.0:
        return RiskTier.LOW
    if average <= 3.0:
        return RiskTier.MODERATE
    if average <= 4.0:
        return RiskTier.HIGH
    return RiskTier.CRITICAL


def expected_dimension_score(base_score: int, adjustments: Sequence[int]) -> int:
    """Base plus modifier adjustments, clamped to the 1-5 scale."""
    return min(5, max(1, base_score + sum(adjustments)))


def compute_default_tier(scores: Sequence[int]) -> RiskTier:
    """
    Tier implied by a tool profile's default scores.

    Average bucketing with a High floor when any dimension scores 5.
    """
    tier = tier_from_average(dimension_average(scores))
    if 5 in scores:
        tier = RiskTier.max_of(tier, RiskTier.HIGH)
    return tier


def classification_floors(
    data_sensitivity: int,
    decision_impact: int,
    affected_parties: int,
    human_oversight: int,
    governance: GovernanceStatus,
) -> list[tuple[str, RiskTier]]:
    """Override floors that apply to a classification, as (rule, floor) pairs."""
    floors = []
    if 5 in (data_sensitivity, decision_impact, affected_parties, human_oversight):
        floors.append(("any_dimension_5", RiskTier.HIGH))
    if data_sensitivity == 5 and human_oversight >= 4:
        floors.append(("sensitive_data_low_oversight", RiskTier.CRITICAL))
    if governance == GovernanceStatus.SHADOW_AI:
        floors.append(("shadow_ai", RiskTier.HIGH))
    return floors


def compute_classification_tier(
    data_sensitivity: int,
    decision_impact: int,
    affected_parties: int,
    human_oversight: int,
    governance: GovernanceStatus,
) -> RiskTier:
    """
    Minimum acceptable overall tier for a classification.

    The average bucket raised to the most severe applicable override floor.
    """
    scores = (data_sensitivity, decision_impact, affected_parties, human_oversight)
    tier = tier_from_average(dimension_average(scores))
    for _, floor in classification_floors(*scores, governance):
        tier = RiskTier.max_of(tier, floor)
    return tier


def expected_direction(default_score: int, final_score: int) -> ScoreDirection:
    if final_score > default_score:
        return ScoreDirection.INCREASED
    if final_score < default_score:
        return ScoreDirection.DECREASED
    return ScoreDirection.UNCHANGED


def tier_below(tier: RiskTier, floor: RiskTier) -> bool:
    """True when `tier` is less severe than `floor`."""
    return RiskTier.get_ordinal(tier) < RiskTier.get_ordinal(floor)

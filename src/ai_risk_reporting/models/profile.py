"""
Tool intelligence profile: output of the tool_profile stage.

Describes a single AI tool at a given subscription tier - how it handles
data, its security posture, the default risk scores for the tier and the
enrichment questions an organization should answer to refine them.
"""

from typing import Literal, Optional

from pydantic import Field

from ai_risk_reporting.models.common import ArtifactModel, NonEmptyStr, Score
from ai_risk_reporting.models.enums import (
    AnswerFormat,
    Confidence,
    RiskDimension,
    RiskTier,
    Severity,
    ThirdPartySharing,
    ToolCategory,
    TrainsOnUserData,
    YesNoUnknown,
)


class ToolProfile(ArtifactModel):
    tool_name: NonEmptyStr
    vendor: NonEmptyStr
    tier: NonEmptyStr
    tier_specified_by_user: bool
    category: ToolCategory
    ai_capability_types: tuple[NonEmptyStr, ...] = Field(..., min_length=1)
    description: str = Field(..., min_length=10)
    website: NonEmptyStr
    knowledge_date_note: NonEmptyStr


class ConfidenceField(ArtifactModel):
    """A free-text fact with its source confidence."""

    value: NonEmptyStr
    detail: NonEmptyStr
    confidence: Confidence


class TrainingField(ArtifactModel):
    value: TrainsOnUserData
    detail: NonEmptyStr
    confidence: Confidence


class EncryptionField(ArtifactModel):
    in_transit: YesNoUnknown
    at_rest: YesNoUnknown
    confidence: Confidence


class SharingField(ArtifactModel):
    value: ThirdPartySharing
    detail: NonEmptyStr
    confidence: Confidence


class DataHandling(ArtifactModel):
    trains_on_user_data: TrainingField
    data_retention: ConfidenceField
    data_residency: ConfidenceField
    data_encryption: EncryptionField
    third_party_data_sharing: SharingField
    data_handling_risk_summary: str = Field(..., min_length=10)


class CertificationField(ArtifactModel):
    value: YesNoUnknown
    confidence: Confidence


class ValueField(ArtifactModel):
    value: NonEmptyStr
    confidence: Confidence


class SecurityPosture(ArtifactModel):
    soc2_certified: CertificationField
    hipaa_eligible: ValueField
    sso_support: ConfidenceField
    audit_logging: ValueField
    access_controls: ValueField
    other_certifications: tuple[str, ...]
    security_risk_summary: str = Field(..., min_length=10)


class EnterpriseReadiness(ArtifactModel):
    has_enterprise_tier: bool
    enterprise_tier_name: str
    enterprise_improvements: tuple[str, ...]
    admin_console: NonEmptyStr
    usage_analytics: NonEmptyStr
    deployment_options: NonEmptyStr


class DefaultScore(ArtifactModel):
    score: Score
    rationale: NonEmptyStr


class DefaultRiskAssessment(ArtifactModel):
    """Rubric scores assumed for the tier before any enrichment answers."""

    data_sensitivity_default: DefaultScore
    decision_impact_default: DefaultScore
    affected_parties_default: DefaultScore
    human_oversight_default: DefaultScore
    overall_default_tier: RiskTier
    scoring_note: NonEmptyStr

    def default_for(self, dimension: str) -> int:
        """Default score for a dimension name (e.g. 'data_sensitivity')."""
        return getattr(self, f"{dimension}_default").score


class KnownRiskFlag(ArtifactModel):
    flag: NonEmptyStr
    severity: Severity
    description: str = Field(..., min_length=10)
    source_confidence: Confidence


class EnrichmentQuestion(ArtifactModel):
    question_id: NonEmptyStr
    question: str = Field(..., min_length=5)
    why_it_matters: str = Field(..., min_length=5)
    answer_format: AnswerFormat
    options: tuple[str, ...]
    risk_dimension_affected: RiskDimension


class ProfileMetadata(ArtifactModel):
    assessment_generated_at: NonEmptyStr
    schema_version: Literal["1.0"]
    overall_confidence: Confidence


class ToolProfileResponse(ArtifactModel):
    """Complete tool intelligence profile as generated for one tool and tier."""

    tool_profile: ToolProfile
    data_handling: DataHandling
    security_posture: SecurityPosture
    enterprise_readiness: EnterpriseReadiness
    default_risk_assessment: DefaultRiskAssessment
    known_risk_flags: tuple[KnownRiskFlag, ...] = Field(..., min_length=1)
    enrichment_questions: tuple[EnrichmentQuestion, ...] = Field(..., min_length=3)
    tier_upgrade_note: Optional[str]
    metadata: ProfileMetadata

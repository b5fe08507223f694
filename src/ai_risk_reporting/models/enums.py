"""
Enumerations for risk reporting artifacts.

All enums are closed value domains - generated artifacts carrying a value
outside these sets fail schema validation.
"""

from enum import Enum


class StageId(str, Enum):
    """Pipeline stages, in dependency order."""

    TOOL_PROFILE = "tool_profile"
    RISK_CLASSIFICATION = "risk_classification"
    RISK_FLAGS = "risk_flags"
    REMEDIATION_PLAN = "remediation_plan"
    BOARD_SUMMARY = "board_summary"


class RiskTier(str, Enum):
    """
    Overall categorical risk level.

    Ordered from Low to Critical (can be used for ordinal comparisons).
    """

    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    CRITICAL = "Critical"

    @classmethod
    def get_ordinal(cls, tier: "RiskTier") -> int:
        """Get ordinal value for tier (0=Low, 1=Moderate, 2=High, 3=Critical)."""
        order = [cls.LOW, cls.MODERATE, cls.HIGH, cls.CRITICAL]
        return order.index(cls(tier))

    @classmethod
    def max_of(cls, *tiers: "RiskTier") -> "RiskTier":
        """Return the most severe of the given tiers."""
        return max((cls(t) for t in tiers), key=cls.get_ordinal)


class Severity(str, Enum):
    """Flag severity, most severe first."""

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class GovernanceStatus(str, Enum):
    """Organizational oversight maturity for a tool."""

    MANAGED = "Managed"
    PARTIALLY_MANAGED = "Partially Managed"
    UNMANAGED = "Unmanaged"
    SHADOW_AI = "Shadow AI"


class Effort(str, Enum):
    QUICK_WIN = "Quick Win"
    LOW_EFFORT = "Low Effort"
    MEDIUM_EFFORT = "Medium Effort"
    HIGH_EFFORT = "High Effort"
    STRATEGIC_INITIATIVE = "Strategic Initiative"


class Timeframe(str, Enum):
    IMMEDIATE = "Immediate"
    SHORT_TERM = "Short-term"
    MEDIUM_TERM = "Medium-term"
    LONG_TERM = "Long-term"


class RecommendationType(str, Enum):
    RESTRICT = "Restrict"
    UPGRADE = "Upgrade"
    POLICY = "Policy"
    PROCESS = "Process"
    COMMUNICATE = "Communicate"
    MONITOR = "Monitor"


class ResolutionType(str, Enum):
    FULLY_RESOLVED = "Fully Resolved"
    SEVERITY_REDUCED = "Severity Reduced"
    PARTIALLY_ADDRESSED = "Partially Addressed"


class FlagCategory(str, Enum):
    DATA_EXPOSURE = "data_exposure"
    ACCESS_CONTROL = "access_control"
    OUTPUT_RISK = "output_risk"
    GOVERNANCE_GAP = "governance_gap"
    REGULATORY_EXPOSURE = "regulatory_exposure"


class Confidence(str, Enum):
    """Source confidence used by the tool profile (lowercase by convention)."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AssessmentConfidence(str, Enum):
    """Confidence of a classification given its enrichment coverage."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ToolCategory(str, Enum):
    GENERATIVE_AI_PLATFORM = "Generative AI Platform"
    CODING_ASSISTANT = "AI Coding Assistant"
    WRITING_ASSISTANT = "AI Writing Assistant"
    AI_EMBEDDED_SAAS = "AI-Embedded SaaS"
    TRANSCRIPTION_MEETING = "AI Transcription/Meeting"
    IMAGE_VIDEO_GENERATION = "AI Image/Video Generation"
    DATA_ANALYSIS = "AI Data Analysis"
    CUSTOMER_SERVICE = "AI Customer Service"
    SALES_MARKETING = "AI Sales/Marketing"
    HR_RECRUITING = "AI HR/Recruiting"
    SECURITY = "AI Security"
    SEARCH = "AI Search"
    AGENT_AUTOMATION = "AI Agent/Automation"
    OTHER = "Other AI Tool"


class AnswerFormat(str, Enum):
    SINGLE_SELECT = "single_select"
    MULTI_SELECT = "multi_select"
    NUMERIC = "numeric"
    YES_NO = "yes_no"


class RiskDimension(str, Enum):
    DATA_SENSITIVITY = "data_sensitivity"
    DECISION_IMPACT = "decision_impact"
    AFFECTED_PARTIES = "affected_parties"
    HUMAN_OVERSIGHT = "human_oversight"
    GOVERNANCE_STATUS = "governance_status"


class TrainsOnUserData(str, Enum):
    YES = "Yes"
    NO = "No"
    OPT_OUT_AVAILABLE = "Opt-out available"
    VARIES_BY_TIER = "Varies by tier"
    UNKNOWN = "Unknown"


class YesNoUnknown(str, Enum):
    YES = "Yes"
    NO = "No"
    UNKNOWN = "Unknown"


class ThirdPartySharing(str, Enum):
    YES = "Yes"
    NO = "No"
    LIMITED = "Limited"
    UNKNOWN = "Unknown"


class AssessmentType(str, Enum):
    INITIAL = "initial"
    REASSESSMENT = "reassessment"


class InputBasis(str, Enum):
    ENRICHMENT = "enrichment"
    DEFAULT = "default"


class ScoreDirection(str, Enum):
    UNCHANGED = "unchanged"
    INCREASED = "increased"
    DECREASED = "decreased"


class ReportType(str, Enum):
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    AD_HOC = "Ad Hoc"


class PostureTrend(str, Enum):
    IMPROVING = "Improving"
    STABLE = "Stable"
    DETERIORATING = "Deteriorating"


class ActionType(str, Enum):
    BUDGET_APPROVAL = "Budget Approval"
    POLICY_APPROVAL = "Policy Approval"
    STRATEGIC_DECISION = "Strategic Decision"
    AWARENESS_ONLY = "Awareness Only"


class Urgency(str, Enum):
    IMMEDIATE = "Immediate"
    NEXT_30_DAYS = "Next 30 Days"
    NEXT_QUARTER = "Next Quarter"
    INFORMATIONAL = "Informational"


class RemediationStatus(str, Enum):
    COMPLETED = "Completed"
    IN_PROGRESS = "In Progress"
    NOT_STARTED = "Not Started"
    DEFERRED = "Deferred"


class ChartType(str, Enum):
    DONUT = "donut"
    BAR = "bar"
    STACKED_BAR = "stacked_bar"
    LINE = "line"


class DataCompleteness(str, Enum):
    COMPLETE = "Complete"
    PARTIAL = "Partial"

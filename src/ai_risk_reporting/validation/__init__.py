"""
Validation layer for generated artifacts.

- json_parse.py: Raw text -> JSON object (raises JSONParseError)
- schema.py: Structural check against the stage's pydantic model (first error reported)
- business_rules.py: Base class for per-stage rule validators (all violations collected)
- profile_rules.py / classification_rules.py / flag_rules.py /
  remediation_rules.py / board_summary_rules.py: Stage-specific rules
- dependency_graph.py: Remediation dependency graph checks (cycles, phases, coverage)
- tiers.py: Risk rubric arithmetic shared by the rule validators
"""

from .board_summary_rules import BoardSummaryRules, FRAMEWORK_TERMS, check_completion_percentage
from .business_rules import BusinessRuleValidator
from .classification_rules import ClassificationRules
from .dependency_graph import DependencyGraphValidator, find_cycles
from .exceptions import JSONParseError, ValidationError
from .flag_rules import FlagReportRules
from .json_parse import JSONResponseParser, strip_code_fences
from .profile_rules import ProfileRules
from .remediation_rules import RemediationRules
from .results import SchemaFailure, SchemaResult, SchemaSuccess, StructuralError
from .schema import SchemaValidator

__all__ = [
    # Parsing and structure
    "JSONResponseParser",
    "strip_code_fences",
    "SchemaValidator",
    "SchemaSuccess",
    "SchemaFailure",
    "SchemaResult",
    "StructuralError",
    # Business rules
    "BusinessRuleValidator",
    "ProfileRules",
    "ClassificationRules",
    "FlagReportRules",
    "RemediationRules",
    "BoardSummaryRules",
    "FRAMEWORK_TERMS",
    "check_completion_percentage",
    "DependencyGraphValidator",
    "find_cycles",
    # Exceptions
    "ValidationError",
    "JSONParseError",
]

"""
AI Risk Reporting: validated, board-ready documents from generated text.

Five chained stages turn an AI tool name into a board summary:
tool_profile -> risk_classification -> risk_flags -> remediation_plan -> board_summary

Each stage runs through one generate-validate-retry loop: the generation
capability's output is parsed, checked against the stage schema and then
against the stage's cross-field business rules. Only artifacts passing all
three are accepted.

Architecture: GenerationOrchestrator + Anthropic Messages client + per-stage validators
"""

__version__ = "0.1.0"

from ai_risk_reporting.orchestrator import (  # noqa: E402
    GenerationOrchestrator,
    StageFailure,
    StageSuccess,
    run_stage,
)

__all__ = ["__version__", "GenerationOrchestrator", "StageFailure", "StageSuccess", "run_stage"]

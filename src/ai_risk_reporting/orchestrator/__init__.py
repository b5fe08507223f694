"""
Generation orchestrator: one bounded generate-validate-retry loop for every stage.

- engine.py: GenerationOrchestrator and run_stage (public entry point)
- stages.py: Stage registry (input model, artifact model, rules per stage)
- states.py: State machine states and allowed transitions
- result.py: StageSuccess / StageFailure, Diagnostics, AttemptRecord
"""

from ai_risk_reporting.orchestrator.engine import (
    DEFAULT_ATTEMPT_BUDGET,
    GenerationOrchestrator,
    run_stage,
)
from ai_risk_reporting.orchestrator.result import (
    AttemptRecord,
    Diagnostics,
    StageFailure,
    StageResult,
    StageSuccess,
)
from ai_risk_reporting.orchestrator.stages import STAGES, StageDefinition, get_stage
from ai_risk_reporting.orchestrator.states import OrchestratorState

__all__ = [
    "GenerationOrchestrator",
    "run_stage",
    "DEFAULT_ATTEMPT_BUDGET",
    "StageSuccess",
    "StageFailure",
    "StageResult",
    "Diagnostics",
    "AttemptRecord",
    "StageDefinition",
    "STAGES",
    "get_stage",
    "OrchestratorState",
]

"""
Stage results and diagnostics.

run_stage always returns one of two shapes, discriminated by `ok`:
StageSuccess carries the accepted Artifact, StageFailure carries the
diagnostics of an exhausted run. Both carry the full attempt history.
"""

from dataclasses import dataclass, field
from typing import Literal, Optional, Union

from ai_risk_reporting.models.artifact import Artifact
from ai_risk_reporting.orchestrator.states import OrchestratorState
from ai_risk_reporting.validation.results import StructuralError


@dataclass(frozen=True)
class AttemptRecord:
    """
    Outcome of one generation attempt.

    Attributes:
        attempt: 1-based attempt number
        state_reached: Last state the attempt got to (PARSING, SCHEMA_VALIDATING,
            BUSINESS_VALIDATING or ACCEPTED)
        structural_error: Parse or schema error, if that is where it stopped
        other_errors: Further schema errors after the first, capped by
            SCHEMA_ERROR_LIMIT
        error_count: Total schema errors found, including any past the cap
        violations: Business rule violations, if it got that far
    """

    attempt: int
    state_reached: OrchestratorState
    structural_error: Optional[StructuralError] = None
    other_errors: tuple[str, ...] = ()
    error_count: int = 0
    violations: tuple[str, ...] = ()

    @property
    def accepted(self) -> bool:
        return self.state_reached == OrchestratorState.ACCEPTED

    @property
    def unlisted_errors(self) -> int:
        """Schema errors found but dropped by the cap."""
        listed = len(self.other_errors) + (1 if self.structural_error else 0)
        return max(self.error_count - listed, 0)

    def problems(self) -> list[str]:
        """Structural errors (if any) followed by violations, as display strings."""
        lines = [str(self.structural_error)] if self.structural_error else []
        lines.extend(self.other_errors)
        lines.extend(self.violations)
        return lines


@dataclass(frozen=True)
class Diagnostics:
    """
    What happened during a run.

    On failure `structural_error`, `other_errors` and `violations` describe
    the last attempt, so a caller always learns why the final candidate was
    rejected.
    """

    attempts_consumed: int
    structural_error: Optional[StructuralError] = None
    other_errors: tuple[str, ...] = ()
    violations: tuple[str, ...] = ()
    history: tuple[AttemptRecord, ...] = ()
    last_raw_output: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "attempts_consumed": self.attempts_consumed,
            "structural_error": str(self.structural_error) if self.structural_error else None,
            "other_errors": list(self.other_errors),
            "violations": list(self.violations),
            "history": [
                {
                    "attempt": record.attempt,
                    "state_reached": record.state_reached.value,
                    "problems": record.problems(),
                }
                for record in self.history
            ],
        }


@dataclass(frozen=True)
class StageSuccess:
    artifact: Artifact
    diagnostics: Diagnostics
    ok: Literal[True] = field(default=True, init=False)


@dataclass(frozen=True)
class StageFailure:
    diagnostics: Diagnostics
    ok: Literal[False] = field(default=False, init=False)

    def __str__(self) -> str:
        problems = []
        if self.diagnostics.structural_error:
            problems.append(str(self.diagnostics.structural_error))
        problems.extend(self.diagnostics.other_errors)
        problems.extend(self.diagnostics.violations)
        return (
            f"Stage failed after {self.diagnostics.attempts_consumed} attempt(s): "
            + "; ".join(problems)
        )


StageResult = Union[StageSuccess, StageFailure]

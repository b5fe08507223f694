"""
Orchestrator state machine.

One attempt walks REQUESTING -> PARSING -> SCHEMA_VALIDATING ->
BUSINESS_VALIDATING and ends ACCEPTED or RETRYING; RETRYING loops back to
REQUESTING while attempts remain, otherwise the run ends EXHAUSTED.
"""

from enum import Enum


class OrchestratorState(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    PARSING = "parsing"
    SCHEMA_VALIDATING = "schema_validating"
    BUSINESS_VALIDATING = "business_validating"
    ACCEPTED = "accepted"
    RETRYING = "retrying"
    EXHAUSTED = "exhausted"

    @property
    def is_terminal(self) -> bool:
        return self in (OrchestratorState.ACCEPTED, OrchestratorState.EXHAUSTED)


ALLOWED_TRANSITIONS: dict[OrchestratorState, frozenset[OrchestratorState]] = {
    OrchestratorState.IDLE: frozenset({OrchestratorState.REQUESTING}),
    OrchestratorState.REQUESTING: frozenset({OrchestratorState.PARSING}),
    OrchestratorState.PARSING: frozenset({OrchestratorState.SCHEMA_VALIDATING, OrchestratorState.RETRYING}),
    OrchestratorState.SCHEMA_VALIDATING: frozenset(
        {OrchestratorState.BUSINESS_VALIDATING, OrchestratorState.RETRYING}
    ),
    OrchestratorState.BUSINESS_VALIDATING: frozenset({OrchestratorState.ACCEPTED, OrchestratorState.RETRYING}),
    OrchestratorState.RETRYING: frozenset({OrchestratorState.REQUESTING, OrchestratorState.EXHAUSTED}),
    OrchestratorState.ACCEPTED: frozenset(),
    OrchestratorState.EXHAUSTED: frozenset(),
}


def can_transition(current: OrchestratorState, target: OrchestratorState) -> bool:
    return target in ALLOWED_TRANSITIONS[current]

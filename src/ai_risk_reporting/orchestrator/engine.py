"""
Generate-validate-retry engine.

One generic loop serves every stage; the stage definition supplies the
input model, the artifact schema and the business rules. Per attempt:

    REQUESTING          build a deterministic request and call the client
    PARSING             raw text -> JSON object (failure is a structural error)
    SCHEMA_VALIDATING   JSON object -> typed artifact (first error reported)
    BUSINESS_VALIDATING stage rules over artifact + upstream (all violations)
    ACCEPTED            return the artifact

Any validation failure is recorded and the next attempt receives the whole
history as corrective context. Capability errors (LLMClientError) are not
retried and propagate to the caller.

Usage:
    orchestrator = GenerationOrchestrator(client, settings)
    result = await orchestrator.run(StageId.RISK_FLAGS, flag_input)
    if result.ok:
        report = result.artifact.payload
"""

import uuid
from collections.abc import Mapping
from typing import Any, Optional

import structlog

from ai_risk_reporting.config import Settings
from ai_risk_reporting.llm.base_client import BaseLLMClient
from ai_risk_reporting.llm.exceptions import LLMClientError
from ai_risk_reporting.llm.prompt_builder import PromptBuilder
from ai_risk_reporting.models.artifact import Artifact
from ai_risk_reporting.models.common import InputModel
from ai_risk_reporting.models.enums import StageId
from ai_risk_reporting.monitoring.metrics import (
    generation_attempts_total,
    stage_runs_total,
    validation_failures_total,
)
from ai_risk_reporting.orchestrator.result import (
    AttemptRecord,
    Diagnostics,
    StageFailure,
    StageResult,
    StageSuccess,
)
from ai_risk_reporting.orchestrator.stages import StageDefinition, get_stage
from ai_risk_reporting.orchestrator.states import OrchestratorState, can_transition
from ai_risk_reporting.validation.exceptions import JSONParseError
from ai_risk_reporting.validation.json_parse import JSONResponseParser
from ai_risk_reporting.validation.results import StructuralError
from ai_risk_reporting.validation.schema import SchemaValidator

logger = structlog.get_logger(__name__)

DEFAULT_ATTEMPT_BUDGET = 3


class GenerationOrchestrator:
    """
    Bounded retry state machine around the generation client.

    Holds configuration only; every run keeps its state in locals, so one
    instance may serve concurrent runs for different tools.

    Attributes:
        client: Generation client
        settings: Model, per-stage sampling parameters and default budget
        prompt_builder: Renders requests (defaults to the configured templates)
        parser: Raw text -> JSON object
    """

    def __init__(
        self,
        client: BaseLLMClient,
        settings: Optional[Settings] = None,
        prompt_builder: Optional[PromptBuilder] = None,
    ):
        self.client = client
        self.settings = settings or Settings()
        self.prompt_builder = prompt_builder or PromptBuilder(self.settings.templates_dir())
        self.parser = JSONResponseParser()

        logger.info(
            "GenerationOrchestrator initialized",
            client=repr(client),
            model=self.settings.LLM_MODEL,
            max_attempts=self.settings.MAX_ATTEMPTS,
        )

    async def run(
        self,
        stage_id: StageId | str,
        upstream: InputModel | Mapping[str, Any],
        attempt_budget: Optional[int] = None,
    ) -> StageResult:
        """
        Generate one stage artifact.

        Args:
            stage_id: Stage to run
            upstream: Typed stage input, or a mapping coerced through the stage's input model
            attempt_budget: Max generation attempts (defaults to settings.MAX_ATTEMPTS)

        Returns:
            StageSuccess with the accepted artifact, or StageFailure with diagnostics

        Raises:
            ValueError: Unknown stage id or attempt_budget < 1
            pydantic.ValidationError: upstream mapping does not match the input model
            LLMClientError: The generation capability failed (not retried)
        """
        definition = get_stage(stage_id)
        budget = self.settings.MAX_ATTEMPTS if attempt_budget is None else attempt_budget
        if budget < 1:
            raise ValueError(f"attempt_budget must be >= 1, got {budget}")

        if not isinstance(upstream, definition.input_model):
            upstream = definition.input_model.model_validate(upstream)

        with structlog.contextvars.bound_contextvars(
            stage=definition.stage_id.value,
            run_id=uuid.uuid4().hex[:12],
        ):
            return await self._run(definition, upstream, budget)

    async def _run(self, definition: StageDefinition, upstream: InputModel, budget: int) -> StageResult:
        stage = definition.stage_id.value
        schema_validator = SchemaValidator(definition.artifact_model, self.settings.SCHEMA_ERROR_LIMIT)
        temperature, max_tokens = self.settings.generation_params(definition.settings_prefix)

        history: list[AttemptRecord] = []
        last_raw_output: Optional[str] = None
        state = OrchestratorState.IDLE

        logger.info("Stage run started", attempt_budget=budget)

        for attempt in range(1, budget + 1):
            state = self._transition(state, OrchestratorState.REQUESTING, attempt)
            request = self.prompt_builder.build_request(
                definition,
                upstream,
                history,
                model=self.settings.LLM_MODEL,
                temperature=temperature,
                max_tokens=max_tokens,
            )
            try:
                response = await self.client.generate(request)
            except LLMClientError as e:
                logger.error(
                    "Generation capability failed",
                    attempt=attempt,
                    error=e.message,
                    error_type=type(e).__name__,
                )
                stage_runs_total.labels(stage=stage, outcome="error").inc()
                raise
            last_raw_output = response.content

            state = self._transition(state, OrchestratorState.PARSING, attempt)
            try:
                data = self.parser.parse(response.content)
            except JSONParseError as e:
                record = AttemptRecord(
                    attempt=attempt,
                    state_reached=OrchestratorState.PARSING,
                    structural_error=StructuralError(
                        path="root",
                        message=e.parse_error,
                        expected="JSON object",
                        actual=_snippet(response.content),
                        kind="parse",
                    ),
                )
                state = self._reject(state, record, history, stage, "parse_error")
                continue

            state = self._transition(state, OrchestratorState.SCHEMA_VALIDATING, attempt)
            schema_result = schema_validator.validate(data)
            if not schema_result.ok:
                record = AttemptRecord(
                    attempt=attempt,
                    state_reached=OrchestratorState.SCHEMA_VALIDATING,
                    structural_error=schema_result.error,
                    other_errors=schema_result.other_errors,
                    error_count=schema_result.error_count,
                )
                state = self._reject(state, record, history, stage, "schema_error")
                continue

            state = self._transition(state, OrchestratorState.BUSINESS_VALIDATING, attempt)
            violations = definition.rules.validate(schema_result.artifact, upstream)
            if violations:
                record = AttemptRecord(
                    attempt=attempt,
                    state_reached=OrchestratorState.BUSINESS_VALIDATING,
                    violations=tuple(violations),
                )
                state = self._reject(state, record, history, stage, "business_rule_violation")
                continue

            state = self._transition(state, OrchestratorState.ACCEPTED, attempt)
            history.append(AttemptRecord(attempt=attempt, state_reached=OrchestratorState.ACCEPTED))
            generation_attempts_total.labels(stage=stage, outcome="accepted").inc()
            stage_runs_total.labels(stage=stage, outcome="accepted").inc()

            artifact = Artifact(
                stage=definition.stage_id,
                schema_version=definition.schema_version,
                payload=schema_result.artifact,
                attempts=attempt,
                model_version=response.model_version,
            )
            logger.info("Artifact accepted", attempts=attempt, model_version=response.model_version)
            return StageSuccess(
                artifact=artifact,
                diagnostics=Diagnostics(
                    attempts_consumed=attempt,
                    history=tuple(history),
                    last_raw_output=last_raw_output,
                ),
            )

        state = self._transition(state, OrchestratorState.EXHAUSTED, budget)
        stage_runs_total.labels(stage=stage, outcome="exhausted").inc()
        last = history[-1]
        logger.warning(
            "Attempt budget exhausted",
            attempts=budget,
            structural_error=str(last.structural_error) if last.structural_error else None,
            violation_count=len(last.violations),
        )
        return StageFailure(
            diagnostics=Diagnostics(
                attempts_consumed=budget,
                structural_error=last.structural_error,
                other_errors=last.other_errors,
                violations=last.violations,
                history=tuple(history),
                last_raw_output=last_raw_output,
            )
        )

    def _reject(
        self,
        state: OrchestratorState,
        record: AttemptRecord,
        history: list[AttemptRecord],
        stage: str,
        error_type: str,
    ) -> OrchestratorState:
        """Record a failed attempt, count it and move to RETRYING."""
        history.append(record)
        generation_attempts_total.labels(stage=stage, outcome=error_type).inc()
        validation_failures_total.labels(stage=stage, error_type=error_type).inc()
        logger.info(
            "Attempt rejected",
            attempt=record.attempt,
            error_type=error_type,
            problems=record.problems()[:5],
            problem_count=len(record.problems()),
        )
        return self._transition(state, OrchestratorState.RETRYING, record.attempt)

    @staticmethod
    def _transition(current: OrchestratorState, target: OrchestratorState, attempt: int) -> OrchestratorState:
        if not can_transition(current, target):
            raise RuntimeError(f"Illegal orchestrator transition {current.value} -> {target.value}")
        logger.debug("State transition", attempt=attempt, from_state=current, to_state=target)
        return target


def _snippet(content: str, limit: int = 80) -> str:
    text = content.strip()
    if not text:
        return "empty response"
    return text if len(text) <= limit else text[:limit] + "..."


async def run_stage(
    stage_id: StageId | str,
    upstream: InputModel | Mapping[str, Any],
    client: BaseLLMClient,
    attempt_budget: int = DEFAULT_ATTEMPT_BUDGET,
    settings: Optional[Settings] = None,
) -> StageResult:
    """
    Run one stage with a fresh orchestrator.

    The public entry point for application code. See GenerationOrchestrator.run
    for arguments, return value and raised exceptions.
    """
    orchestrator = GenerationOrchestrator(client, settings=settings)
    return await orchestrator.run(stage_id, upstream, attempt_budget)

"""
Integration tests for the five-stage chain.

Each stage runs through run_stage with the real prompt builder, parser,
schema validator and business rules; only the generation client is
scripted. Accepted payloads are fed forward as the next stage's upstream,
the way an application drives the pipeline.

Run with: pytest tests/integration/test_pipeline_chain.py -v
"""

import pytest

from ai_risk_reporting.models.enums import StageId
from ai_risk_reporting.models.input_models import (
    BoardSummaryInput,
    ClassificationInput,
    FlagInput,
    RemediationInput,
    RemediationProgress,
    ToolAssessment,
)
from ai_risk_reporting.orchestrator.engine import run_stage
from ai_risk_reporting.orchestrator.states import OrchestratorState


async def _accept(stage, upstream, client, settings, attempt_budget=3):
    result = await run_stage(stage, upstream, client, attempt_budget=attempt_budget, settings=settings)
    assert result.ok, str(result)
    return result


@pytest.mark.integration
class TestPipelineChain:

    @pytest.mark.asyncio
    async def test_chain_accepts_every_stage(
        self,
        scripted_client,
        test_settings,
        extraction_request,
        enrichment_answers,
        organization,
        otter_assessment,
        tool_profile_data,
        classification_data,
        flag_report_data,
        remediation_data,
        board_summary_data,
    ):
        client = scripted_client(
            tool_profile_data,
            classification_data,
            flag_report_data,
            remediation_data,
            board_summary_data,
        )

        profile = await _accept(StageId.TOOL_PROFILE, extraction_request, client, test_settings)
        classification = await _accept(
            StageId.RISK_CLASSIFICATION,
            ClassificationInput(
                tool_profile=profile.artifact.payload,
                enrichment_answers=enrichment_answers,
            ),
            client,
            test_settings,
        )
        flags = await _accept(
            StageId.RISK_FLAGS,
            FlagInput(
                tool_profile=profile.artifact.payload,
                risk_classification=classification.artifact.payload,
            ),
            client,
            test_settings,
        )
        plan = await _accept(
            StageId.REMEDIATION_PLAN,
            RemediationInput(
                tool_profile=profile.artifact.payload,
                risk_classification=classification.artifact.payload,
                flag_report=flags.artifact.payload,
            ),
            client,
            test_settings,
        )
        chatgpt = ToolAssessment(
            tool_profile=profile.artifact.payload,
            risk_classification=classification.artifact.payload,
            flag_report=flags.artifact.payload,
            remediation_plan=plan.artifact.payload,
            remediation_progress=RemediationProgress(completed=3, in_progress=2, not_started=1),
        )
        summary = await _accept(
            StageId.BOARD_SUMMARY,
            BoardSummaryInput(organization=organization, tool_assessments=[chatgpt, otter_assessment]),
            client,
            test_settings,
        )

        assert [r.stage for r in client.requests] == [stage.value for stage in StageId]
        results = [profile, classification, flags, plan, summary]
        assert [r.artifact.stage for r in results] == list(StageId)
        assert all(r.artifact.attempts == 1 for r in results)

        snapshot = summary.artifact.payload.board_summary.portfolio_snapshot
        assert snapshot.total_tools_registered == 2
        assert snapshot.total_recommendations == 12

    @pytest.mark.asyncio
    async def test_upstream_artifacts_reach_the_prompt(
        self, scripted_client, test_settings, remediation_input, remediation_data
    ):
        client = scripted_client(remediation_data)

        await _accept(StageId.REMEDIATION_PLAN, remediation_input, client, test_settings)

        prompt = client.requests[0].user_prompt
        assert "ChatGPT" in prompt
        for flag in remediation_input.flag_report.flag_report.flags:
            assert flag.flag_id in prompt

    @pytest.mark.asyncio
    async def test_each_stage_recovers_from_a_bad_first_attempt(
        self,
        scripted_client,
        test_settings,
        extraction_request,
        classification_input,
        flag_input,
        remediation_input,
        board_summary_input,
        tool_profile_data,
        classification_data,
        flag_report_data,
        remediation_data,
        board_summary_data,
    ):
        cases = [
            (StageId.TOOL_PROFILE, extraction_request, tool_profile_data),
            (StageId.RISK_CLASSIFICATION, classification_input, classification_data),
            (StageId.RISK_FLAGS, flag_input, flag_report_data),
            (StageId.REMEDIATION_PLAN, remediation_input, remediation_data),
            (StageId.BOARD_SUMMARY, board_summary_input, board_summary_data),
        ]

        for stage, upstream, valid in cases:
            client = scripted_client("I'm sorry, here is the report:", {"unexpected": True}, valid)

            result = await _accept(stage, upstream, client, test_settings)

            assert result.artifact.attempts == 3
            states = [record.state_reached for record in result.diagnostics.history]
            assert states == [
                OrchestratorState.PARSING,
                OrchestratorState.SCHEMA_VALIDATING,
                OrchestratorState.ACCEPTED,
            ]
            # the final request carries both earlier rejections
            corrective = client.requests[2].user_prompt
            assert "Attempt 1 (rejected at parsing)" in corrective
            assert "Attempt 2 (rejected at schema_validating)" in corrective

    @pytest.mark.asyncio
    async def test_inconsistent_board_summary_is_never_accepted(
        self, scripted_client, test_settings, board_summary_input, board_summary_data
    ):
        # Snapshot claims three tools while two were assessed
        board_summary_data["board_summary"]["portfolio_snapshot"]["total_tools_registered"] = 3
        client = scripted_client(board_summary_data, board_summary_data)

        result = await run_stage(
            StageId.BOARD_SUMMARY, board_summary_input, client, attempt_budget=2, settings=test_settings
        )

        assert result.ok is False
        assert result.diagnostics.attempts_consumed == 2
        assert result.diagnostics.structural_error is None
        assert result.diagnostics.violations
        assert all(
            record.state_reached == OrchestratorState.BUSINESS_VALIDATING
            for record in result.diagnostics.history
        )

    @pytest.mark.asyncio
    async def test_chain_from_plain_mappings(
        self, scripted_client, test_settings, flag_input, flag_report_data
    ):
        # Callers holding JSON (e.g. a stored artifact) need not build typed inputs
        client = scripted_client(flag_report_data)

        result = await _accept(
            "risk_flags", flag_input.model_dump(mode="json"), client, test_settings
        )

        assert result.artifact.payload.flag_report.tool_name == "ChatGPT"

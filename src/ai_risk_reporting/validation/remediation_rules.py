"""
Business rules for remediation plans.

Graph-level checks are delegated to DependencyGraphValidator; this module
adds the consistency of the plan with the accepted classification and the
agreement between the plan summary and its risk reduction projection.
"""

from ai_risk_reporting.models.input_models import RemediationInput
from ai_risk_reporting.models.remediation import RemediationResponse
from .business_rules import BusinessRuleValidator
from .dependency_graph import DependencyGraphValidator


class RemediationRules(BusinessRuleValidator[RemediationResponse, RemediationInput]):
    name = "remediation_plan"

    def __init__(self, graph_validator: DependencyGraphValidator | None = None):
        self.graph_validator = graph_validator or DependencyGraphValidator()

    def _checks(self) -> list:
        return [self._check_current_state, self._check_graph, self._check_projection]

    def _check_current_state(self, response: RemediationResponse, upstream: RemediationInput) -> list[str]:
        violations = []
        plan = response.remediation_plan
        classification = upstream.risk_classification.classification

        if plan.tool_name != classification.tool_name:
            violations.append(
                f'remediation_plan.tool_name is "{plan.tool_name}" but the classification is for '
                f'"{classification.tool_name}"'
            )
        if plan.current_risk_tier != classification.overall_risk.tier:
            violations.append(
                f'current_risk_tier is "{plan.current_risk_tier.value}" but the classification tier is '
                f'"{classification.overall_risk.tier.value}"'
            )
        if plan.current_governance_status != classification.governance_status.level:
            violations.append(
                f'current_governance_status is "{plan.current_governance_status.value}" but the '
                f'classification governance level is "{classification.governance_status.level.value}"'
            )
        return violations

    def _check_graph(self, response: RemediationResponse, upstream: RemediationInput) -> list[str]:
        return self.graph_validator.validate(response.remediation_plan, upstream.flag_report.flag_report.flags)

    def _check_projection(self, response: RemediationResponse, upstream: RemediationInput) -> list[str]:
        violations = []
        plan = response.remediation_plan
        projection = plan.risk_reduction_projection
        summary = plan.plan_summary

        if projection.current_state.risk_tier != plan.current_risk_tier:
            violations.append(
                f'risk_reduction_projection.current_state.risk_tier ("{projection.current_state.risk_tier.value}") '
                f'does not match current_risk_tier ("{plan.current_risk_tier.value}")'
            )
        if projection.after_quick_wins.risk_tier != summary.projected_risk_tier_after_quick_wins:
            violations.append(
                f'risk_reduction_projection.after_quick_wins.risk_tier ("{projection.after_quick_wins.risk_tier.value}") '
                f'does not match plan_summary ("{summary.projected_risk_tier_after_quick_wins.value}")'
            )
        if projection.after_full_remediation.risk_tier != summary.projected_risk_tier_after_full_remediation:
            violations.append(
                f'risk_reduction_projection.after_full_remediation.risk_tier '
                f'("{projection.after_full_remediation.risk_tier.value}") does not match plan_summary '
                f'("{summary.projected_risk_tier_after_full_remediation.value}")'
            )
        return violations

"""
Dependency graph validation for remediation plans.

All recommendations of one plan form a directed graph with an edge from each
declared dependency to the recommendation that declares it. The validator
checks, without short-circuiting:

1. Uniqueness of recommendation and strategy ids
2. Referential integrity of flag ids and dependency ids
3. Absence of cycles (three-color depth-first search, O(nodes + edges))
4. Phase coverage: every recommendation scheduled in exactly one phase,
   phases in increasing order, no dependency scheduled after its dependent
5. Summary counts equal to the counts derived from the plan itself
6. Projected tiers never rise: full <= quick wins <= current
7. Strategies in strictly increasing priority
8. Every upstream flag addressed by at least one recommendation

The plan is never repaired or mutated.
"""

from collections import Counter
from typing import Iterable, Sequence

import structlog

from ai_risk_reporting.models.enums import Effort, RiskTier
from ai_risk_reporting.models.flags import Flag
from ai_risk_reporting.models.remediation import RemediationPlan

logger = structlog.get_logger(__name__)

WHITE, GRAY, BLACK = 0, 1, 2

CYCLE_ARROW = " → "


def find_cycles(nodes: Sequence[str], edges: Iterable[tuple[str, str]]) -> list[list[str]]:
    """
    Find cycles with an iterative three-color depth-first search.

    Nodes are visited in the given order and successors in edge order, so the
    result is deterministic. Every back edge (an edge into a node that is
    still gray, i.e. on the current path) yields one cycle, reported as the
    path from that node back to itself, e.g. ["A", "B", "A"]. Rotations of an
    already-reported cycle are not repeated.

    Args:
        nodes: Node ids in traversal order
        edges: (source, target) pairs; edges touching unknown nodes are ignored

    Returns:
        List of cycles, each a list of node ids whose first and last entries match
    """
    successors: dict[str, list[str]] = {node: [] for node in nodes}
    for source, target in edges:
        if source in successors and target in successors:
            successors[source].append(target)

    color = dict.fromkeys(successors, WHITE)
    cycles: list[list[str]] = []
    seen: set[tuple[str, ...]] = set()

    for root in successors:
        if color[root] != WHITE:
            continue

        path: list[str] = [root]
        position = {root: 0}
        color[root] = GRAY
        stack = [iter(successors[root])]

        while stack:
            node = next(stack[-1], None)
            if node is None:
                # All successors explored
                stack.pop()
                done = path.pop()
                del position[done]
                color[done] = BLACK
                continue

            if color[node] == WHITE:
                color[node] = GRAY
                position[node] = len(path)
                path.append(node)
                stack.append(iter(successors[node]))
            elif color[node] == GRAY:
                cycle = path[position[node]:]
                key = _canonical(cycle)
                if key not in seen:
                    seen.add(key)
                    cycles.append(cycle + [node])

    return cycles


def _canonical(cycle: list[str]) -> tuple[str, ...]:
    """Rotation-independent key for a cycle (without the repeated end node)."""
    start = cycle.index(min(cycle))
    return tuple(cycle[start:] + cycle[:start])


class DependencyGraphValidator:
    """
    Structural graph checks over a remediation plan.

    Returns a list of violation strings instead of raising exceptions.
    """

    def validate(self, plan: RemediationPlan, flags: Sequence[Flag]) -> list[str]:
        """
        Run all graph checks and accumulate violations.

        Args:
            plan: Schema-validated remediation plan
            flags: Upstream flags the plan must address

        Returns:
            List of violation messages (empty if the plan is consistent)
        """
        violations: list[str] = []
        violations.extend(self._check_unique_ids(plan))
        violations.extend(self._check_references(plan, flags))
        violations.extend(self._check_cycles(plan))
        violations.extend(self._check_phases(plan))
        violations.extend(self._check_summary_counts(plan, flags))
        violations.extend(self._check_projected_tiers(plan))
        violations.extend(self._check_priority_order(plan))
        violations.extend(self._check_flag_coverage(plan, flags))

        if violations:
            logger.debug("Dependency graph violations found", count=len(violations))
        return violations

    def _check_unique_ids(self, plan: RemediationPlan) -> list[str]:
        violations = []
        rec_counts = Counter(rec.rec_id for rec in plan.iter_recommendations())
        for rec_id, n in rec_counts.items():
            if n > 1:
                violations.append(f"Duplicate recommendation ID: {rec_id}")
        strategy_counts = Counter(s.strategy_id for s in plan.strategies)
        for strategy_id, n in strategy_counts.items():
            if n > 1:
                violations.append(f"Duplicate strategy ID: {strategy_id}")
        return violations

    def _check_references(self, plan: RemediationPlan, flags: Sequence[Flag]) -> list[str]:
        violations = []
        flag_ids = {flag.flag_id for flag in flags}
        rec_ids = {rec.rec_id for rec in plan.iter_recommendations()}

        for strategy in plan.strategies:
            for resolution in strategy.flags_resolved:
                if resolution.flag_id not in flag_ids:
                    violations.append(
                        f"Strategy {strategy.strategy_id} references invalid flag_id: {resolution.flag_id}"
                    )
            for rec in strategy.recommendations:
                for flag_id in rec.flags_addressed:
                    if flag_id not in flag_ids:
                        violations.append(
                            f"Recommendation {rec.rec_id} references invalid flag_id: {flag_id}"
                        )
                for dep_id in rec.dependencies:
                    if dep_id not in rec_ids:
                        violations.append(f"Recommendation {rec.rec_id} has invalid dependency: {dep_id}")
        return violations

    def _check_cycles(self, plan: RemediationPlan) -> list[str]:
        nodes = list(dict.fromkeys(rec.rec_id for rec in plan.iter_recommendations()))
        # Edge runs from the dependency to the recommendation declaring it
        edges = [
            (dep_id, rec.rec_id)
            for rec in plan.iter_recommendations()
            for dep_id in rec.dependencies
        ]
        return [
            f"Circular dependency detected: {CYCLE_ARROW.join(cycle)}"
            for cycle in find_cycles(nodes, edges)
        ]

    def _check_phases(self, plan: RemediationPlan) -> list[str]:
        violations = []
        rec_ids = [rec.rec_id for rec in plan.iter_recommendations()]
        known = set(rec_ids)
        phase_of: dict[str, int] = {}
        phases = plan.implementation_sequence.phases

        for previous, phase in zip(phases, phases[1:]):
            if phase.phase_number <= previous.phase_number:
                violations.append(
                    f"Implementation phases not in increasing order: phase {phase.phase_number} "
                    f"follows phase {previous.phase_number}"
                )

        for phase in phases:
            for rec_id in phase.recommendations:
                if rec_id not in known:
                    violations.append(f"Implementation phase references non-existent recommendation: {rec_id}")
                if rec_id in phase_of:
                    if phase_of[rec_id] == phase.phase_number:
                        violations.append(
                            f"Recommendation {rec_id} is listed more than once in phase {phase.phase_number}"
                        )
                    else:
                        violations.append(f"Recommendation {rec_id} appears in multiple implementation phases")
                    continue
                phase_of[rec_id] = phase.phase_number

        for rec_id in dict.fromkeys(rec_ids):
            if rec_id not in phase_of:
                violations.append(f"Recommendation {rec_id} is not included in any implementation phase")

        for rec in plan.iter_recommendations():
            if rec.rec_id not in phase_of:
                continue
            for dep_id in rec.dependencies:
                if dep_id in phase_of and phase_of[dep_id] > phase_of[rec.rec_id]:
                    violations.append(
                        f"Recommendation {rec.rec_id} (phase {phase_of[rec.rec_id]}) depends on {dep_id}, "
                        f"which is scheduled later (phase {phase_of[dep_id]})"
                    )
        return violations

    def _check_summary_counts(self, plan: RemediationPlan, flags: Sequence[Flag]) -> list[str]:
        violations = []
        summary = plan.plan_summary
        recommendations = list(plan.iter_recommendations())

        if summary.total_recommendations != len(recommendations):
            violations.append(
                f"Summary total_recommendations ({summary.total_recommendations}) does not match "
                f"actual count ({len(recommendations)})"
            )
        if summary.total_strategies != len(plan.strategies):
            violations.append(
                f"Summary total_strategies ({summary.total_strategies}) does not match "
                f"actual count ({len(plan.strategies)})"
            )
        if summary.flags_total != len(flags):
            violations.append(
                f"Summary flags_total ({summary.flags_total}) does not match actual flag count ({len(flags)})"
            )

        addressed = {flag_id for rec in recommendations for flag_id in rec.flags_addressed}
        if summary.flags_addressed != len(addressed):
            violations.append(
                f"Summary flags_addressed ({summary.flags_addressed}) does not match "
                f"actual unique flags addressed ({len(addressed)})"
            )

        quick_wins = sum(1 for rec in recommendations if rec.effort == Effort.QUICK_WIN)
        if summary.quick_wins_available != quick_wins:
            violations.append(
                f"Summary quick_wins_available ({summary.quick_wins_available}) does not match "
                f"actual count ({quick_wins})"
            )
        return violations

    def _check_projected_tiers(self, plan: RemediationPlan) -> list[str]:
        violations = []
        summary = plan.plan_summary
        current = plan.current_risk_tier
        quick = summary.projected_risk_tier_after_quick_wins
        full = summary.projected_risk_tier_after_full_remediation
        ordinal = RiskTier.get_ordinal

        if ordinal(quick) > ordinal(current):
            violations.append(
                f"Projected risk tier after quick wins ({quick.value}) is higher than "
                f"current tier ({current.value})"
            )
        if ordinal(full) > ordinal(current):
            violations.append(
                f"Projected risk tier after full remediation ({full.value}) is higher than "
                f"current tier ({current.value})"
            )
        if ordinal(full) > ordinal(quick):
            violations.append(
                f"Projected risk tier after full remediation ({full.value}) is higher than "
                f"after quick wins ({quick.value})"
            )
        return violations

    def _check_priority_order(self, plan: RemediationPlan) -> list[str]:
        violations = []
        for previous, strategy in zip(plan.strategies, plan.strategies[1:]):
            if strategy.priority <= previous.priority:
                violations.append(
                    f"Strategies not sorted by priority: {strategy.strategy_id} (priority {strategy.priority}) "
                    f"is listed after {previous.strategy_id} (priority {previous.priority})"
                )
        return violations

    def _check_flag_coverage(self, plan: RemediationPlan, flags: Sequence[Flag]) -> list[str]:
        addressed = {flag_id for rec in plan.iter_recommendations() for flag_id in rec.flags_addressed}
        return [
            f'Flag {flag.flag_id} ("{flag.title}") is not addressed by any recommendation'
            for flag in flags
            if flag.flag_id not in addressed
        ]

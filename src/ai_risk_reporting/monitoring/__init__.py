"""Monitoring and metrics instrumentation for AI Risk Reporting.

Exports Prometheus collectors for stage outcomes and generation latency.
"""

from ai_risk_reporting.monitoring.metrics import (
    generation_attempts_total,
    generation_latency_seconds,
    generation_tokens_total,
    stage_runs_total,
    validation_failures_total,
)

__all__ = [
    "stage_runs_total",
    "generation_attempts_total",
    "validation_failures_total",
    "generation_latency_seconds",
    "generation_tokens_total",
]

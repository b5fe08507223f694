"""Prometheus metrics for the generate-validate-retry engine.

Validators stay pure: only the orchestrator and the generation client touch
these collectors. Useful alerts:
- stage_runs_total{outcome="exhausted"} (stages giving up after every attempt)
- generation_attempts_total{outcome!="accepted"} (model output drifting from the rubric)
- generation_latency_seconds (slow or failing capability)
"""

from prometheus_client import Counter, Histogram

# === Stage Metrics ===

stage_runs_total = Counter(
    "stage_runs_total",
    "Total stage runs by stage and final outcome",
    ["stage", "outcome"],
)
"""
Stage run counter.

Labels:
- stage: tool_profile, risk_classification, risk_flags, remediation_plan, board_summary
- outcome: accepted (artifact returned), exhausted (attempt budget consumed),
  error (generation capability failed)

Alert thresholds:
- WARN: exhausted rate > 5% of runs for a stage
"""

generation_attempts_total = Counter(
    "generation_attempts_total",
    "Total generation attempts by stage and attempt outcome",
    ["stage", "outcome"],
)
"""
Attempt counter; one stage run consumes one or more attempts.

Labels:
- stage: Stage id
- outcome: accepted, parse_error, schema_error, business_rule_violation
"""

# === Validation Metrics ===

validation_failures_total = Counter(
    "validation_failures_total",
    "Total validation failures by stage and error type",
    ["stage", "error_type"],
)
"""
Validation failures counter by stage and error type.

Labels:
- stage: Stage id
- error_type: parse_error, schema_error, business_rule_violation

Business-rule failures are counted once per attempt, not once per violation.
"""

# === Generation Capability Metrics ===

generation_latency_seconds = Histogram(
    "generation_latency_seconds",
    "Generation request latency in seconds",
    ["model", "success"],
    buckets=[1.0, 2.0, 5.0, 10.0, 20.0, 30.0, 60.0, 120.0, 240.0],
)
"""
Generation latency histogram.

Labels:
- model: Requested model identifier
- success: true (response received), false (client error raised)

Buckets sized for long structured completions (board summaries run to
several thousand tokens).
"""

generation_tokens_total = Counter(
    "generation_tokens_total",
    "Total tokens consumed by model and type",
    ["model", "token_type"],
)
"""
Token consumption counter.

Labels:
- model: Model version reported by the service
- token_type: input, output
"""

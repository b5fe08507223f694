"""
Unit tests for AI Risk Reporting.

Test individual components in isolation:
- Validation (JSON parse, schema validator, rubric arithmetic, stage business rules)
- Dependency graph (cycles, phases, summary counts)
- Prompt builder (determinism, corrective context)
- Anthropic client (HTTP mocked with httpx.MockTransport)
- Orchestrator (state machine, retries, diagnostics)
"""

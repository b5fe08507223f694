"""
Test fixtures for AI Risk Reporting.

One accepted artifact per stage for a single tool (ChatGPT, free plan):
- tool_profile.json: Tool profile with four enrichment questions
- enrichment_answers.json: Answers to those questions
- risk_classification.json: Critical classification derived from the answers
- flag_report.json: Six flags raised against the classification
- remediation_plan.json: Six recommendations in three strategies and phases
- board_summary.json: Portfolio report over ChatGPT plus an Otter.ai variant built in conftest
"""

"""
Integration tests for AI Risk Reporting.

Run the whole five-stage chain through run_stage with a scripted
generation client, so no network access is needed.
"""

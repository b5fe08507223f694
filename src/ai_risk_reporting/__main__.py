from ai_risk_reporting.cli import app

app(prog_name="ai-risk-reporting")

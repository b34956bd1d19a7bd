from copilot_usage.cli.main import app

app(prog_name="copilot-usage")

"""Entry point for `python -m claude_agent`."""

from claude_agent.main import cli

cli()

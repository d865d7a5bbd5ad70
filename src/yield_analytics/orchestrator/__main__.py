"""Allow running as: python -m yield_analytics.orchestrator [--config path]."""

from yield_analytics.orchestrator.runner import cli

cli()

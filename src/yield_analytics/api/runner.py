#!/usr/bin/env python3
"""FastAPI server runner."""

import argparse

import structlog
import uvicorn

from yield_analytics.api.app import create_app
from yield_analytics.config.loader import load_config
from yield_analytics.logging.setup import setup_logging

logger = structlog.get_logger()


def main(argv=None):
    """Run the FastAPI server."""
    parser = argparse.ArgumentParser(description="Yield analytics API server")
    parser.add_argument("--config", default=None, help="Path to config.yaml")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)

    config = load_config(args.config)
    setup_logging(level=config.logging.level, log_format=config.logging.format)

    logger.info("Starting FastAPI server", port=args.port, dataset=config.output.dataset_path)

    try:
        uvicorn.run(
            create_app(config),
            host=args.host,
            port=args.port,
            log_config=None  # Use our structlog setup
        )
    except Exception as e:
        logger.error("Failed to start server", error=str(e))
        raise


if __name__ == "__main__":
    main()

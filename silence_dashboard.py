#!/usr/bin/env python3
"""
Silence Manager - panel server.

Serves the silence panel API: label values discovered from Prometheus,
fuzzy search per label, matcher preview and silence submission to
Alertmanager.

Run with: python silence_dashboard.py
Access at: http://localhost:9193/api/labels

Configuration precedence: command line flags > environment variables
(PORT, PROMETHEUS_URL, ALERTMANAGER_URL, LABEL_SELECTOR) > config file > defaults.
"""

from __future__ import annotations

import argparse
import sys

import uvicorn

from silence_manager.api.app import create_app
from silence_manager.core.config import AppConfig, get_config
from silence_manager.core.logging import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Silence Manager panel server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Defaults from environment / config.json
  python silence_dashboard.py

  # Explicit backends and labels
  python silence_dashboard.py --prometheus-url http://prometheus:9090 \\
      --alertmanager-url http://alertmanager:9093 --label-selector instance,job,env
        """,
    )
    parser.add_argument("--port", type=int, help="Port to run the server on (default: 9193)")
    parser.add_argument("--host", help="Host to bind to (default: 0.0.0.0)")
    parser.add_argument("--prometheus-url", help="Prometheus URL")
    parser.add_argument("--alertmanager-url", help="Alertmanager URL")
    parser.add_argument(
        "--label-selector",
        help="Comma-separated list of Prometheus labels to select from (default: instance,job)",
    )
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument("--no-access-log", action="store_true", help="Disable request logging")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def load_config(args: argparse.Namespace) -> AppConfig:
    """Resolve configuration with command line flags taking precedence."""
    base = AppConfig.from_file(args.config) if args.config else get_config()
    return base.with_overrides(
        host=args.host,
        port=args.port,
        prometheus_url=args.prometheus_url,
        alertmanager_url=args.alertmanager_url,
        label_selector=args.label_selector,
        access_log=False if args.no_access_log else None,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)

    config = load_config(args)
    app = create_app(config)

    logger.info(f"Silence Manager server running on port {config.server.port}")
    logger.info(f"Prometheus: {config.prometheus.endpoint}")
    logger.info(f"Alertmanager: {config.alertmanager.endpoint}")
    logger.info(f"Using label selector: {config.labels.label_selector}")
    if config.config_file_path:
        logger.info(f"Config file: {config.config_file_path}")

    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level="warning",
        access_log=False,  # RequestLoggingMiddleware logs requests
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

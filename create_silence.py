#!/usr/bin/env python3
"""
Create an Alertmanager silence from the command line.

Label values are fetched from Prometheus first; every ``--match`` value
must be one of them. The silence is posted once; on failure the command
exits non-zero and nothing is retried.

Usage:
    # Silence one instance of the api job for 6 hours
    python create_silence.py --match instance=node1:9100 --match job=api \\
        --duration 6h --comment "kernel upgrade" --creator alice

    # Look up values before choosing
    python create_silence.py --search instance=node1

    # Print the silence without sending it
    python create_silence.py --match job=api --comment test --creator alice --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from silence_manager.backends.config_source import RemoteConfigSource
from silence_manager.core.config import AppConfig, get_config
from silence_manager.core.exceptions import LabelFetchError, SilenceManagerError
from silence_manager.core.logging import configure_logging
from silence_manager.panel.panel import SilencePanel


def parse_pair(text: str) -> tuple[str, str]:
    """Parse a ``label=value`` argument."""
    label, sep, value = text.partition("=")
    label = label.strip()
    if not sep or not label:
        raise argparse.ArgumentTypeError(f"Invalid pair: {text!r}. Use label=value.")
    return label, value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create an Alertmanager silence from Prometheus label values",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--match", "-m", type=parse_pair, action="append", default=[], metavar="LABEL=VALUE",
        help="Label value to silence (repeatable)",
    )
    parser.add_argument(
        "--search", "-s", type=parse_pair, action="append", default=[], metavar="LABEL=QUERY",
        help="Fuzzy search a label's values and print the matches (repeatable)",
    )
    parser.add_argument("--duration", "-d", help="Silence duration, e.g. 2h, 1d, 1w (default from config)")
    parser.add_argument("--comment", "-c", default="", help="Reason for the silence")
    parser.add_argument("--creator", default="", help="Your name")
    parser.add_argument("--dry-run", action="store_true", help="Print the silence without submitting it")
    parser.add_argument("--prometheus-url", help="Prometheus URL")
    parser.add_argument("--alertmanager-url", help="Alertmanager URL")
    parser.add_argument("--label-selector", help="Comma-separated list of labels to load")
    parser.add_argument("--config-server", help="Read labels from a running panel server's /api/config")
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


async def run(args: argparse.Namespace, panel: SilencePanel) -> int:
    """Execute the command against an already-built panel."""
    outcomes = await panel.start()
    needed = {label for label, _ in args.match} | {label for label, _ in args.search}
    for label in sorted(needed):
        outcome = outcomes.get(label)
        if outcome is not None and outcome.error is not None:
            raise outcome.error

    for label, query in args.search:
        results = panel.search(label, query)
        print(f"{label} ~ {query!r}: {len(results)} match(es)")
        for value in results:
            print(f"  {value}")

    if not args.match:
        return 0

    for label, value in args.match:
        panel.select(label, value)

    print("Matchers:")
    print(panel.matchers_preview())

    if args.dry_run:
        record = panel.compose(args.duration, args.comment, args.creator)
        print(json.dumps(record.to_payload(), indent=2))
        return 0

    silence_id, record = await panel.submit(args.duration, args.comment, args.creator)
    print(json.dumps(record.to_payload(), indent=2))
    print(f"\nSuccess! Silence created with ID:\n{silence_id}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.match and not args.search:
        parser.error("nothing to do: give at least one --match or --search")

    configure_logging(verbose=args.verbose)

    base = AppConfig.from_file(args.config) if args.config else get_config()
    config = base.with_overrides(
        prometheus_url=args.prometheus_url,
        alertmanager_url=args.alertmanager_url,
        label_selector=args.label_selector,
    )

    panel = SilencePanel.from_config(config)
    if args.config_server:
        panel.config_source = RemoteConfigSource(args.config_server)

    try:
        return asyncio.run(run(args, panel))
    except LabelFetchError as e:
        print(e.diagnostic, file=sys.stderr)
        return 1
    except SilenceManagerError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        panel.close()


if __name__ == "__main__":
    sys.exit(main())

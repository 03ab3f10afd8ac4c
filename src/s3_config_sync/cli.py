"""Command-line entry point for s3-config-sync.

Resolves inputs, runs one reconciliation and prints the diff report to
stdout. Diagnostics and errors go to stderr; any failure exits with 1.
"""

import argparse
import asyncio
import json
import logging
import os
import sys

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from . import __version__
from .config import RunInputs, load_inputs
from .config_loader import discover_config_files, load_hierarchical_config
from .config_schema import UnifiedConfig, build_config, to_input_fallbacks
from .errors import ReconcileError
from .logger import setup_logging
from .reconcile import (
    DiffReport,
    ReconcileEngine,
    format_diff_report,
    report_to_json,
    validate_inputs,
)
from .store import S3Store

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="s3-config-sync",
        description="Publish a local configuration file to S3 and report what changed",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Preview changes without publishing
  s3-config-sync --bucket configs --source build/app.toml \\
      --destination prod/app.json --dry-run

  # Publish, with credentials from AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY
  s3-config-sync --bucket configs --source app.yml --destination app.yml

  # Machine-readable report
  s3-config-sync --json --dry-run

Settings can also come from environment variables, a .env file, GitHub
Actions inputs (INPUT_*) or .s3_config_sync/config.yml.
        """,
    )
    parser.add_argument("--bucket", help="Target S3 bucket")
    parser.add_argument(
        "--source", help="Local configuration file (.toml, .yaml, .yml, .json, .ejson)"
    )
    parser.add_argument(
        "--destination", help="Object key of the published configuration"
    )
    parser.add_argument(
        "--aws-access-key",
        help="AWS access key id (prefer the AWS_ACCESS_KEY_ID env var)",
    )
    parser.add_argument(
        "--aws-secret-key",
        help="AWS secret access key (visible in process list -- prefer the "
        "AWS_SECRET_ACCESS_KEY env var)",
    )
    parser.add_argument("--region", help="AWS region (default: us-east-1)")
    parser.add_argument(
        "--endpoint-url", help="Endpoint for S3-compatible services"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report differences without publishing",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the report as JSON"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )
    parser.add_argument("--log-file", help="Also append logs to this file")
    parser.add_argument(
        "--log-format",
        choices=("text", "json"),
        help="Log record format (default: text)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"s3-config-sync version {__version__}",
    )
    return parser


def report_failure(message: str) -> None:
    """Print a fatal error, plus a workflow annotation inside GitHub Actions."""
    print(f"Unexpected error: {message}", file=sys.stderr)
    if os.getenv("GITHUB_ACTIONS") == "true":
        print(f"::error::{message}", flush=True)


def load_file_config() -> UnifiedConfig:
    """Load the optional YAML config file(s) into a ``UnifiedConfig``."""
    raw = load_hierarchical_config()
    config = build_config(raw)
    config_files = discover_config_files()
    if config_files:
        logger.info("Configuration file: %s", config_files[0])
    return config


async def reconcile(inputs: RunInputs) -> DiffReport:
    """Validate *inputs*, connect to S3 and run one reconciliation."""
    validate_inputs(inputs)
    store = S3Store.from_credentials(
        inputs.access_key,
        inputs.secret_key,
        inputs.region,
        endpoint_url=inputs.endpoint_url,
    )
    return await ReconcileEngine(inputs, store).run()


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = build_parser().parse_args(argv)

    load_dotenv()

    try:
        file_config = load_file_config()
    except (OSError, yaml.YAMLError, ValidationError) as exc:
        report_failure(f"Invalid configuration file: {exc}")
        return 1

    setup_logging(
        debug=args.debug,
        log_file=args.log_file or file_config.logging.file,
        log_format=args.log_format or file_config.logging.format,
        level=file_config.logging.level,
    )

    inputs = load_inputs(
        bucket=args.bucket,
        source=args.source,
        destination=args.destination,
        access_key=args.aws_access_key,
        secret_key=args.aws_secret_key,
        region=args.region,
        dry_run=args.dry_run,
        endpoint_url=args.endpoint_url,
        yaml_fallbacks=to_input_fallbacks(file_config),
    )

    try:
        report = asyncio.run(reconcile(inputs))
    except ReconcileError as exc:
        logger.debug("Reconciliation failed", exc_info=True)
        report_failure(str(exc))
        return 1

    if args.json:
        print(json.dumps(report_to_json(report, dry_run=inputs.dry_run), indent=2))
    else:
        print(format_diff_report(report, dry_run=inputs.dry_run))
    return 0


def run() -> None:
    """Console-script entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)

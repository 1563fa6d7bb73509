from __future__ import annotations

import argparse
import logging
from pathlib import Path

from athena_connector.client import client_from_environment
from athena_connector.config import load_settings
from athena_connector.connectors import AthenaConnector

logger = logging.getLogger(__name__)


def add_connection_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by commands that talk to Athena."""
    parser.add_argument("--config", type=Path, help="Path to athena-connector.toml")
    parser.add_argument("--database", help="Glue database to query")
    parser.add_argument("--catalog", help="Athena catalog (default: AWSDataCatalog)")
    parser.add_argument("--output-bucket", help="S3 bucket/prefix for query results")
    parser.add_argument("--region", help="AWS region (default: us-east-1)")
    parser.add_argument("--workgroup", help="Athena workgroup")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")


def build_connector(args: argparse.Namespace) -> AthenaConnector:
    settings = load_settings(
        args.config,
        cli_overrides={
            "database": args.database,
            "catalog": args.catalog,
            "output_bucket": args.output_bucket,
            "region": args.region,
            "workgroup": args.workgroup,
            "test_table_name": getattr(args, "test_table", None),
            "probe_connection": getattr(args, "probe", None) or None,
            "poll_interval": getattr(args, "poll_interval", None),
            "max_attempts": getattr(args, "max_attempts", None),
        },
    )
    client = client_from_environment(region=settings.region)
    return AthenaConnector.from_settings(client, settings)


def configure_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    parser = subparsers.add_parser("query", help="Run a SQL file against Athena")
    parser.set_defaults(func=run_query)
    parser.add_argument("file", type=Path, help="SQL file to run")
    add_connection_arguments(parser)
    parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format",
    )
    parser.add_argument("--poll-interval", type=float, help="Seconds between status checks")
    parser.add_argument(
        "--max-attempts",
        type=int,
        help="Give up after this many status checks (default: poll until done)",
    )


def run_query(args: argparse.Namespace) -> int:
    from athena_connector.cli.ui import configure_logging, print_error, print_json, print_result

    configure_logging(args.verbose)

    sql = args.file.read_text(encoding="utf-8")
    logger.debug("Read %d characters of SQL from %s", len(sql), args.file)
    connector = build_connector(args)
    outcome = connector.run(sql, str(args.file))

    if not outcome.is_ok or outcome.output is None:
        message = outcome.error_message or "Query returned no result"
        if outcome.execution_id:
            message = f"{message}\nExecution id: {outcome.execution_id}"
        print_error(outcome.error_type or "QueryError", message)
        return 1

    if args.format == "json":
        print_json(outcome.output.to_dict())
    else:
        print_result(outcome.output, title=args.file.name)
    return 0

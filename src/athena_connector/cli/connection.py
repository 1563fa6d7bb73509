from __future__ import annotations

import argparse

from athena_connector.cli.query import add_connection_arguments, build_connector
from athena_connector.config import OPTIONS_SCHEMA


def configure_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    test_parser = subparsers.add_parser("test", help="Check that a connection is usable")
    test_parser.set_defaults(func=run_test)
    add_connection_arguments(test_parser)
    test_parser.add_argument(
        "--probe",
        action="store_true",
        help="Run a one-row select against the test table instead of the default check",
    )
    test_parser.add_argument("--test-table", help="Table used by --probe")

    options_parser = subparsers.add_parser("options", help="Print the connector options schema")
    options_parser.set_defaults(func=run_options)


def run_test(args: argparse.Namespace) -> int:
    from athena_connector.cli.ui import configure_logging, print_error, print_success

    configure_logging(args.verbose)

    connector = build_connector(args)
    if connector.test_connection():
        print_success("Connection OK")
        return 0

    print_error(
        "ConnectionTest",
        "Connection test failed.",
        tip="re-run with -v to see the Athena error.",
    )
    return 1


def run_options(args: argparse.Namespace) -> int:
    from athena_connector.cli.ui import print_json

    print_json(OPTIONS_SCHEMA)
    return 0

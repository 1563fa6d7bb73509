from __future__ import annotations

import argparse
import os
from pathlib import Path

from athena_connector.cli.connection import configure_parser as configure_connection
from athena_connector.cli.query import configure_parser as configure_query


def build_parser() -> argparse.ArgumentParser:
    from athena_connector import __version__

    parser = argparse.ArgumentParser(
        prog="athena-connector",
        description="Run SQL against AWS Athena through the reporting connector",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Print version and exit",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Print full traceback on errors (or set ATHENA_CONNECTOR_TRACE=1)",
    )
    subparsers = parser.add_subparsers(dest="command")

    configure_query(subparsers)
    configure_connection(subparsers)

    return parser


def _tip_for(exc: BaseException, config_path: Path | None = None) -> str:
    from athena_connector.client import PROFILE_ENV_VAR
    from athena_connector.errors import MissingProfileError

    if isinstance(exc, MissingProfileError):
        return f"export {PROFILE_ENV_VAR}=<profile> naming a profile in ~/.aws/config."
    if type(exc).__name__ in {"NoCredentialsError", "ProfileNotFound"}:
        return "Check the profile exists in ~/.aws/config and its credentials are valid."
    if isinstance(exc, FileNotFoundError):
        if config_path is not None and str(config_path) in str(exc):
            return "Check that your --config path is correct."
        return "Check that the file path is correct."
    return "re-run with --trace to see the full traceback."


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 2

    want_trace = bool(getattr(args, "trace", False)) or os.environ.get(
        "ATHENA_CONNECTOR_TRACE"
    ) in {"1", "true", "TRUE", "yes", "YES"}
    try:
        return int(args.func(args))
    except KeyboardInterrupt:
        return 130
    except Exception as exc:
        if want_trace:
            from rich.console import Console

            Console(stderr=True).print_exception()
        else:
            from athena_connector.cli.ui import print_error

            tip = _tip_for(exc, getattr(args, "config", None))
            print_error(type(exc).__name__, str(exc), tip=tip)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

"""CLI entry point for callsmith.

Inspect OpenAPI documents the way the engine sees them:

    python -m callsmith actions openapi.yaml
    python -m callsmith filter openapi.yaml getProject
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from callsmith import __version__
from callsmith.config.settings import CallsmithSettings
from callsmith.errors import ToolInvocationError
from callsmith.observability import configure_logging
from callsmith.schema import filter_schema, list_actions

logger = logging.getLogger(__name__)


def _read(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def _cmd_actions(args: argparse.Namespace) -> None:
    actions = list_actions(_read(args.schema))
    print(json.dumps([action.model_dump() for action in actions], indent=2))


def _cmd_filter(args: argparse.Namespace) -> None:
    filtered = filter_schema(_read(args.schema), args.action)
    print(json.dumps(filtered, indent=2, ensure_ascii=False, default=str))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="callsmith",
        description="Inspect OpenAPI documents used for tool invocation",
    )
    parser.add_argument("--version", action="version", version=f"callsmith {__version__}")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, can be set via CALLSMITH_LOG_LEVEL)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    actions = subparsers.add_parser("actions", help="List the actions of a schema")
    actions.add_argument("schema", help="Path to an OpenAPI document (JSON or YAML)")
    actions.set_defaults(func=_cmd_actions)

    filter_ = subparsers.add_parser("filter", help="Print the minimal schema for one action")
    filter_.add_argument("schema", help="Path to an OpenAPI document (JSON or YAML)")
    filter_.add_argument("action", help="Action identifier (operationId)")
    filter_.set_defaults(func=_cmd_filter)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the callsmith CLI."""
    args = build_parser().parse_args(argv)

    configure_logging(args.log_level or CallsmithSettings().log_level)

    try:
        args.func(args)
    except (ToolInvocationError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Will Wisher MCP server entry point: logging, configuration, transport."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from willwisher.mcp_app import mcp

import willwisher.tools_drafts  # noqa: F401 -- trigger tool registration
import willwisher.tools_export  # noqa: F401

LOG_LEVEL_ENV = "WILLWISHER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def configure_logging(level: str | None = None) -> str:
    """Send log records to stderr; stdout carries the stdio transport.

    Returns the effective level name.
    """
    name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(
            f"Invalid log level {name!r}. Use DEBUG, INFO, WARNING or ERROR."
        )
    logging.basicConfig(
        level=name,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return name


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="willwisher",
        description="Will and trust .docx export over MCP (stdio by default).",
    )
    parser.add_argument(
        "--http", action="store_true",
        help="serve streamable HTTP instead of stdio",
    )
    parser.add_argument("--host", default="127.0.0.1", help="HTTP bind host")
    parser.add_argument("--port", type=int, default=8000, help="HTTP bind port")
    parser.add_argument(
        "--log-level", default=None,
        help=f"overrides ${LOG_LEVEL_ENV} (default {DEFAULT_LOG_LEVEL})",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    level = configure_logging(args.log_level)

    if args.http:
        from willwisher.http_transport import start_http
        start_http(args.host, args.port, level)
    else:
        mcp.run()


if __name__ == "__main__":
    main()

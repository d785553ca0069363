"""Command-line interface for the Atomicwork MCP server."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from .config import configure_logging, get_settings
from .mcp_server import ToolAdapter, run_server
from .tool_list import TOOLS

logger = logging.getLogger(__name__)


def serve(_args: argparse.Namespace) -> int:
    run_server()
    return 0


def list_tools(_args: argparse.Namespace) -> int:
    """Print the tool catalog as JSON."""
    sys.stdout.write(json.dumps([t.to_dict() for t in TOOLS], indent=2) + "\n")
    return 0


async def call_tool(args: argparse.Namespace) -> int:
    """Run a single tool invocation and print the resulting text."""
    try:
        arguments = json.loads(args.args) if args.args else {}
    except json.JSONDecodeError as exc:
        logger.error("Invalid --args JSON: %s", exc)
        return 2
    if not isinstance(arguments, dict):
        logger.error("--args must be a JSON object")
        return 2

    settings = get_settings()
    configure_logging(settings)
    result = await ToolAdapter(settings).call_tool(args.name, arguments)
    for block in result:
        sys.stdout.write(block.text + "\n")
    sys.stdout.flush()
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Atomicwork MCP server")
    parser.set_defaults(func=serve)
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("serve", help="Run the MCP server over stdio")
    p.set_defaults(func=serve)

    p = sub.add_parser("tools", help="Print the tool catalog")
    p.set_defaults(func=list_tools)

    p = sub.add_parser("call", help="Invoke one tool and print its result")
    p.add_argument("name", help="Tool name, e.g. list_my_tickets")
    p.add_argument("--args", default=None, help="Tool arguments as a JSON object")
    p.set_defaults(func=lambda a: asyncio.run(call_tool(a)))

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())

"""Atomicwork MCP Server"""

__version__ = "1.0.0"

from .mcp_server import ToolAdapter, create_server, run_server
from .tool_list import TOOLS, Tool

__all__ = ["Tool", "TOOLS", "ToolAdapter", "create_server", "run_server"]

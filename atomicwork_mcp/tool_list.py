"""List of available tools for the MCP server."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from .tools import ticket_tools
from .tools.ticket_tools import Handler


@dataclass(frozen=True)
class Tool:
    """Simple representation of a callable tool."""

    name: str
    description: str
    inputSchema: Dict[str, Any]
    _implementation: Handler

    def to_dict(self) -> Dict[str, Any]:
        # Serialize public fields while omitting the implementation callable
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.inputSchema,
        }


TOOLS: List[Tool] = [
    Tool(
        name="list_my_tickets",
        description="List all tickets assigned to you in Atomicwork",
        inputSchema={
            "type": "object",
            "properties": {
                "status": {
                    "type": "string",
                    "description": "Filter by status (open, in_progress, resolved, closed)",
                    "enum": ["open", "in_progress", "resolved", "closed"],
                },
                "limit": {
                    "type": "number",
                    "description": "Maximum number of tickets to return (default: 50)",
                    "default": 50,
                },
            },
        },
        _implementation=ticket_tools.list_my_tickets,
    ),
    Tool(
        name="get_ticket_details",
        description="Get detailed information about a specific ticket",
        inputSchema={
            "type": "object",
            "properties": {
                "ticket_id": {
                    "type": "string",
                    "description": "The ID of the ticket to retrieve",
                },
            },
            "required": ["ticket_id"],
        },
        _implementation=ticket_tools.get_ticket_details,
    ),
    Tool(
        name="search_tickets",
        description="Search for tickets by keyword or criteria",
        inputSchema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query string",
                },
                "assigned_to_me": {
                    "type": "boolean",
                    "description": "Only show tickets assigned to me",
                    "default": True,
                },
            },
            "required": ["query"],
        },
        _implementation=ticket_tools.search_tickets,
    ),
    Tool(
        name="list_all_requests",
        description=(
            "List all requests/tickets in the workspace (not just assigned to you). "
            "Supports filtering by requester email."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "status": {
                    "type": "string",
                    "description": "Filter by status",
                },
                "limit": {
                    "type": "number",
                    "description": "Maximum number of requests to return",
                    "default": 50,
                },
                "requester_email": {
                    "type": "string",
                    "description": "Filter by requester email address (e.g., 'user@company.com')",
                },
            },
        },
        _implementation=ticket_tools.list_all_requests,
    ),
    Tool(
        name="get_ticket_comments",
        description="Get all comments/notes on a specific ticket",
        inputSchema={
            "type": "object",
            "properties": {
                "ticket_id": {
                    "type": "string",
                    "description": "The ID or display_id of the ticket (e.g., 'ITREQ-1234' or '567890')",
                },
            },
            "required": ["ticket_id"],
        },
        _implementation=ticket_tools.get_ticket_comments,
    ),
]

TOOLS_BY_NAME: Dict[str, Tool] = {t.name: t for t in TOOLS}

__all__ = ["Tool", "TOOLS", "TOOLS_BY_NAME"]

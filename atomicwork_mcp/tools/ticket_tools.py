"""Read-only ticket tools backed by the Atomicwork API.

Each handler receives the shared :class:`AtomicworkClient` and the raw tool
arguments, and returns the text of the tool result. API and connection
failures are reported as text prefixed with a handler specific label.
"""

from __future__ import annotations

import functools
import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Mapping
from urllib.parse import quote

from atomicwork_mcp.client import AtomicworkClient
from atomicwork_mcp.errors import AppError, ValidationError
from atomicwork_mcp.tools.normalize import (
    extract_ticket_list,
    filter_by_requester,
    normalize_ticket,
)
from atomicwork_mcp.tools.operation_result import with_fallback

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50
# The listing endpoint rejects larger pages.
MAX_PAGE_SIZE = 100
# Over-fetch factor when requester filtering happens on our side.
REQUESTER_OVERFETCH = 3

LISTING_QUERY = "filter_name=all&sort_order=CREATED_AT_DESC&page=1"

Handler = Callable[[AtomicworkClient, Mapping[str, Any]], Awaitable[str]]


def to_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _require_text(arguments: Mapping[str, Any], name: str) -> str:
    value = arguments.get(name)
    if value is None or isinstance(value, bool) or not str(value).strip():
        raise ValidationError(f"{name} is required")
    return str(value)


def _limit(arguments: Mapping[str, Any]) -> int:
    value = arguments.get("limit")
    if value is None:
        return DEFAULT_LIMIT
    if isinstance(value, bool):
        raise ValidationError(f"limit must be a number, got {value!r}")
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        raise ValidationError(f"limit must be a number, got {value!r}") from None


def _in_filter(attribute: str, value: Any, **extra: Any) -> Dict[str, Any]:
    return {
        "attribute": attribute,
        "operator": "IN",
        "values": [{"value": value, **extra}],
    }


def _workspace_listing(client: AtomicworkClient, query: str) -> str:
    workspace = quote(client.settings.ATOMICWORK_WORKSPACE_ID, safe="")
    return f"/workspaces/{workspace}/requests/list?{LISTING_QUERY}&{query}"


def tool_handler(label: str) -> Callable[[Handler], Handler]:
    """Turn validation and API failures raised by a handler into text."""

    def decorator(func: Handler) -> Handler:
        @functools.wraps(func)
        async def wrapper(client: AtomicworkClient, arguments: Mapping[str, Any]) -> str:
            try:
                return await func(client, arguments)
            except ValidationError as exc:
                return f"Error: {exc.message}"
            except AppError as exc:
                logger.error("%s: %s", label, exc.message)
                return f"{label}: {exc.message}"

        return wrapper

    return decorator


def build_my_ticket_filters(user_id: int, status: str | None = None) -> List[Dict[str, Any]]:
    filters = [_in_filter("assignee", user_id, nested_filter=None)]
    if status:
        filters.append(_in_filter("status", status))
    return filters


@tool_handler("Error fetching tickets")
async def list_my_tickets(client: AtomicworkClient, arguments: Mapping[str, Any]) -> str:
    """List tickets assigned to the configured user."""
    status = arguments.get("status")
    limit = _limit(arguments)
    filters = build_my_ticket_filters(client.settings.assignee_id(), status)

    payload = await client.post(_workspace_listing(client, "is_problem=false"), filters)

    web_url = client.settings.web_url
    tickets = [normalize_ticket(t, web_url) for t in extract_ticket_list(payload)[:limit]]
    return to_json({"total": len(tickets), "tickets": tickets})


@tool_handler("Error fetching ticket details")
async def get_ticket_details(client: AtomicworkClient, arguments: Mapping[str, Any]) -> str:
    ticket_id = _require_text(arguments, "ticket_id")
    payload = await client.get(f"/requests/{quote(ticket_id, safe='')}")
    return to_json(payload)


@tool_handler("Error searching tickets")
async def search_tickets(client: AtomicworkClient, arguments: Mapping[str, Any]) -> str:
    query = _require_text(arguments, "query")
    endpoint = f"/requests?search={quote(query, safe='')}"
    if arguments.get("assigned_to_me", True):
        endpoint += "&assigned_to_me=true"
    return to_json(await client.get(endpoint))


def fetch_size(limit: int, requester_email: str | None) -> int:
    """Page size to request for ``list_all_requests``."""
    if requester_email:
        return min(limit * REQUESTER_OVERFETCH, MAX_PAGE_SIZE)
    return min(limit, MAX_PAGE_SIZE)


@tool_handler("Error fetching requests")
async def list_all_requests(client: AtomicworkClient, arguments: Mapping[str, Any]) -> str:
    """List workspace requests, optionally narrowed to one requester.

    Status filtering happens server side. The remote API cannot filter by
    requester, so a larger page is fetched and filtered here.
    """
    status = arguments.get("status")
    limit = _limit(arguments)
    requester_email = arguments.get("requester_email") or None

    filters = [_in_filter("status", status)] if status else []
    endpoint = _workspace_listing(client, f"per_page={fetch_size(limit, requester_email)}")
    payload = await client.post(endpoint, filters)

    if requester_email:
        payload = filter_by_requester(payload, requester_email, limit)
    return to_json(payload)


async def get_ticket_comments(client: AtomicworkClient, arguments: Mapping[str, Any]) -> str:
    """Fetch notes from the workspace endpoint, falling back to the global one."""
    try:
        ticket_id = quote(_require_text(arguments, "ticket_id"), safe="")
    except ValidationError as exc:
        return f"Error: {exc.message}"

    workspace = quote(client.settings.ATOMICWORK_WORKSPACE_ID, safe="")
    result = await with_fallback(
        lambda: client.get(f"/workspaces/{workspace}/requests/{ticket_id}/notes"),
        lambda: client.get(f"/requests/{ticket_id}/notes"),
    )
    if result.fallback is not None:
        logger.info("Workspace notes endpoint failed for %s: %s", ticket_id, result.primary.error)
    if not result.success:
        message = result.error_message("Error fetching ticket comments")
        logger.error(message)
        return message
    return to_json(result.data)


__all__ = [
    "list_my_tickets",
    "get_ticket_details",
    "search_tickets",
    "list_all_requests",
    "get_ticket_comments",
    "build_my_ticket_filters",
    "fetch_size",
    "to_json",
]

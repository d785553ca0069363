"""Reshape loosely structured Atomicwork records into fixed output shapes."""

from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping, Sequence

# Ordered candidate source keys for each normalized ticket field. Dotted
# keys address nested objects, e.g. ``assigned_to.name``.
TICKET_FIELD_ALIASES: Dict[str, tuple[str, ...]] = {
    "id": ("id", "request_id", "display_id"),
    "title": ("title", "subject"),
    "status": ("status",),
    "priority": ("priority",),
    "assigned_to": ("assigned_to.name", "assignee.name"),
    "created": ("created_at", "created_date"),
    "updated": ("updated_at", "modified_date"),
}

TICKET_FIELD_DEFAULTS: Dict[str, Any] = {
    "priority": "normal",
    "assigned_to": "Unassigned",
}

URL_ID_ALIASES: tuple[str, ...] = ("display_id", "id")

REQUESTER_EMAIL_ALIASES: tuple[str, ...] = ("requester.email", "requester_email")

# Envelope keys that may hold the ticket list, most specific first.
TICKET_LIST_KEYS: tuple[str, ...] = ("data", "requests")


def _lookup(record: Mapping[str, Any], path: str) -> Any:
    value: Any = record
    for part in path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
    return value


def resolve_field(record: Mapping[str, Any], aliases: Sequence[str], default: Any = None) -> Any:
    """Return the first non-empty value found under ``aliases``."""
    for alias in aliases:
        value = _lookup(record, alias)
        if value is not None and value != "":
            return value
    return default


def extract_ticket_list(payload: Any) -> List[Any]:
    """Locate the list of tickets in a listing response.

    Tries ``data``, then ``requests``, then the payload itself, and falls
    back to an empty list.
    """
    if isinstance(payload, Mapping):
        for key in TICKET_LIST_KEYS:
            candidate = payload.get(key)
            if isinstance(candidate, list):
                return candidate
        return []
    if isinstance(payload, list):
        return payload
    return []


def ticket_url(ticket: Mapping[str, Any], web_url: str) -> str:
    return f"{web_url}/requests/{resolve_field(ticket, URL_ID_ALIASES, '')}"


def normalize_ticket(ticket: Any, web_url: str) -> Dict[str, Any]:
    """Map a raw ticket onto the fixed summary shape."""
    if not isinstance(ticket, Mapping):
        ticket = {}
    data = {
        field: resolve_field(ticket, aliases, TICKET_FIELD_DEFAULTS.get(field))
        for field, aliases in TICKET_FIELD_ALIASES.items()
    }
    data["url"] = ticket_url(ticket, web_url)
    return data


def normalize_email(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip().lower()


def _matches_requester(request: Any, wanted: str) -> bool:
    return (
        isinstance(request, Mapping)
        and normalize_email(resolve_field(request, REQUESTER_EMAIL_ALIASES)) == wanted
    )


def filter_by_requester(payload: Any, email: str, limit: int) -> Any:
    """Keep only requests raised by ``email``.

    The ticket list is located as in :func:`extract_ticket_list` and written
    back under the same key, truncated to ``limit``. For envelopes,
    ``total_count`` and ``total_pages`` are rewritten to describe the
    filtered set.
    """
    wanted = str(email).strip().lower()
    if isinstance(payload, list):
        return [r for r in payload if _matches_requester(r, wanted)][:limit]
    if not isinstance(payload, dict):
        return payload

    key = next((k for k in TICKET_LIST_KEYS if isinstance(payload.get(k), list)), None)
    if key is None:
        return payload
    matches = [r for r in payload[key] if _matches_requester(r, wanted)]
    payload["total_count"] = len(matches)
    payload["total_pages"] = math.ceil(len(matches) / limit) if limit > 0 else 0
    payload[key] = matches[:limit]
    return payload


__all__ = [
    "TICKET_FIELD_ALIASES",
    "TICKET_FIELD_DEFAULTS",
    "REQUESTER_EMAIL_ALIASES",
    "resolve_field",
    "extract_ticket_list",
    "normalize_ticket",
    "normalize_email",
    "filter_by_requester",
]

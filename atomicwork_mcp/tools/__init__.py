from atomicwork_mcp.tools.operation_result import FallbackResult, OperationResult
from atomicwork_mcp.tools.ticket_tools import (
    get_ticket_comments,
    get_ticket_details,
    list_all_requests,
    list_my_tickets,
    search_tickets,
)

__all__ = [
    "OperationResult",
    "FallbackResult",
    "list_my_tickets",
    "get_ticket_details",
    "search_tickets",
    "list_all_requests",
    "get_ticket_comments",
]

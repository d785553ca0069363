import pytest
from mcp import types

from atomicwork_mcp.client import AtomicworkClient
from atomicwork_mcp.config import MISSING_API_KEY_MESSAGE, Settings
from atomicwork_mcp.mcp_server import ToolAdapter, create_server
from atomicwork_mcp.tool_list import TOOLS, TOOLS_BY_NAME, Tool

TOOL_NAMES = [
    "list_my_tickets",
    "get_ticket_details",
    "search_tickets",
    "list_all_requests",
    "get_ticket_comments",
]


def test_list_tools_catalog(adapter):
    tools = adapter.list_tools()

    assert [t.name for t in tools] == TOOL_NAMES
    by_name = {t.name: t for t in tools}
    assert by_name["get_ticket_details"].inputSchema["required"] == ["ticket_id"]
    assert by_name["search_tickets"].inputSchema["properties"]["assigned_to_me"]["default"] is True
    assert by_name["list_my_tickets"].inputSchema["properties"]["status"]["enum"] == [
        "open",
        "in_progress",
        "resolved",
        "closed",
    ]
    assert "required" not in by_name["list_all_requests"].inputSchema


def test_tool_to_dict_omits_implementation():
    data = TOOLS[0].to_dict()
    assert set(data) == {"name", "description", "inputSchema"}


@pytest.mark.asyncio
async def test_unknown_tool(adapter, fake_api):
    result = await adapter.call_tool("delete_everything", {"ticket_id": "1"})

    assert len(result) == 1
    assert result[0].type == "text"
    assert result[0].text == "Unknown tool: delete_everything"
    assert fake_api.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("name", TOOL_NAMES + ["not_a_tool"])
async def test_missing_api_key_short_circuits(fake_api, name):
    settings = Settings(ATOMICWORK_API_KEY="", ATOMICWORK_USER_ID="1", _env_file=None)
    adapter = ToolAdapter(settings, AtomicworkClient(settings, transport=fake_api.transport))

    result = await adapter.call_tool(name, {"ticket_id": "1", "query": "x"})

    assert [block.text for block in result] == [MISSING_API_KEY_MESSAGE]
    assert fake_api.requests == []


@pytest.mark.asyncio
async def test_dispatches_to_handler(adapter, fake_api):
    fake_api.add("GET", "/requests/77", json={"id": 77})

    result = await adapter.call_tool("get_ticket_details", {"ticket_id": "77"})

    assert result[0].text == '{\n  "id": 77\n}'


@pytest.mark.asyncio
async def test_none_arguments(adapter, fake_api):
    result = await adapter.call_tool("get_ticket_comments", None)

    assert result[0].text == "Error: ticket_id is required"


@pytest.mark.asyncio
async def test_unexpected_handler_error_becomes_text(adapter, monkeypatch):
    async def boom(client, arguments):
        raise RuntimeError("kaput")

    original = TOOLS_BY_NAME["search_tickets"]
    monkeypatch.setitem(
        TOOLS_BY_NAME,
        "search_tickets",
        Tool(original.name, original.description, original.inputSchema, boom),
    )

    result = await adapter.call_tool("search_tickets", {"query": "x"})

    assert result[0].text == "Error executing search_tickets: kaput"


@pytest.mark.asyncio
async def test_server_lists_tools(settings, client):
    server = create_server(settings, client)

    handler = server.request_handlers[types.ListToolsRequest]
    response = await handler(types.ListToolsRequest(method="tools/list"))

    assert [t.name for t in response.root.tools] == TOOL_NAMES
    assert isinstance(server.adapter, ToolAdapter)

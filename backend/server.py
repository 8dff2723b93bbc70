"""MCP server wiring: exposes the ToolRouter over the Model Context Protocol."""

from mcp import types
from mcp.server import Server

from config import SERVER_NAME, SERVER_VERSION
from router import ToolRouter


def build_server(router: ToolRouter) -> Server:
    """Create an MCP server whose tools/list and tools/call go to ``router``."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    async def handle_list_tools(_: types.ListToolsRequest) -> types.ServerResult:
        return types.ServerResult(types.ListToolsResult(tools=router.list_tools()))

    async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
        response = await router.call_tool(req.params.name, req.params.arguments)
        return types.ServerResult(
            types.CallToolResult(
                content=[types.TextContent(type="text", text=response.text)],
                isError=response.is_error,
            )
        )

    # Registered directly: the router builds its own error envelopes
    server.request_handlers[types.ListToolsRequest] = handle_list_tools
    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server

"""MCP server factory.

Creates either a Preview or Console server depending on the requested
mode. Only the Console registers campaign submission.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from .tools import register_console_tools, register_preview_tools

_SERVER_NAMES = {
    "preview": "targetwise-preview",
    "console": "targetwise-console",
}


def create_server(mode: str = "preview") -> FastMCP:
    """Build and return a configured FastMCP server.

    Args:
        mode: ``"preview"`` for read-only targeting and pricing tools,
              or ``"console"`` to also allow campaign submission.

    Returns:
        A FastMCP instance with the appropriate tools registered.
    """
    if mode not in _SERVER_NAMES:
        raise ValueError(f"Unknown MCP mode {mode!r}; expected 'preview' or 'console'")

    server = FastMCP(_SERVER_NAMES[mode])

    if mode == "preview":
        register_preview_tools(server)
    else:
        register_console_tools(server)
    _register_resources(server)

    return server


def _register_resources(server: FastMCP) -> None:
    from .resources import (
        FILTER_SCHEMA_URI,
        PRICING_TABLE_URI,
        get_filter_schema_resource,
        get_pricing_table_resource,
    )

    @server.resource(FILTER_SCHEMA_URI, name="Filter Schema", mime_type="application/json")
    def get_filter_schema() -> str:
        """FilterSet schema and payload examples."""
        return get_filter_schema_resource()["contents"]

    @server.resource(PRICING_TABLE_URI, name="Pricing Table", mime_type="application/json")
    def get_pricing_table() -> str:
        """Unit price per active filter count."""
        return get_pricing_table_resource()["contents"]


if __name__ == "__main__":
    server = create_server("preview")
    server.run(transport="stdio")

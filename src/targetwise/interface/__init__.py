"""Operator-facing interfaces: MCP server and CLI."""

"""MCP surface: one FastMCP tool per domain plus a parameters lookup tool."""

# Blocks Schema MCP Server
# File: tools/__init__.py
# Version: v2

"""Helpers for registering MCP tools."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP  # type: ignore[import]

from . import tasks


def register_all_tools(mcp: FastMCP) -> None:
    """Register all MCP tools exposed by this server."""
    tasks.register_tools(mcp)

# Blocks Schema MCP Server
# File: transports/stdio_server.py
# Version: v2

"""STDIO entrypoint for the Blocks Schema MCP server.

This is the script behind the ``blocks-schema-mcp`` console command.

It:

- configures logging (stderr, optional rotating file),
- logs which credentials are configured (never their values),
- creates a FastMCP server with the schema tools, and
- runs the built-in stdio transport.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from ..config import BlocksConfig
from ..logging_setup import configure_logging
from ..tools import register_all_tools


def build_server() -> FastMCP:
    mcp = FastMCP("blocks-schema-mcp")
    register_all_tools(mcp)
    return mcp


def main() -> None:
    """Synchronous entrypoint for console_scripts."""
    cfg = BlocksConfig.from_env()
    logger = configure_logging(cfg)
    logger.info("Configuration loaded: %s", cfg.describe()["credentials"])

    mcp = build_server()
    logger.info("Schema MCP server starting on stdio")

    # Let FastMCP handle stdio + event loop setup.
    mcp.run()


if __name__ == "__main__":
    main()

"""MCP tool definitions for vault operations.

This module imports all tool submodules to register them with the MCP server.
Each tool module uses the @mcp.tool() decorator to auto-register its tools.
"""

# Import all tool modules to register their @mcp.tool() decorated functions
from gneiss_vault.tools import vault_tools
from gneiss_vault.tools import search_tools
from gneiss_vault.tools import file_tools

__all__ = [
    "vault_tools",
    "search_tools",
    "file_tools",
]

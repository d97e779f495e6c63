"""Gneiss Vault MCP Server

Full-text search, relevance ranking and wikilink-graph traversal over a
Markdown vault via Model Context Protocol.
"""

from gneiss_vault.config import get_vault_configuration
from gneiss_vault.data_models import VaultMetadata, VaultConfiguration
from gneiss_vault.session import resolve_vault, set_active_vault, get_active_vault
from gneiss_vault.server import mcp, run_server, main

# Import tools and resources to register them with the MCP server
from gneiss_vault import tools  # noqa: F401
from gneiss_vault import resources  # noqa: F401

__version__ = "0.1.0"
__all__ = [
    "get_vault_configuration",
    "VaultMetadata",
    "VaultConfiguration",
    "resolve_vault",
    "set_active_vault",
    "get_active_vault",
    "mcp",
    "run_server",
    "main",
]

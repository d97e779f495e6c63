"""MCP resources exposed alongside the tools."""

from gneiss_vault.server import mcp
from gneiss_vault.session import resolve_vault
from gneiss_vault.core.file_operations import read_conventions

CONVENTIONS_URI = "gneiss://conventions"


@mcp.resource(
    CONVENTIONS_URI,
    name="vault-conventions",
    description=(
        "Vault organizational conventions and structure. "
        "Read this first to understand how the vault is organized."
    ),
    mime_type="text/markdown",
)
def vault_conventions() -> str:
    """Return CLAUDE.md from the default vault's root."""
    return read_conventions(resolve_vault(None).path)

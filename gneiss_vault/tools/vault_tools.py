"""MCP tools for choosing which vault queries run against."""

import logging
from typing import Any
from mcp.server.fastmcp import Context

from gneiss_vault.server import mcp
from gneiss_vault.models import ListVaultsInput, SetActiveVaultInput
from gneiss_vault.config import get_vault_configuration
from gneiss_vault.session import (
    get_active_vault,
    get_session_key,
    set_active_vault as pin_session_vault,
)

logger = logging.getLogger(__name__)


@mcp.tool(
    annotations={
        "title": "List Vaults",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def list_vaults(
    input: ListVaultsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List the configured vaults and the one this session is pinned to.

    With a single vault from GNEISS_VAULT (or the command line) the list holds
    one entry named "default".

    Returns:
        {
            "active": str | None,   # Vault used when a tool omits "vault"
            "default": str,
            "vaults": [{"name": str, "path": str, "description": str, "exists": bool}, ...]
        }

    Error Handling:
        - Nothing configured → Error naming vaults.yaml, GNEISS_CONFIG and GNEISS_VAULT
    """
    configuration = get_vault_configuration()
    active = get_active_vault(ctx).name if ctx is not None else None
    return {"active": active, **configuration.as_payload()}


@mcp.tool()
async def set_active_vault(
    input: SetActiveVaultInput,
    ctx: Context,
) -> dict[str, Any]:
    """Pin a vault for the rest of this session.

    Search, surface, graph and file tools called without "vault" will use it.

    Returns:
        {"vault": str, "path": str, "status": "active"}

    Error Handling:
        - Unknown vault → Error "Unknown vault '<name>'", see list_vaults()
    """
    pinned = pin_session_vault(ctx, input.vault)
    logger.info("Session %s pinned vault '%s' at %s", get_session_key(ctx), pinned.name, pinned.path)
    return {"vault": pinned.name, "path": str(pinned.path), "status": "active"}

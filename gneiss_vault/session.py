"""Per-session vault selection.

A client session may pin a vault with ``set_active_vault``; tool calls that
omit ``vault`` then run against it. Sessions that never pinned one use the
configured default.
"""

from typing import Dict, Optional
from mcp.server.fastmcp import Context

from gneiss_vault.config import get_vault_configuration
from gneiss_vault.data_models import VaultMetadata

# session key -> pinned vault name
_ACTIVE_VAULTS: Dict[int, str] = {}


def get_session_key(ctx: Context) -> int:
    """Key pinned-vault state by the identity of the underlying MCP session."""
    return id(ctx.session)


def set_active_vault(ctx: Context, vault_name: str) -> VaultMetadata:
    """Pin ``vault_name`` for the calling session.

    Raises:
        ValueError: If ``vault_name`` is not configured.
    """
    pinned = get_vault_configuration().get(vault_name)
    _ACTIVE_VAULTS[get_session_key(ctx)] = pinned.name
    return pinned


def get_active_vault(ctx: Context) -> VaultMetadata:
    configuration = get_vault_configuration()
    pinned_name = _ACTIVE_VAULTS.get(get_session_key(ctx))
    return configuration.get(pinned_name or configuration.default_vault)


def resolve_vault(vault: Optional[str], ctx: Optional[Context] = None) -> VaultMetadata:
    """Pick the vault one tool call runs against.

    An explicit ``vault`` wins, then the session's pinned vault, then the
    configured default.

    Raises:
        ValueError: If ``vault`` names an unknown vault.
        FileNotFoundError: If no vault configuration is available at all.
    """
    if vault:
        return get_vault_configuration().get(vault)

    if ctx is None:
        configuration = get_vault_configuration()
        return configuration.get(configuration.default_vault)

    return get_active_vault(ctx)

"""FastMCP server initialization and tool registration."""

import logging
import os
import sys
from typing import Optional, Sequence

from mcp.server.fastmcp import FastMCP

from gneiss_vault.constants import LOG_LEVEL, VAULT_ENV_VAR

# Initialize logger
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("gneiss_vault")

# Tool and resource modules are imported in __init__.py to register their decorators


def run_server():
    """Start the MCP server with stdio transport."""
    logger.info("Starting Gneiss Vault MCP Server")
    mcp.run(transport="stdio")


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Console entry point: ``gneiss-vault [vault-path]``.

    A vault path on the command line is used when ``GNEISS_VAULT`` is unset.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    if args and not os.environ.get(VAULT_ENV_VAR):
        os.environ[VAULT_ENV_VAR] = args[0]
    run_server()


if __name__ == "__main__":
    main()

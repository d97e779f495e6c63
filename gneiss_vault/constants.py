"""Module-level constants for the Gneiss vault MCP server."""

from pathlib import Path

# Configuration
CONFIG_PATH = Path(__file__).parent.parent / "vaults.yaml"
CONFIG_ENV_VAR = "GNEISS_CONFIG"
VAULT_ENV_VAR = "GNEISS_VAULT"
DEFAULT_VAULT_NAME = "default"

# Documents
DOCUMENT_EXTENSION = ".md"
CONVENTIONS_FILE = "CLAUDE.md"

# Limits
MAX_FRONTMATTER_BYTES = 10_240
DEFAULT_SURFACE_LIMIT = 10
DEFAULT_GRAPH_DEPTH = 1
DEFAULT_TREE_DEPTH = 3

# Surface signal weights, checked in this order for every query term
SIGNAL_WEIGHTS = (
    ("tag", 5),
    ("alias", 4),
    ("filename", 3),
    ("summary", 3),
    ("body", 1),
)

# Logging
LOG_LEVEL = "INFO"

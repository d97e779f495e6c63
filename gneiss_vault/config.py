"""Vault registry: where the vaults live and which one is the default.

Sources, first match wins:

1. ``GNEISS_CONFIG`` naming a YAML file,
2. ``GNEISS_VAULT`` naming a single vault directory (the console script sets
   it from its first argument),
3. ``vaults.yaml`` at the repository root.

A YAML file looks like::

    default: personal
    vaults:
      personal:
        path: ~/notes
        description: Personal notes
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from gneiss_vault.constants import CONFIG_ENV_VAR, CONFIG_PATH, DEFAULT_VAULT_NAME, VAULT_ENV_VAR
from gneiss_vault.data_models import VaultMetadata, VaultConfiguration

logger = logging.getLogger(__name__)


def _vault_metadata(name: str, raw_path: str, description: str = "") -> VaultMetadata:
    vault_path = Path(raw_path).expanduser()
    try:
        vault_path = vault_path.resolve(strict=False)
    except RuntimeError:
        # symlink loops; keep the expanded path
        pass

    return VaultMetadata(
        name=name,
        path=vault_path,
        description=description,
        exists=vault_path.is_dir(),
    )


def _parse_vault_entry(name: str, entry: Any) -> VaultMetadata:
    if not isinstance(entry, dict):
        raise ValueError(f"Vault '{name}' must be a mapping with at least a 'path' key")

    raw_path = entry.get("path")
    if not isinstance(raw_path, str) or not raw_path.strip():
        raise ValueError(f"Vault '{name}' needs a non-empty 'path' string")

    return _vault_metadata(name, raw_path, str(entry.get("description") or "").strip())


def load_vault_configuration(config_path: Path = CONFIG_PATH) -> VaultConfiguration:
    """Read a YAML vault registry.

    Args:
        config_path: YAML file to read. Defaults to ``vaults.yaml`` at the
            repository root.

    Returns:
        The parsed :class:`VaultConfiguration`. Vault directories that do not
        exist are kept and reported with ``exists=False``.

    Raises:
        FileNotFoundError: If ``config_path`` does not exist.
        ValueError: If the document is not a mapping, has no vaults, has a
            malformed vault entry, or names a default that is not listed.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Vault configuration file not found at {config_path}")

    document = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(document, dict):
        raise ValueError(f"{config_path} must contain a YAML mapping")

    vaults = document.get("vaults")
    if not isinstance(vaults, dict) or not vaults:
        raise ValueError(f"{config_path} must list at least one vault under 'vaults'")

    registry = {str(name): _parse_vault_entry(str(name), entry) for name, entry in vaults.items()}

    default_vault = document.get("default")
    if not isinstance(default_vault, str) or default_vault not in registry:
        raise ValueError(
            f"{config_path} must set 'default' to one of: {', '.join(sorted(registry))}"
        )

    return VaultConfiguration(default_vault=default_vault, vaults=registry)


def single_vault_configuration(vault_path: str) -> VaultConfiguration:
    """Build a configuration holding one vault named ``default``."""
    if not vault_path.strip():
        raise ValueError("Vault path cannot be empty")
    metadata = _vault_metadata(DEFAULT_VAULT_NAME, vault_path, "Vault from command line or environment")
    return VaultConfiguration(default_vault=DEFAULT_VAULT_NAME, vaults={DEFAULT_VAULT_NAME: metadata})


@lru_cache(maxsize=1)
def get_vault_configuration() -> VaultConfiguration:
    """Return the process-wide vault configuration, loading it on first use.

    Raises:
        FileNotFoundError: If none of the sources is available.
        ValueError: If the configuration file is malformed.
    """
    explicit_config = os.environ.get(CONFIG_ENV_VAR)
    if explicit_config:
        logger.info("Loading vault configuration from %s=%s", CONFIG_ENV_VAR, explicit_config)
        return load_vault_configuration(Path(explicit_config).expanduser())

    env_vault = os.environ.get(VAULT_ENV_VAR)
    if env_vault:
        logger.info("Using single vault from %s: %s", VAULT_ENV_VAR, env_vault)
        return single_vault_configuration(env_vault)

    if CONFIG_PATH.exists():
        logger.info("Loading vault configuration from %s", CONFIG_PATH)
        return load_vault_configuration(CONFIG_PATH)

    raise FileNotFoundError(
        f"No vault configured: create {CONFIG_PATH}, set {CONFIG_ENV_VAR}, "
        f"or set {VAULT_ENV_VAR} to a vault directory"
    )

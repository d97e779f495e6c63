"""Base Pydantic models shared by every tool input.

Base Models:
- BaseVaultInput: optional vault selector
- BasePathInput: adds one vault-relative path
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field, field_validator


def clean_relative_path(value: str, label: str = "Path") -> str:
    """Strip whitespace, use forward slashes and reject absolute paths.

    ``..`` segments are allowed here; whether the path stays inside the vault
    is decided against the vault root when the tool runs.
    """
    cleaned = value.strip().replace("\\", "/")
    if cleaned.startswith("/"):
        raise ValueError(
            f"{label} '{cleaned}' is absolute. "
            "Give it relative to the vault root, e.g. 'projects/api.md'."
        )
    return cleaned


class BaseVaultInput(BaseModel):
    """Base model carrying the optional vault selector."""

    vault: Optional[str] = Field(
        None,
        description=(
            "Vault to query. Omit to use this session's active vault "
            "(see set_active_vault) or the configured default."
        )
    )

    @field_validator('vault')
    @classmethod
    def validate_vault(cls, v: Optional[str]) -> Optional[str]:
        """Strip the vault name; a blank name is an error, not a default."""
        if v is None:
            return None

        name = v.strip()
        if not name:
            raise ValueError(
                "Vault name cannot be blank. "
                "Omit 'vault' to use the active vault, or call list_vaults() for valid names."
            )
        return name


class BasePathInput(BaseVaultInput):
    """Base model for operations on a single vault file or directory."""

    path: str = Field(
        min_length=1,
        description=(
            "Path relative to the vault root, including the extension. "
            "Examples: 'projects/api.md', 'Daily Notes/2025-10-27.md'."
        ),
        examples=["projects/api.md", "README.md"]
    )

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate the path is non-empty and relative."""
        cleaned = clean_relative_path(v)
        if not cleaned:
            raise ValueError(
                "Path cannot be empty. "
                "Provide a path relative to the vault root like 'projects/api.md'."
            )
        return cleaned

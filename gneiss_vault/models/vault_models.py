"""Pydantic input models for vault selection tools."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ListVaultsInput(BaseModel):
    """Input model for list_vaults tool (no parameters)."""


class SetActiveVaultInput(BaseModel):
    """Input model for set_active_vault tool.

    Examples:
        >>> SetActiveVaultInput(vault="default")
        >>> SetActiveVaultInput(vault="work")
    """

    vault: str = Field(
        min_length=1,
        description=(
            "Name of a configured vault ('default' when the server was started "
            "with a single vault path). Use list_vaults() to see the names."
        ),
        examples=["default", "work"]
    )

    @field_validator('vault')
    @classmethod
    def validate_vault(cls, v: str) -> str:
        """Strip the name and reject blanks."""
        name = v.strip()
        if not name:
            raise ValueError(
                "Vault name cannot be blank. "
                "Call list_vaults() for the configured names."
            )
        return name

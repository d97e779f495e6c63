"""Pydantic input models for file-level vault operations.

This module defines input models for browsing and editing tools:
- List a directory / render a tree
- Read a file
- Create, move, rename and delete paths
- Edit a file in one of several modes
"""

from __future__ import annotations

from typing import Any, Literal, Optional
from pydantic import Field, field_validator, model_validator

from gneiss_vault.constants import DEFAULT_TREE_DEPTH
from gneiss_vault.models.base import BasePathInput, BaseVaultInput, clean_relative_path


class ListDirectoryInput(BaseVaultInput):
    """Input model for list_vault_directory tool (non-recursive listing).

    Examples:
        >>> ListDirectoryInput()
        >>> ListDirectoryInput(path="projects")
    """

    path: str = Field(
        "",
        description="Directory relative to vault root. Omit for root."
    )

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Normalize the directory path."""
        return clean_relative_path(v, "Directory path")


class VaultTreeInput(ListDirectoryInput):
    """Input model for vault_tree tool."""

    depth: int = Field(
        DEFAULT_TREE_DEPTH,
        ge=1,
        description="Max depth to display. Default: 3"
    )


class ReadFileInput(BasePathInput):
    """Input model for read_vault_file tool."""


class CreatePathInput(BasePathInput):
    """Input model for create_vault_path tool.

    A trailing '/' creates a directory; otherwise a file is written.

    Examples:
        >>> CreatePathInput(path="notes/idea.md", content="an idea")
        >>> CreatePathInput(path="archive/")
    """

    content: Optional[str] = Field(
        None,
        description="File content (ignored for directories). Default: empty file"
    )


class MovePathInput(BaseVaultInput):
    """Input model for move_vault_path tool."""

    source: str = Field(min_length=1, description="Current path relative to vault root")
    destination: str = Field(min_length=1, description="New path relative to vault root")

    @field_validator('source', 'destination')
    @classmethod
    def validate_paths(cls, v: str) -> str:
        """Validate both endpoints are non-empty relative paths."""
        cleaned = clean_relative_path(v)
        if not cleaned:
            raise ValueError("Path cannot be empty.")
        return cleaned


class RenamePathInput(BasePathInput):
    """Input model for rename_vault_path tool."""

    new_name: str = Field(
        min_length=1,
        description=(
            "New name without extension; the file's extension is kept. "
            "Examples: 'new-name', 'Archive 2025'"
        )
    )

    @field_validator('new_name')
    @classmethod
    def validate_new_name(cls, v: str) -> str:
        """Reject empty names and names containing path separators."""
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("New name cannot be empty.")
        if "/" in cleaned or "\\" in cleaned:
            raise ValueError(
                "New name cannot contain path separators. "
                "Use move_vault_path() to change folders."
            )
        return cleaned


class DeletePathInput(BasePathInput):
    """Input model for delete_vault_path tool."""


class EditFileInput(BasePathInput):
    """Input model for edit_vault_file tool.

    Examples:
        >>> EditFileInput(path="a.md", mode="append", content="\\nmore")
        >>> EditFileInput(path="a.md", mode="find-replace", find="old", replace="new", all=True)
        >>> EditFileInput(path="a.md", mode="patch-frontmatter", metadata={"status": "done"})
    """

    mode: Literal["replace", "append", "prepend", "find-replace", "patch-frontmatter"] = Field(
        description="Edit mode"
    )

    content: Optional[str] = Field(
        None,
        description="Text for 'replace', 'append' and 'prepend' modes"
    )

    find: Optional[str] = Field(None, description="Text to find ('find-replace' mode)")
    replace: Optional[str] = Field(None, description="Replacement text ('find-replace' mode)")
    all: bool = Field(False, description="Replace every occurrence ('find-replace' mode)")

    metadata: Optional[dict[str, Any]] = Field(
        None,
        description="Fields merged into the frontmatter ('patch-frontmatter' mode)"
    )

    @model_validator(mode='after')
    def check_mode_fields(self) -> "EditFileInput":
        """Ensure the fields required by the selected mode are present."""
        if self.mode in ("replace", "append", "prepend") and self.content is None:
            raise ValueError(f"Mode '{self.mode}' requires 'content'.")
        if self.mode == "find-replace" and (not self.find or self.replace is None):
            raise ValueError("Mode 'find-replace' requires non-empty 'find' and a 'replace' value.")
        if self.mode == "patch-frontmatter" and not self.metadata:
            raise ValueError("Mode 'patch-frontmatter' requires a non-empty 'metadata' mapping.")
        return self

"""Pydantic input models for MCP tool validation.

Each model is the input schema of one MCP tool, with field-level validation
and descriptive error messages.

Architecture:
- base: Base models (BaseVaultInput, BasePathInput) for common validation
- search_models: Input models for search, surface and graph operations
- file_models: Input models for browsing and editing vault files
- vault_models: Input models for vault management operations
"""

from .base import BaseVaultInput, BasePathInput
from .search_models import (
    SearchVaultInput,
    SurfaceNotesInput,
    GraphNotesInput,
)
from .file_models import (
    ListDirectoryInput,
    VaultTreeInput,
    ReadFileInput,
    CreatePathInput,
    MovePathInput,
    RenamePathInput,
    DeletePathInput,
    EditFileInput,
)
from .vault_models import (
    ListVaultsInput,
    SetActiveVaultInput,
)

__all__ = [
    # Base models
    "BaseVaultInput",
    "BasePathInput",
    # Search models
    "SearchVaultInput",
    "SurfaceNotesInput",
    "GraphNotesInput",
    # File models
    "ListDirectoryInput",
    "VaultTreeInput",
    "ReadFileInput",
    "CreatePathInput",
    "MovePathInput",
    "RenamePathInput",
    "DeletePathInput",
    "EditFileInput",
    # Vault models
    "ListVaultsInput",
    "SetActiveVaultInput",
]

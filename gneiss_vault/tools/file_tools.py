"""File management MCP tools.

This module provides MCP tool wrappers for file-level vault operations:
- List a directory / render the vault tree
- Read a file (with parsed frontmatter for Markdown)
- Create, move, rename and delete files or folders
- Edit a file (replace, append, prepend, find-replace, patch-frontmatter)

All tools delegate to core operations in gneiss_vault.core.file_operations.
"""
from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import Context

from gneiss_vault.server import mcp
from gneiss_vault.session import resolve_vault
from gneiss_vault.models import (
    ListDirectoryInput,
    VaultTreeInput,
    ReadFileInput,
    CreatePathInput,
    MovePathInput,
    RenamePathInput,
    DeletePathInput,
    EditFileInput,
)
from gneiss_vault.core.vault_operations import ensure_vault_ready
from gneiss_vault.core.file_operations import (
    list_directory,
    render_tree,
    read_file,
    create_path,
    move_path,
    rename_path,
    delete_path,
    edit_file,
)


# ==============================================================================
# READ OPERATIONS
# ==============================================================================


@mcp.tool()
async def list_vault_directory(
    input: ListDirectoryInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List files and folders in a single vault directory (non-recursive).

    Hidden entries (names starting with '.') are omitted.

    Returns:
        {"vault": str, "path": str, "entries": [{"path", "name", "is_directory"}, ...]}
    """
    metadata = resolve_vault(input.vault, ctx)
    ensure_vault_ready(metadata)
    entries = list_directory(metadata.path, input.path)
    return {
        "vault": metadata.name,
        "path": input.path,
        "entries": [entry.as_payload() for entry in entries],
    }


@mcp.tool()
async def vault_tree(
    input: VaultTreeInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Display the vault directory tree. Use to understand folder layout before navigating.

    Returns:
        {"vault": str, "path": str, "tree": str}
    """
    metadata = resolve_vault(input.vault, ctx)
    ensure_vault_ready(metadata)
    return {
        "vault": metadata.name,
        "path": input.path,
        "tree": render_tree(metadata.path, input.path, input.depth),
    }


@mcp.tool()
async def read_vault_file(
    input: ReadFileInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Read a file's content. Markdown files return parsed frontmatter and body.

    Returns:
        {"vault": str, "path": str, "content": str, "frontmatter": dict | None}

    Error Handling:
        - Missing file → FileNotFoundError
    """
    metadata = resolve_vault(input.vault, ctx)
    ensure_vault_ready(metadata)
    payload = read_file(metadata.path, input.path).as_payload()
    return {"vault": metadata.name, "path": input.path, **payload}


# ==============================================================================
# WRITE OPERATIONS
# ==============================================================================


@mcp.tool()
async def create_vault_path(
    input: CreatePathInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Create a file (with optional content) or a folder (path ending in '/').

    Parent folders are created as needed.
    """
    metadata = resolve_vault(input.vault, ctx)
    ensure_vault_ready(metadata)
    created = create_path(metadata.path, input.path, input.content)
    return {"vault": metadata.name, "path": created, "status": "created"}


@mcp.tool()
async def move_vault_path(
    input: MovePathInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Move a file or folder to a new location inside the vault.

    Error Handling:
        - Source missing → FileNotFoundError
        - Destination exists → FileExistsError
    """
    metadata = resolve_vault(input.vault, ctx)
    ensure_vault_ready(metadata)
    move_path(metadata.path, input.source, input.destination)
    return {
        "vault": metadata.name,
        "old_path": input.source,
        "new_path": input.destination,
        "status": "moved",
    }


@mcp.tool()
async def rename_vault_path(
    input: RenamePathInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Rename a file or folder in place. A file keeps its extension."""
    metadata = resolve_vault(input.vault, ctx)
    ensure_vault_ready(metadata)
    new_path = rename_path(metadata.path, input.path, input.new_name)
    return {
        "vault": metadata.name,
        "old_path": input.path,
        "new_path": new_path,
        "status": "renamed",
    }


@mcp.tool(
    annotations={
        "title": "Delete File or Folder",
        "destructiveHint": True,
    }
)
async def delete_vault_path(
    input: DeletePathInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Delete a file, or a folder with everything inside it."""
    metadata = resolve_vault(input.vault, ctx)
    ensure_vault_ready(metadata)
    delete_path(metadata.path, input.path)
    return {"vault": metadata.name, "path": input.path, "status": "deleted"}


@mcp.tool()
async def edit_vault_file(
    input: EditFileInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Edit an existing file.

    Modes:
        - replace: new body, Markdown frontmatter kept
        - append / prepend: add content at the end / after the frontmatter
        - find-replace: replace first occurrence of 'find' (all with all=True)
        - patch-frontmatter: merge 'metadata' into the frontmatter (Markdown only)

    Error Handling:
        - Find string missing → ValueError
        - patch-frontmatter on a non-Markdown file → ValueError
    """
    metadata = resolve_vault(input.vault, ctx)
    ensure_vault_ready(metadata)
    edit_file(
        metadata.path,
        input.path,
        input.mode,
        content=input.content,
        find=input.find,
        replace=input.replace,
        replace_all=input.all,
        metadata=input.metadata,
    )
    return {"vault": metadata.name, "path": input.path, "mode": input.mode, "status": "edited"}

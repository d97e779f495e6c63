"""Search and discovery tools for vault operations.

This module contains the MCP tool wrappers for query operations:
- search_vault: Full-text line search
- surface_notes: Weighted relevance ranking by tags, aliases, filename, summary and body
- graph_notes: Wikilink graph traversal around a note
"""
from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import Context

from gneiss_vault.server import mcp
from gneiss_vault.session import resolve_vault
from gneiss_vault.models import (
    SearchVaultInput,
    SurfaceNotesInput,
    GraphNotesInput,
)
from gneiss_vault.core.vault_operations import ensure_vault_ready
from gneiss_vault.core.search_operations import search_vault as search_vault_core, surface_notes as surface_notes_core
from gneiss_vault.core.link_operations import graph

logger = logging.getLogger(__name__)

# ==============================================================================
# DISCOVERY & SEARCH TOOLS
# ==============================================================================


@mcp.tool(
    annotations={
        "title": "Search Vault",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def search_vault(
    input: SearchVaultInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Search vault content line by line (case-insensitive).

    Returns every Markdown file containing the query together with the
    matching lines, trimmed. Files are listed in vault order, not by relevance.

    Args:
        input (SearchVaultInput): Validated input containing:
            - query (str): Text to search for
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "vault": str,
            "query": str,
            "results": [{"path": str, "name": str, "matches": [str, ...]}, ...]
        }

    Examples:
        - Use when: Locating a specific phrase or keyword
        - Don't use: Exploring a topic → Use surface_notes()

    Error Handling:
        - ValidationError: Empty query or invalid vault name
        - Unreadable files are skipped
    """
    metadata = resolve_vault(input.vault, ctx)
    ensure_vault_ready(metadata)
    results = search_vault_core(metadata.path, input.query)
    logger.info(
        "Content search in vault '%s' for query '%s' matched %d files",
        metadata.name,
        input.query,
        len(results),
    )
    return {
        "vault": metadata.name,
        "query": input.query,
        "results": [result.as_payload() for result in results],
    }


@mcp.tool(
    annotations={
        "title": "Surface Relevant Notes",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def surface_notes(
    input: SurfaceNotesInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Discover notes relevant to a topic, ranked by weighted signals.

    Each query term scores: tags (5, nested tags match their parent),
    aliases (4), filename (3), summary (3), body (1). Best for exploratory
    queries when you're not sure what exists.

    Args:
        input (SurfaceNotesInput): Validated input containing:
            - query (str): Topic or keywords
            - path (str, optional): Restrict to a subdirectory
            - tags (list[str], optional): Require any of these tags
            - limit (int): Max results (default 10)
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "vault": str,
            "query": str,
            "results": [
                {
                    "path": str,
                    "score": int,
                    "tags": [str, ...],
                    "summary": str | None,
                    "matched_signals": ["tag:term", "body:term", ...]
                },
                ...
            ]
        }

    Error Handling:
        - Blank query → Returns {"results": []}
        - Path outside vault → Error "Path escapes vault root"
    """
    metadata = resolve_vault(input.vault, ctx)
    ensure_vault_ready(metadata)
    results = surface_notes_core(
        metadata.path,
        input.query,
        path=input.path,
        tags=input.tags,
        limit=input.limit,
    )
    logger.info(
        "Surface in vault '%s' for query '%s' returned %d notes",
        metadata.name,
        input.query,
        len(results),
    )
    return {
        "vault": metadata.name,
        "query": input.query,
        "results": [result.as_payload() for result in results],
    }


@mcp.tool(
    annotations={
        "title": "Traverse Link Graph",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def graph_notes(
    input: GraphNotesInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Traverse the [[wikilink]] graph around a note.

    Use after finding a relevant note to explore its neighbourhood. Links to
    notes that do not exist are reported as dangling nodes (exists: false).

    Args:
        input (GraphNotesInput): Validated input containing:
            - path (str): Root note, relative to vault root
            - depth (int): Max hops from root (default 1)
            - direction (str): "forward", "backward" or "both" (default)
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "vault": str,
            "root": str,
            "nodes": [{"path": str, "depth": int, "exists": bool}, ...],
            "edges": [{"source": str, "target": str}, ...],
            "dangling": [str, ...]
        }

    Error Handling:
        - Root outside vault → Error "Path escapes vault root"
        - Root missing → Error "Document ... not found"
    """
    metadata = resolve_vault(input.vault, ctx)
    ensure_vault_ready(metadata)
    result = graph(metadata.path, input.path, depth=input.depth, direction=input.direction)
    logger.info(
        "Graph of '%s' in vault '%s' (depth=%d, direction=%s): %d nodes, %d edges",
        result.root,
        metadata.name,
        input.depth,
        input.direction,
        len(result.nodes),
        len(result.edges),
    )
    payload = result.as_payload()
    payload["vault"] = metadata.name
    return payload

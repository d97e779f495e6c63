"""Inputs for the read-only query tools:

- Full-text line search across the vault
- Weighted relevance ranking ("surface")
- Wikilink graph traversal
"""

from __future__ import annotations

from typing import Literal, Optional
from pydantic import ConfigDict, Field, field_validator

from gneiss_vault.constants import DEFAULT_GRAPH_DEPTH, DEFAULT_SURFACE_LIMIT
from gneiss_vault.models.base import BasePathInput, BaseVaultInput, clean_relative_path


class SearchVaultInput(BaseVaultInput):
    """Input model for search_vault tool.

    Case-insensitive substring search over every line of every Markdown file.

    Examples:
        >>> SearchVaultInput(query="refactor")
        >>> SearchVaultInput(query="API design", vault="work")
    """

    query: str = Field(
        min_length=1,
        description=(
            "Text to search for (case-insensitive). "
            "Every line containing it is returned. "
            "Examples: 'refactor', 'API design'"
        )
    )

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"query": "refactor"}, {"query": "API design", "vault": "work"}]}
    )

    @field_validator('query')
    @classmethod
    def validate_query(cls, v: str) -> str:
        """Whitespace-only queries would match every line; refuse them."""
        query = v.strip()
        if not query:
            raise ValueError("Search query is blank. Give a word or phrase to look for, e.g. 'refactor'.")
        return query


class SurfaceNotesInput(BaseVaultInput):
    """Input model for surface_notes tool.

    Ranks notes by weighted signals: tags (5), aliases (4), filename (3),
    summary (3), body (1) for each query term.

    Examples:
        >>> SurfaceNotesInput(query="dotnet api")
        >>> SurfaceNotesInput(query="go", path="projects", tags=["lang"], limit=5)
    """

    query: str = Field(
        description=(
            "Topic or keywords to surface relevant notes for. "
            "Terms are matched independently. "
            "Examples: 'dotnet', 'kubernetes deployment'"
        )
    )

    path: Optional[str] = Field(
        None,
        description=(
            "Restrict ranking to this subdirectory (relative to vault root). "
            "Examples: 'projects', 'areas/work'"
        )
    )

    tags: Optional[list[str]] = Field(
        None,
        description=(
            "Only consider notes carrying at least one of these tags. "
            "Nested tags match their parents: 'dotnet' matches 'dotnet/api'."
        )
    )

    limit: int = Field(
        DEFAULT_SURFACE_LIMIT,
        ge=1,
        description="Maximum number of results. Default: 10"
    )

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: Optional[str]) -> Optional[str]:
        """Normalize the optional subdirectory; blank means the whole vault."""
        if v is None:
            return None
        cleaned = clean_relative_path(v, "Folder path")
        return cleaned or None

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        """Strip whitespace from each tag and drop empty ones."""
        if v is None:
            return None
        tags = [tag.strip() for tag in v if tag.strip()]
        return tags or None


class GraphNotesInput(BasePathInput):
    """Input model for graph_notes tool.

    Traverses the [[wikilink]] graph around a note.

    Examples:
        >>> GraphNotesInput(path="projects/api.md")
        >>> GraphNotesInput(path="index.md", depth=2, direction="forward")
    """

    depth: int = Field(
        DEFAULT_GRAPH_DEPTH,
        ge=0,
        description="Max hops from the root note. Default: 1"
    )

    direction: Literal["forward", "backward", "both"] = Field(
        "both",
        description=(
            "Link direction to follow: 'forward' (outgoing links), "
            "'backward' (backlinks) or 'both'. Default: 'both'"
        )
    )

    @field_validator('direction', mode='before')
    @classmethod
    def normalize_direction(cls, v: object) -> object:
        """Accept direction names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

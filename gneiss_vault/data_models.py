"""Records passed between the configuration, core and tool layers.

Everything a tool returns is built from these types through ``as_payload()``.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, NamedTuple, Optional


# ==============================================================================
# VAULT REGISTRY
# ==============================================================================


@dataclass(frozen=True)
class VaultMetadata:
    """A configured vault. ``exists`` reflects the directory at load time."""

    name: str
    path: Path
    description: str
    exists: bool

    def as_payload(self) -> dict[str, Any]:
        # re-check the directory so list_vaults reports the current state
        return {
            "name": self.name,
            "path": str(self.path),
            "description": self.description,
            "exists": self.path.is_dir(),
        }


@dataclass
class VaultConfiguration:
    """Named vaults plus the one used when a call does not pick any."""

    default_vault: str
    vaults: dict[str, VaultMetadata]

    def get(self, name: str) -> VaultMetadata:
        """Look up a vault by name.

        Raises:
            ValueError: If ``name`` is not configured.
        """
        if name not in self.vaults:
            known = ", ".join(sorted(self.vaults))
            raise ValueError(f"Unknown vault '{name}'. Configured vaults: {known}")
        return self.vaults[name]

    def as_payload(self) -> dict[str, Any]:
        return {
            "default": self.default_vault,
            "vaults": [metadata.as_payload() for metadata in self.vaults.values()],
        }


# ==============================================================================
# QUERY RESULTS
# ==============================================================================


class DocumentRef(NamedTuple):
    """A Markdown document found by the corpus scanner."""

    path: str
    absolute: Path


@dataclass
class Document:
    """A parsed document: front-matter metadata plus derived ranking fields."""

    path: str
    metadata: dict[str, Any]
    body: str
    tags: list[str] = field(default_factory=list)
    aliases: list[str] = field(default_factory=list)
    summary: Optional[str] = None

    @property
    def name(self) -> str:
        return Path(self.path).stem


@dataclass(frozen=True)
class VaultEntry:
    """One non-hidden entry of a vault directory."""

    path: str
    name: str
    is_directory: bool

    def as_payload(self) -> dict[str, Any]:
        return {"path": self.path, "name": self.name, "is_directory": self.is_directory}


@dataclass(frozen=True)
class FileContent:
    """File body, with parsed front-matter for Markdown files (``None`` otherwise)."""

    content: str
    frontmatter: Optional[dict[str, Any]] = None

    def as_payload(self) -> dict[str, Any]:
        return {"content": self.content, "frontmatter": self.frontmatter}


@dataclass(frozen=True)
class SearchResult:
    """Full-text search hit: every trimmed line containing the query."""

    path: str
    name: str
    matches: list[str]

    def as_payload(self) -> dict[str, Any]:
        return {"path": self.path, "name": self.name, "matches": list(self.matches)}


@dataclass(frozen=True)
class SurfaceResult:
    """A ranked document with the signals that contributed to its score."""

    path: str
    score: int
    tags: list[str]
    summary: Optional[str]
    matched_signals: list[str]

    def as_payload(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "score": self.score,
            "tags": list(self.tags),
            "summary": self.summary,
            "matched_signals": list(self.matched_signals),
        }


@dataclass
class LinkIndex:
    """Forward and backward wikilink adjacency built for a single query.

    ``forward`` maps a document path to its targets in link order; a target is
    either a document path or, when resolution failed, the literal link text.
    ``backward`` is the exact inverse of every forward pair.
    """

    forward: dict[str, list[str]] = field(default_factory=dict)
    backward: dict[str, list[str]] = field(default_factory=dict)
    documents: set[str] = field(default_factory=set)


@dataclass(frozen=True)
class GraphNode:
    path: str
    depth: int
    exists: bool

    def as_payload(self) -> dict[str, Any]:
        return {"path": self.path, "depth": self.depth, "exists": self.exists}


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str

    def as_payload(self) -> dict[str, Any]:
        return {"source": self.source, "target": self.target}


@dataclass(frozen=True)
class GraphResult:
    """Neighbourhood of ``root`` discovered by a bounded breadth-first walk."""

    root: str
    nodes: list[GraphNode]
    edges: list[GraphEdge]

    @property
    def dangling(self) -> list[str]:
        """Paths of link targets that do not match any document."""
        return [node.path for node in self.nodes if not node.exists]

    def as_payload(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "nodes": [node.as_payload() for node in self.nodes],
            "edges": [edge.as_payload() for edge in self.edges],
            "dangling": self.dangling,
        }

"""Wikilink extraction, resolution and link-graph traversal."""

from __future__ import annotations

import logging
import re
from collections import deque
from pathlib import Path
from typing import Optional, Sequence

from gneiss_vault.constants import DEFAULT_GRAPH_DEPTH, DOCUMENT_EXTENSION
from gneiss_vault.data_models import DocumentRef, GraphEdge, GraphNode, GraphResult, LinkIndex
from gneiss_vault.core.vault_operations import (
    PathLike,
    read_text,
    relative_path,
    resolve_safe,
    scan_documents,
)

logger = logging.getLogger(__name__)

# [[target]], [[target#heading]], [[target|alias]], [[target#heading|alias]]
WIKILINK_PATTERN = re.compile(r"\[\[([^\]#|]+)(?:#[^\]|]*)?(?:\|[^\]]*)?\]\]")

GRAPH_DIRECTIONS = ("forward", "backward", "both")


# ==============================================================================
# PARSING & RESOLUTION
# ==============================================================================


def extract_wikilinks(text: str) -> list[str]:
    """Extract wikilink targets from raw document text.

    Heading and alias suffixes are dropped and targets are trimmed. Duplicates
    are removed keeping the order of first appearance.
    """
    seen: dict[str, None] = {}
    for match in WIKILINK_PATTERN.finditer(text or ""):
        target = match.group(1).strip()
        if target and target not in seen:
            seen[target] = None
    return list(seen)


class CorpusLookup:
    """Case-insensitive lookup tables over one corpus snapshot.

    When two documents share a basename (or differ only by case), the first
    one in scan order wins.
    """

    def __init__(self, documents: Sequence[DocumentRef]) -> None:
        self.by_path: dict[str, str] = {}
        self.by_basename: dict[str, str] = {}
        for document in documents:
            self.by_path.setdefault(document.path.lower(), document.path)
            self.by_basename.setdefault(Path(document.path).stem.lower(), document.path)


def resolve_wikilink(token: str, lookup: CorpusLookup) -> Optional[str]:
    """Map a wikilink target to a document path.

    Targets containing ``/`` are matched against full vault-relative paths,
    bare names against document basenames. Both comparisons ignore case and
    an optional ``.md`` suffix on the target.

    Returns:
        The document path with its on-disk case, or ``None`` for a dangling link.
    """
    normalized = token
    if normalized.lower().endswith(DOCUMENT_EXTENSION):
        normalized = normalized[: -len(DOCUMENT_EXTENSION)]

    if "/" in normalized:
        return lookup.by_path.get(f"{normalized}{DOCUMENT_EXTENSION}".lower())

    return lookup.by_basename.get(normalized.lower())


# ==============================================================================
# INDEX CONSTRUCTION
# ==============================================================================


def build_link_index(vault_root: PathLike) -> LinkIndex:
    """Scan the whole vault and build forward/backward wikilink adjacency.

    Every link of a document is kept in order, resolved targets as document
    paths and dangling ones as their literal text. Two different link texts
    resolving to the same document produce two forward entries; edges are
    deduplicated during traversal instead.

    Documents that cannot be read are logged and contribute no links.
    """
    documents = scan_documents(vault_root)
    lookup = CorpusLookup(documents)
    index = LinkIndex(documents={document.path for document in documents})

    for document in documents:
        try:
            text = read_text(document.absolute)
        except OSError as exc:
            logger.warning("Skipping '%s' while building link index: %s", document.path, exc)
            continue

        targets = index.forward.setdefault(document.path, [])
        for token in extract_wikilinks(text):
            resolved = resolve_wikilink(token, lookup)
            targets.append(resolved if resolved is not None else token)

    for source, targets in index.forward.items():
        for target in targets:
            index.backward.setdefault(target, []).append(source)

    logger.debug(
        "Built link index with %d documents and %d links",
        len(index.documents),
        sum(len(targets) for targets in index.forward.values()),
    )
    return index


# ==============================================================================
# GRAPH TRAVERSAL
# ==============================================================================


def _validate_traversal(depth: int, direction: str) -> None:
    if depth < 0:
        raise ValueError("Graph depth must be zero or greater.")
    if direction not in GRAPH_DIRECTIONS:
        raise ValueError(
            f"direction must be one of: {', '.join(GRAPH_DIRECTIONS)}. Got: '{direction}'"
        )


def traverse_links(
    index: LinkIndex,
    root: str,
    depth: int = DEFAULT_GRAPH_DEPTH,
    direction: str = "both",
) -> GraphResult:
    """Breadth-first walk of ``index`` starting at ``root``.

    Nodes keep the depth at which they were first discovered and are only
    expanded while that depth is below ``depth``. Each ``(source, target)``
    pair appears at most once in the returned edges.

    Raises:
        ValueError: If ``depth`` is negative or ``direction`` is unknown.
    """
    _validate_traversal(depth, direction)

    follow_forward = direction in ("forward", "both")
    follow_backward = direction in ("backward", "both")

    depths: dict[str, int] = {root: 0}
    edges: list[GraphEdge] = []
    seen_edges: set[tuple[str, str]] = set()
    queue = deque([root])

    while queue:
        node = queue.popleft()
        node_depth = depths[node]
        if node_depth >= depth:
            continue

        candidates: list[tuple[str, str]] = []
        if follow_forward:
            candidates.extend((node, target) for target in index.forward.get(node, []))
        if follow_backward:
            candidates.extend((source, node) for source in index.backward.get(node, []))

        for source, target in candidates:
            if (source, target) not in seen_edges:
                seen_edges.add((source, target))
                edges.append(GraphEdge(source, target))

            neighbour = target if source == node else source
            if neighbour not in depths:
                depths[neighbour] = node_depth + 1
                queue.append(neighbour)

    nodes = [
        GraphNode(path=path, depth=node_depth, exists=path in index.documents)
        for path, node_depth in depths.items()
    ]
    return GraphResult(root=root, nodes=nodes, edges=edges)


def graph(
    vault_root: PathLike,
    root: str,
    depth: int = DEFAULT_GRAPH_DEPTH,
    direction: str = "both",
) -> GraphResult:
    """Traverse the wikilink graph around a document.

    Args:
        vault_root: Vault root directory.
        root: Vault-relative path of the starting document.
        depth: Maximum number of hops from ``root``.
        direction: ``"forward"``, ``"backward"`` or ``"both"``.

    Returns:
        The discovered nodes and edges. Link targets that match no document are
        returned as nodes with ``exists=False``.

    Raises:
        PathEscapesRoot: If ``root`` lies outside the vault.
        FileNotFoundError: If ``root`` is not an existing file.
        ValueError: If ``depth`` or ``direction`` is invalid.
    """
    _validate_traversal(depth, direction)
    absolute = resolve_safe(vault_root, root)
    if not absolute.is_file():
        raise FileNotFoundError(f"Document '{root}' not found in vault.")

    index = build_link_index(vault_root)
    return traverse_links(index, relative_path(vault_root, absolute), depth, direction)

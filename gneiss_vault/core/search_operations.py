"""Full-text search and multi-signal relevance ranking."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from gneiss_vault.constants import DEFAULT_SURFACE_LIMIT, SIGNAL_WEIGHTS
from gneiss_vault.data_models import Document, SearchResult, SurfaceResult
from gneiss_vault.core.frontmatter_operations import load_document
from gneiss_vault.core.vault_operations import (
    PathLike,
    read_text,
    resolve_safe,
    scan_documents,
)

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def tag_matches(tag: str, wanted: str) -> bool:
    """Return True when ``tag`` equals ``wanted`` or is nested below it (``wanted/...``).

    Comparison is case-insensitive.
    """
    tag_lower = tag.lower()
    wanted_lower = wanted.lower()
    return tag_lower == wanted_lower or tag_lower.startswith(wanted_lower + "/")


def _has_required_tag(document: Document, required_tags: Sequence[str]) -> bool:
    return any(
        tag_matches(tag, required) for required in required_tags for tag in document.tags
    )


def _signal_fires(signal: str, document: Document, term: str) -> bool:
    if signal == "tag":
        return any(tag_matches(tag, term) for tag in document.tags)
    if signal == "alias":
        return any(term in alias.lower() for alias in document.aliases)
    if signal == "filename":
        return term in document.name.lower()
    if signal == "summary":
        return document.summary is not None and term in document.summary.lower()
    return term in document.body.lower()


def score_document(document: Document, terms: Sequence[str]) -> tuple[int, list[str]]:
    """Score ``document`` against lower-cased query ``terms``.

    Every term is tested against each signal in turn (tag, alias, filename,
    summary, body); each hit adds the signal weight and records
    ``"<signal>:<term>"``.

    Returns:
        Tuple of total score and matched signal tokens.
    """
    score = 0
    matched: list[str] = []
    for term in terms:
        for signal, weight in SIGNAL_WEIGHTS:
            if _signal_fires(signal, document, term):
                score += weight
                matched.append(f"{signal}:{term}")
    return score, matched


# ==============================================================================
# SEARCH OPERATIONS
# ==============================================================================


def search_vault(vault_root: PathLike, query: str) -> list[SearchResult]:
    """Search every Markdown document for lines containing ``query``.

    Args:
        vault_root: Vault root directory.
        query: Case-insensitive substring to look for.

    Returns:
        One result per document with at least one matching line, in scan order.
        Matching lines are returned trimmed.
    """
    query_lower = query.lower()
    results: list[SearchResult] = []

    for document in scan_documents(vault_root):
        try:
            text = read_text(document.absolute)
        except OSError as exc:
            logger.warning("Skipping file '%s' during search due to read error: %s", document.path, exc)
            continue

        matches = [line.strip() for line in text.split("\n") if query_lower in line.lower()]
        if matches:
            results.append(SearchResult(path=document.path, name=document.absolute.stem, matches=matches))

    return results


def surface_notes(
    vault_root: PathLike,
    query: str,
    path: Optional[str] = None,
    tags: Optional[Sequence[str]] = None,
    limit: int = DEFAULT_SURFACE_LIMIT,
) -> list[SurfaceResult]:
    """Rank documents by weighted relevance to the terms of ``query``.

    Weights: tag 5, alias 4, filename 3, summary 3, body 1 per matching term.
    Tags match exactly or as a hierarchical prefix (``dotnet`` matches
    ``dotnet/api``); the other signals are case-insensitive substring tests.

    Args:
        vault_root: Vault root directory.
        query: Whitespace-separated terms.
        path: Optional subdirectory restricting the candidates.
        tags: When given, only documents carrying at least one of these tags
            (or a tag nested below one) are considered.
        limit: Maximum number of results.

    Returns:
        Documents with a positive score, highest first. Equal scores keep
        scan order.

    Raises:
        PathEscapesRoot: If ``path`` lies outside the vault.
        FileNotFoundError: If ``path`` does not exist.
    """
    terms = query.lower().split()
    if not terms:
        return []

    start = resolve_safe(vault_root, path) if path else None
    required_tags = list(tags or [])
    results: list[SurfaceResult] = []

    for ref in scan_documents(vault_root, start):
        try:
            document = load_document(ref)
        except OSError as exc:
            logger.warning("Skipping file '%s' during surface due to read error: %s", ref.path, exc)
            continue

        if required_tags and not _has_required_tag(document, required_tags):
            continue

        score, matched = score_document(document, terms)
        if score > 0:
            results.append(
                SurfaceResult(
                    path=document.path,
                    score=score,
                    tags=document.tags,
                    summary=document.summary,
                    matched_signals=matched,
                )
            )

    results.sort(key=lambda item: item.score, reverse=True)
    return results[:limit]

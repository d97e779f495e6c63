"""YAML front-matter adapter and per-document field extraction.

Front-matter is free-form: any YAML mapping is accepted on read. Only the
fields used for ranking are interpreted, and only when they have the
expected shape (``tags``/``aliases`` lists, ``summary`` string).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Optional

import frontmatter
import yaml

from gneiss_vault.constants import MAX_FRONTMATTER_BYTES
from gneiss_vault.data_models import Document, DocumentRef
from gneiss_vault.core.vault_operations import read_text

logger = logging.getLogger(__name__)

SCALAR_TYPES = (str, int, float, bool)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _plain(value: Any) -> Any:
    """Turn nested YAML mappings into plain dicts with string keys."""
    if isinstance(value, Mapping):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def _string_list(value: Any) -> list[str]:
    """Coerce a front-matter list field; anything but a list yields ``[]``."""
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def _yaml_safe(value: Any, field_path: str) -> Any:
    if value is None or isinstance(value, SCALAR_TYPES):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_yaml_safe(item, f"{field_path}[{position}]") for position, item in enumerate(value)]
    if isinstance(value, Mapping):
        return {
            _checked_key(key, field_path): _yaml_safe(item, f"{field_path}.{key}")
            for key, item in value.items()
        }
    raise ValueError(
        f"Frontmatter field '{field_path}' has type '{type(value).__name__}', "
        "which cannot be written as YAML."
    )


def _checked_key(key: Any, parent: str = "") -> str:
    if not isinstance(key, str) or not key.strip():
        location = f" under '{parent}'" if parent else ""
        raise ValueError(f"Frontmatter key {key!r}{location} must be a non-empty string.")
    return key


# ==============================================================================
# FRONTMATTER ADAPTER
# ==============================================================================


def parse_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split raw Markdown into front-matter metadata and body.

    Args:
        text: Raw document text.

    Returns:
        ``(metadata, body)``. ``metadata`` is empty when there is no header
        block; a header that is not valid YAML is logged and treated the same
        way, with the whole text as body.
    """
    if not text:
        return {}, ""

    try:
        post = frontmatter.loads(text)
    except (yaml.YAMLError, ValueError, TypeError) as exc:
        logger.warning("Ignoring malformed frontmatter: %s", exc)
        return {}, text

    return _plain(dict(post.metadata)), post.content or ""


def serialize_frontmatter(content: str, metadata: Mapping[str, Any]) -> str:
    """Render ``content`` with ``metadata`` as a YAML header.

    An empty ``metadata`` mapping yields ``content`` unchanged.
    """
    if not metadata:
        return content

    post = frontmatter.Post(content)
    post.metadata.update(metadata)
    return frontmatter.dumps(post)


def sanitize_frontmatter(metadata: Mapping[str, Any]) -> dict[str, Any]:
    """Return a YAML-safe copy of ``metadata`` for writing back to disk.

    Dates and datetimes become ISO strings and tuples become lists.

    Raises:
        ValueError: If ``metadata`` is not a mapping, has blank or non-string
            keys, holds values YAML cannot represent, or serializes to more
            than ``MAX_FRONTMATTER_BYTES``.
    """
    if not isinstance(metadata, Mapping):
        raise ValueError("Frontmatter must be a mapping of field names to values.")

    sanitized = {_checked_key(key): _yaml_safe(value, key) for key, value in metadata.items()}

    try:
        rendered = yaml.safe_dump(sanitized, sort_keys=False)
    except yaml.YAMLError as exc:
        raise ValueError(f"Frontmatter cannot be serialized to YAML: {exc}") from exc

    if len(rendered.encode("utf-8")) > MAX_FRONTMATTER_BYTES:
        raise ValueError(
            f"Frontmatter is larger than the {MAX_FRONTMATTER_BYTES // 1024}KB limit."
        )
    return sanitized


# ==============================================================================
# DOCUMENT LOADING
# ==============================================================================


def document_from_text(path: str, text: str) -> Document:
    """Build a :class:`Document` with tags, aliases and summary pulled from metadata."""
    metadata, body = parse_frontmatter(text)
    summary: Optional[Any] = metadata.get("summary")
    return Document(
        path=path,
        metadata=metadata,
        body=body,
        tags=_string_list(metadata.get("tags")),
        aliases=_string_list(metadata.get("aliases")),
        summary=summary if isinstance(summary, str) else None,
    )


def load_document(ref: DocumentRef) -> Document:
    """Read and parse a scanned document.

    Raises:
        OSError: If the file cannot be read.
    """
    return document_from_text(ref.path, read_text(ref.absolute))

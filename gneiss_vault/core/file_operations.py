"""File-level vault operations: browsing, reading and editing."""

from __future__ import annotations

import logging
import os
import posixpath
import shutil
from pathlib import Path
from typing import Any, Optional

from gneiss_vault.constants import CONVENTIONS_FILE, DEFAULT_TREE_DEPTH, DOCUMENT_EXTENSION
from gneiss_vault.data_models import FileContent, VaultEntry
from gneiss_vault.core.frontmatter_operations import (
    parse_frontmatter,
    sanitize_frontmatter,
    serialize_frontmatter,
)
from gneiss_vault.core.vault_operations import (
    PathLike,
    is_hidden,
    read_text,
    relative_path,
    resolve_safe,
)

logger = logging.getLogger(__name__)

EDIT_MODES = ("replace", "append", "prepend", "find-replace", "patch-frontmatter")

NO_CONVENTIONS_TEXT = (
    f"No {CONVENTIONS_FILE} found in vault root. This vault has no documented conventions."
)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _is_document(path: str) -> bool:
    return Path(path).suffix == DOCUMENT_EXTENSION


def _visible_entries(directory: Path) -> list[os.DirEntry]:
    with os.scandir(directory) as iterator:
        return sorted(
            (entry for entry in iterator if not is_hidden(entry.name)),
            key=lambda entry: entry.name,
        )


def _build_tree(directory: Path, prefix: str, depth: int, lines: list[str]) -> None:
    if depth <= 0:
        return

    entries = _visible_entries(directory)
    for position, entry in enumerate(entries):
        is_last = position == len(entries) - 1
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{entry.name}")

        if entry.is_dir():
            child_prefix = prefix + ("    " if is_last else "│   ")
            _build_tree(Path(entry.path), child_prefix, depth - 1, lines)


# ==============================================================================
# READ OPERATIONS
# ==============================================================================


def list_directory(vault_root: PathLike, path: str = "") -> list[VaultEntry]:
    """List the non-hidden entries of a single vault directory.

    Args:
        vault_root: Vault root directory.
        path: Directory relative to the vault root (``""`` for the root).

    Returns:
        Entries sorted by path. File names are reported without their extension.

    Raises:
        PathEscapesRoot: If ``path`` lies outside the vault.
        FileNotFoundError: If the directory does not exist.
    """
    directory = resolve_safe(vault_root, path)
    entries: list[VaultEntry] = []
    for entry in _visible_entries(directory):
        is_directory = entry.is_dir()
        entries.append(
            VaultEntry(
                path=relative_path(vault_root, Path(entry.path)),
                name=entry.name if is_directory else Path(entry.name).stem,
                is_directory=is_directory,
            )
        )
    entries.sort(key=lambda item: item.path)
    return entries


def render_tree(vault_root: PathLike, path: str = "", depth: int = DEFAULT_TREE_DEPTH) -> str:
    """Render the directory structure below ``path`` as a box-drawing tree.

    Returns:
        One line per entry, at most ``depth`` levels deep; an empty string when
        the directory has no visible entries.
    """
    lines: list[str] = []
    _build_tree(resolve_safe(vault_root, path), "", depth, lines)
    return "\n".join(lines)


def read_file(vault_root: PathLike, path: str) -> FileContent:
    """Read a vault file.

    Markdown files are split into front-matter and body; the front-matter is an
    empty mapping when the file has none. Other files are returned verbatim with
    ``frontmatter=None``.

    Raises:
        PathEscapesRoot: If ``path`` lies outside the vault.
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not UTF-8 encoded.
    """
    raw = read_text(resolve_safe(vault_root, path), strict=True)
    if _is_document(path):
        metadata, content = parse_frontmatter(raw)
        return FileContent(content=content, frontmatter=metadata)
    return FileContent(content=raw)


def read_conventions(vault_root: PathLike) -> str:
    """Return the vault's conventions document, or a placeholder when it has none."""
    try:
        return read_text(resolve_safe(vault_root, CONVENTIONS_FILE))
    except OSError:
        return NO_CONVENTIONS_TEXT


# ==============================================================================
# WRITE OPERATIONS
# ==============================================================================


def create_path(vault_root: PathLike, path: str, content: Optional[str] = None) -> str:
    """Create a file, or a directory when ``path`` ends with ``/``.

    Missing parent directories are created. An existing file is overwritten.

    Returns:
        ``path`` as supplied.
    """
    target = resolve_safe(vault_root, path)
    if path.endswith("/"):
        target.mkdir(parents=True, exist_ok=True)
        logger.info("Created directory '%s'", path)
    else:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content or "", encoding="utf-8")
        logger.info("Created file '%s'", path)
    return path


def move_path(vault_root: PathLike, source: str, destination: str) -> None:
    """Move a file or directory inside the vault.

    Raises:
        FileNotFoundError: If ``source`` does not exist.
        FileExistsError: If ``destination`` already exists.
    """
    source_path = resolve_safe(vault_root, source)
    destination_path = resolve_safe(vault_root, destination)

    if not source_path.exists():
        raise FileNotFoundError(f"'{source}' not found in vault.")
    if destination_path.exists():
        raise FileExistsError(f"'{destination}' already exists in vault.")

    destination_path.parent.mkdir(parents=True, exist_ok=True)
    source_path.rename(destination_path)
    logger.info("Moved '%s' to '%s'", source, destination)


def rename_path(vault_root: PathLike, path: str, new_name: str) -> str:
    """Rename a file or directory in place, keeping a file's extension.

    Returns:
        The new vault-relative path.
    """
    current = path.rstrip("/")
    extension = posixpath.splitext(current)[1]
    new_path = posixpath.join(posixpath.dirname(current), f"{new_name}{extension}")
    move_path(vault_root, current, new_path)
    return new_path


def delete_path(vault_root: PathLike, path: str) -> None:
    """Delete a file, or a directory together with its contents.

    Raises:
        PathEscapesRoot: If ``path`` lies outside the vault.
        FileNotFoundError: If nothing exists at ``path``.
        ValueError: If ``path`` designates the vault root.
    """
    target = resolve_safe(vault_root, path)
    if target == resolve_safe(vault_root, ""):
        raise ValueError("Refusing to delete the vault root.")

    if target.is_dir() and not target.is_symlink():
        shutil.rmtree(target)
    else:
        target.unlink()
    logger.info("Deleted '%s'", path)


def edit_file(
    vault_root: PathLike,
    path: str,
    mode: str,
    content: Optional[str] = None,
    find: Optional[str] = None,
    replace: Optional[str] = None,
    replace_all: bool = False,
    metadata: Optional[dict[str, Any]] = None,
) -> None:
    """Edit an existing file in place.

    Modes:
        - ``replace``: swap the body; Markdown front-matter is preserved.
        - ``append``: add ``content`` at the end of the file.
        - ``prepend``: add ``content`` before the body (after any front-matter).
        - ``find-replace``: replace the first (or every, with ``replace_all``)
          occurrence of ``find``.
        - ``patch-frontmatter``: shallow-merge ``metadata`` into the front-matter
          of a Markdown file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: On an unknown mode, a missing ``find`` string, invalid
            front-matter, or a file that is not UTF-8 encoded.
    """
    if mode not in EDIT_MODES:
        raise ValueError(f"mode must be one of: {', '.join(EDIT_MODES)}. Got: '{mode}'")

    target = resolve_safe(vault_root, path)
    raw = read_text(target, strict=True)
    is_document = _is_document(path)

    if mode == "replace":
        if is_document:
            existing, _ = parse_frontmatter(raw)
            result = serialize_frontmatter(content or "", existing)
        else:
            result = content or ""
    elif mode == "append":
        result = raw + (content or "")
    elif mode == "prepend":
        existing, body = parse_frontmatter(raw) if is_document else ({}, raw)
        if existing:
            result = serialize_frontmatter((content or "") + body, existing)
        else:
            result = (content or "") + raw
    elif mode == "find-replace":
        if not find or find not in raw:
            raise ValueError(f'Find string not found: "{find}"')
        result = raw.replace(find, replace or "", -1 if replace_all else 1)
    else:
        if not is_document:
            raise ValueError("patch-frontmatter is only supported for markdown files")
        existing, body = parse_frontmatter(raw)
        merged = sanitize_frontmatter({**existing, **(metadata or {})})
        result = serialize_frontmatter(body, merged)

    target.write_text(result, encoding="utf-8")
    logger.info("Edited '%s' (mode=%s)", path, mode)

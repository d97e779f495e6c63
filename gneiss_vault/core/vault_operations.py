"""Core vault operations: sandboxing and corpus enumeration."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from gneiss_vault.constants import DOCUMENT_EXTENSION
from gneiss_vault.data_models import DocumentRef, VaultMetadata

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class PathEscapesRoot(ValueError):
    """Raised when a user-supplied path normalizes outside the vault root."""

    def __init__(self, user_path: str) -> None:
        super().__init__(f"Path escapes vault root: {user_path}")
        self.user_path = user_path


def ensure_vault_ready(vault: VaultMetadata) -> None:
    """Ensure the target vault directory is accessible before performing operations.

    Args:
        vault: Metadata describing the vault to use.

    Raises:
        FileNotFoundError: If the vault path does not exist or is not a directory.
    """
    if not vault.path.is_dir():
        raise FileNotFoundError(f"Vault '{vault.name}' is not accessible at {vault.path}")


def resolve_safe(vault_root: PathLike, user_path: str) -> Path:
    """Resolve a user-supplied path and ensure it stays within the vault root.

    Normalization is lexical (``..`` segments are collapsed, symlinks are not
    followed). The result must be the root itself or sit below it on a path
    separator boundary, so ``/data/vaultfoo`` never passes for ``/data/vault``.

    Args:
        vault_root: Vault root directory.
        user_path: Path relative to the vault root. ``""`` designates the root.

    Returns:
        The absolute, normalized :class:`Path`.

    Raises:
        PathEscapesRoot: If the normalized path lies outside the vault root.
    """
    root = os.path.abspath(vault_root)
    candidate = os.path.abspath(os.path.join(root, user_path))
    if candidate != root and not candidate.startswith(root.rstrip(os.sep) + os.sep):
        raise PathEscapesRoot(user_path)
    return Path(candidate)


def relative_path(vault_root: PathLike, absolute: Path) -> str:
    """Return the forward-slash vault-relative form of ``absolute``."""
    relative = os.path.relpath(absolute, os.path.abspath(vault_root))
    if relative == ".":
        return ""
    return Path(relative).as_posix()


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def scan_documents(vault_root: PathLike, start: Optional[Path] = None) -> list[DocumentRef]:
    """Recursively enumerate Markdown documents below ``start``.

    Entries whose name starts with ``.`` are skipped together with their subtree.
    Each directory level is visited in name order so the result is stable for a
    given filesystem state; callers rely on it as the tie-break order.

    Args:
        vault_root: Vault root used to compute relative paths.
        start: Absolute directory to scan (already sandboxed). Defaults to the root.

    Returns:
        ``DocumentRef`` pairs of vault-relative POSIX path and absolute path.

    Raises:
        FileNotFoundError: If ``start`` does not exist.
    """
    root = Path(os.path.abspath(vault_root))
    documents: list[DocumentRef] = []
    _collect_documents(root, start if start is not None else root, documents)
    return documents


def _collect_documents(root: Path, directory: Path, documents: list[DocumentRef]) -> None:
    with os.scandir(directory) as iterator:
        entries = sorted(iterator, key=lambda entry: entry.name)

    for entry in entries:
        if is_hidden(entry.name):
            continue

        full_path = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            _collect_documents(root, full_path, documents)
        elif entry.name.endswith(DOCUMENT_EXTENSION) and entry.is_file():
            documents.append(DocumentRef(relative_path(root, full_path), full_path))


def read_text(path: Path, strict: bool = False) -> str:
    """Read a vault file as UTF-8.

    Undecodable bytes become U+FFFD, so queries never match text that is not on
    disk. Reads that return or rewrite the file pass ``strict=True``.

    Raises:
        ValueError: If ``strict`` and the file is not UTF-8 encoded.
    """
    if not strict:
        return path.read_text(encoding="utf-8", errors="replace")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError(
            f"File '{path.name}' is not UTF-8 encoded and cannot be processed."
        ) from exc

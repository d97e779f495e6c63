"""Tests for wikilink extraction, resolution and link index construction."""

from pathlib import Path

import pytest

from gneiss_vault.data_models import DocumentRef
from gneiss_vault.core.link_operations import (
    CorpusLookup,
    build_link_index,
    extract_wikilinks,
    resolve_wikilink,
)


def _lookup(*paths: str) -> CorpusLookup:
    return CorpusLookup([DocumentRef(path, Path("/vault") / path) for path in paths])


class TestExtractWikilinks:
    def test_simple_link(self):
        assert extract_wikilinks("Link to [[b]]") == ["b"]

    def test_alias_and_heading_are_dropped(self):
        text = "[[b|display]] [[c#section]] [[d#section|display]]"
        assert extract_wikilinks(text) == ["b", "c", "d"]

    def test_target_is_trimmed(self):
        assert extract_wikilinks("[[  spaced note  ]]") == ["spaced note"]

    def test_duplicates_keep_first_appearance_order(self):
        text = "[[c]] then [[a]] then [[c|again]] then [[b]] then [[a#h]]"
        assert extract_wikilinks(text) == ["c", "a", "b"]

    def test_deduplication_is_case_sensitive(self):
        assert extract_wikilinks("[[Note]] [[note]]") == ["Note", "note"]

    def test_pathed_links(self):
        assert extract_wikilinks("See [[sub/b]] and [[sub/c.md]]") == ["sub/b", "sub/c.md"]

    def test_empty_and_unclosed_links_are_ignored(self):
        assert extract_wikilinks("[[]] [[   ]] [[open and [single] text") == []

    def test_no_links(self):
        assert extract_wikilinks("Plain text with [markdown](link.md)") == []


class TestResolveWikilink:
    def test_resolves_basename_case_insensitively(self):
        lookup = _lookup("mynote.md")
        assert resolve_wikilink("MyNote", lookup) == "mynote.md"

    def test_preserves_on_disk_case(self):
        lookup = _lookup("Projects/API Design.md")
        assert resolve_wikilink("api design", lookup) == "Projects/API Design.md"

    def test_strips_md_suffix(self):
        lookup = _lookup("b.md")
        assert resolve_wikilink("b.md", lookup) == "b.md"
        assert resolve_wikilink("b.MD", lookup) == "b.md"

    def test_pathed_link_matches_full_path(self):
        lookup = _lookup("sub/b.md", "other/b.md")
        assert resolve_wikilink("sub/b", lookup) == "sub/b.md"
        assert resolve_wikilink("OTHER/B.md", lookup) == "other/b.md"

    def test_pathed_link_does_not_fall_back_to_basename(self):
        lookup = _lookup("b.md")
        assert resolve_wikilink("missing/b", lookup) is None

    def test_unknown_target_is_dangling(self):
        assert resolve_wikilink("nonexistent", _lookup("a.md")) is None

    def test_basename_collision_prefers_first_document(self):
        lookup = _lookup("a/note.md", "b/note.md")
        assert resolve_wikilink("note", lookup) == "a/note.md"


class TestBuildLinkIndex:
    @pytest.fixture
    def vault_root(self, tmp_path):
        return tmp_path

    def _write(self, root: Path, relative: str, content: str) -> None:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    def test_forward_and_backward_are_inverse(self, vault_root):
        self._write(vault_root, "a.md", "[[b]] and [[c]]")
        self._write(vault_root, "b.md", "[[c]]")
        self._write(vault_root, "c.md", "no links")

        index = build_link_index(vault_root)

        assert index.forward == {"a.md": ["b.md", "c.md"], "b.md": ["c.md"], "c.md": []}
        assert index.backward == {"b.md": ["a.md"], "c.md": ["a.md", "b.md"]}
        assert index.documents == {"a.md", "b.md", "c.md"}

    def test_dangling_target_keeps_literal_text(self, vault_root):
        self._write(vault_root, "a.md", "[[Ghost Note|boo]]")

        index = build_link_index(vault_root)

        assert index.forward["a.md"] == ["Ghost Note"]
        assert index.backward["Ghost Note"] == ["a.md"]
        assert "Ghost Note" not in index.documents

    def test_different_tokens_to_same_target_are_not_merged(self, vault_root):
        self._write(vault_root, "a.md", "[[b]] [[B]] [[b.md]]")
        self._write(vault_root, "b.md", "target")

        index = build_link_index(vault_root)

        assert index.forward["a.md"] == ["b.md", "b.md", "b.md"]
        assert index.backward["b.md"] == ["a.md", "a.md", "a.md"]

    def test_links_in_frontmatter_are_indexed(self, vault_root):
        self._write(vault_root, "a.md", "---\nrelated: \"[[b]]\"\n---\nbody")
        self._write(vault_root, "b.md", "target")

        index = build_link_index(vault_root)

        assert index.forward["a.md"] == ["b.md"]

    def test_hidden_documents_are_not_indexed(self, vault_root):
        self._write(vault_root, ".trash/old.md", "[[a]]")
        self._write(vault_root, "a.md", "alone")

        index = build_link_index(vault_root)

        assert index.documents == {"a.md"}
        assert index.backward == {}

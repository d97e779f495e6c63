"""Tests for full-text line search."""

from pathlib import Path

from gneiss_vault.core import search_operations
from gneiss_vault.core.search_operations import search_vault


def write(root: Path, relative: str, content: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class TestSearchVault:
    def test_finds_matching_files_in_scan_order(self, tmp_path):
        write(tmp_path, "projects/api.md", "# API\nRefactor the authentication layer.")
        write(tmp_path, "meetings/standup.md", "# Standup\nDiscussed the API refactor.")
        write(tmp_path, "meetings/retro.md", "# Retro\nTeam velocity improved.")

        results = search_vault(tmp_path, "refactor")

        assert [result.path for result in results] == ["meetings/standup.md", "projects/api.md"]

    def test_is_case_insensitive_and_returns_original_line(self, tmp_path):
        write(tmp_path, "note.md", "TypeScript is great")

        results = search_vault(tmp_path, "typescript")

        assert results[0].matches == ["TypeScript is great"]

    def test_matching_lines_are_trimmed(self, tmp_path):
        write(tmp_path, "note.md", "   indented refactor note\t\n")

        assert search_vault(tmp_path, "refactor")[0].matches == ["indented refactor note"]

    def test_no_match(self, tmp_path):
        write(tmp_path, "note.md", "hello world")

        assert search_vault(tmp_path, "nonexistent") == []

    def test_only_searches_markdown_files(self, tmp_path):
        write(tmp_path, "data.json", '{"query": "refactor"}')
        write(tmp_path, "note.md", "no match here")

        assert search_vault(tmp_path, "refactor") == []

    def test_skips_hidden_directories(self, tmp_path):
        write(tmp_path, ".obsidian/plugins.md", "refactor this plugin")
        write(tmp_path, "visible.md", "nothing here")

        assert search_vault(tmp_path, "refactor") == []

    def test_multiple_matching_lines(self, tmp_path):
        write(tmp_path, "note.md", "first mention of API\nsomething else\nAPI again here")

        results = search_vault(tmp_path, "api")

        assert len(results) == 1
        assert results[0].matches == ["first mention of API", "API again here"]

    def test_undecodable_bytes_do_not_join_surrounding_text(self, tmp_path):
        (tmp_path / "a.md").write_bytes(b"ab\xffc\n")

        assert search_vault(tmp_path, "abc") == []
        assert search_vault(tmp_path, "ab")[0].matches == ["ab\ufffdc"]

    def test_unreadable_document_is_skipped(self, tmp_path, monkeypatch):
        write(tmp_path, "a.md", "refactor here")
        write(tmp_path, "b.md", "refactor there")
        original = search_operations.read_text

        def failing_read(path, *args, **kwargs):
            if path.name == "b.md":
                raise PermissionError(f"permission denied: {path}")
            return original(path, *args, **kwargs)

        monkeypatch.setattr(search_operations, "read_text", failing_read)

        assert [result.path for result in search_vault(tmp_path, "refactor")] == ["a.md"]

    def test_frontmatter_lines_are_searched(self, tmp_path):
        write(tmp_path, "note.md", "---\nstatus: refactoring\n---\nbody")

        assert search_vault(tmp_path, "refactor")[0].matches == ["status: refactoring"]

    def test_result_name_is_file_stem(self, tmp_path):
        write(tmp_path, "projects/API Design.md", "api notes")

        result = search_vault(tmp_path, "api")[0]

        assert result.name == "API Design"
        assert result.as_payload() == {
            "path": "projects/API Design.md",
            "name": "API Design",
            "matches": ["api notes"],
        }

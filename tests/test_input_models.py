"""Tests for Pydantic input models.

This test suite validates the input validation logic for MCP tools,
ensuring that:
- Valid inputs are accepted and normalized correctly
- Invalid inputs raise ValidationError with descriptive messages
- Mode-dependent fields of the edit tool are enforced
- Schema generation produces correct JSON schemas for MCP
"""

import pytest
from pydantic import ValidationError

from gneiss_vault.models import (
    BasePathInput,
    EditFileInput,
    GraphNotesInput,
    ListDirectoryInput,
    MovePathInput,
    RenamePathInput,
    SearchVaultInput,
    SetActiveVaultInput,
    SurfaceNotesInput,
    VaultTreeInput,
)


class TestBasePathInput:
    """Test suite for BasePathInput model validation."""

    def test_valid_nested_path(self):
        """Test that nested paths with folders are accepted."""
        model = BasePathInput(path="Daily Notes/2025-10-27.md")
        assert model.path == "Daily Notes/2025-10-27.md"
        assert model.vault is None

    def test_path_is_stripped(self):
        """Test that surrounding whitespace is removed."""
        model = BasePathInput(path="  projects/api.md  ")
        assert model.path == "projects/api.md"

    def test_backslashes_are_converted(self):
        """Test that Windows separators are normalized to forward slashes."""
        model = BasePathInput(path="projects\\api.md")
        assert model.path == "projects/api.md"

    def test_dot_dot_is_left_to_the_sandbox(self):
        """Test that '..' segments pass validation; the vault sandbox checks them."""
        model = BasePathInput(path="a/../b.md")
        assert model.path == "a/../b.md"

    def test_vault_with_whitespace_is_stripped(self):
        """Test that vault names with leading/trailing whitespace are stripped."""
        model = BasePathInput(path="note.md", vault="  personal  ")
        assert model.vault == "personal"

    def test_empty_path_raises_error(self):
        """Test that empty paths raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            BasePathInput(path="")

        assert any(error.get("loc") == ("path",) for error in exc_info.value.errors())

    def test_whitespace_only_path_raises_error(self):
        """Test that paths with only whitespace raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            BasePathInput(path="   ")

        error_messages = " ".join(str(e) for e in exc_info.value.errors())
        assert "empty" in error_messages.lower()

    def test_absolute_path_raises_error(self):
        """Test that absolute paths (starting with /) raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            BasePathInput(path="/etc/passwd")

        error_messages = " ".join(str(e) for e in exc_info.value.errors())
        assert "relative" in error_messages.lower()

    def test_empty_vault_string_raises_error(self):
        """Test that empty vault string raises ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            BasePathInput(path="note.md", vault="   ")

        error_messages = " ".join(str(e) for e in exc_info.value.errors())
        assert "vault" in error_messages.lower()


class TestSearchModels:
    """Test suite for search, surface and graph inputs."""

    def test_search_query_is_stripped(self):
        model = SearchVaultInput(query="  refactor  ")
        assert model.query == "refactor"

    def test_blank_search_query_raises_error(self):
        with pytest.raises(ValidationError):
            SearchVaultInput(query="   ")

    def test_search_schema_includes_examples(self):
        schema = SearchVaultInput.model_json_schema()
        assert "query" in schema["properties"]
        assert "description" in schema["properties"]["query"]
        assert "examples" in schema

    def test_surface_defaults(self):
        model = SurfaceNotesInput(query="dotnet api")
        assert model.path is None
        assert model.tags is None
        assert model.limit == 10

    def test_surface_accepts_blank_query(self):
        """Blank queries are valid and simply surface nothing."""
        model = SurfaceNotesInput(query="   ")
        assert model.query == "   "

    def test_surface_blank_path_means_whole_vault(self):
        model = SurfaceNotesInput(query="go", path="  ")
        assert model.path is None

    def test_surface_tags_are_cleaned(self):
        model = SurfaceNotesInput(query="go", tags=[" lang ", "", "  "])
        assert model.tags == ["lang"]

        empty = SurfaceNotesInput(query="go", tags=["   "])
        assert empty.tags is None

    def test_surface_limit_must_be_positive(self):
        with pytest.raises(ValidationError):
            SurfaceNotesInput(query="go", limit=0)

    def test_graph_defaults(self):
        model = GraphNotesInput(path="index.md")
        assert model.depth == 1
        assert model.direction == "both"

    def test_graph_direction_is_case_insensitive(self):
        model = GraphNotesInput(path="index.md", direction=" Forward ")
        assert model.direction == "forward"

    def test_graph_rejects_unknown_direction(self):
        with pytest.raises(ValidationError):
            GraphNotesInput(path="index.md", direction="sideways")

    def test_graph_rejects_negative_depth(self):
        with pytest.raises(ValidationError):
            GraphNotesInput(path="index.md", depth=-1)

    def test_graph_accepts_zero_depth(self):
        assert GraphNotesInput(path="index.md", depth=0).depth == 0


class TestFileModels:
    """Test suite for browsing and editing inputs."""

    def test_list_directory_defaults_to_root(self):
        assert ListDirectoryInput().path == ""

    def test_tree_depth_must_be_positive(self):
        assert VaultTreeInput().depth == 3
        with pytest.raises(ValidationError):
            VaultTreeInput(depth=0)

    def test_move_requires_both_paths(self):
        model = MovePathInput(source=" old.md ", destination="archive/old.md")
        assert model.source == "old.md"

        with pytest.raises(ValidationError):
            MovePathInput(source="old.md", destination="   ")

    def test_rename_rejects_separators(self):
        with pytest.raises(ValidationError) as exc_info:
            RenamePathInput(path="a.md", new_name="folder/b")

        assert "separators" in str(exc_info.value)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"mode": "replace", "content": "body"},
            {"mode": "append", "content": ""},
            {"mode": "find-replace", "find": "old", "replace": ""},
            {"mode": "patch-frontmatter", "metadata": {"status": "done"}},
        ],
    )
    def test_edit_accepts_complete_modes(self, kwargs):
        model = EditFileInput(path="a.md", **kwargs)
        assert model.mode == kwargs["mode"]
        assert model.all is False

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"mode": "prepend"},
            {"mode": "find-replace", "find": "", "replace": "x"},
            {"mode": "find-replace", "find": "old"},
            {"mode": "patch-frontmatter", "metadata": {}},
            {"mode": "rewrite", "content": "x"},
        ],
    )
    def test_edit_rejects_incomplete_modes(self, kwargs):
        with pytest.raises(ValidationError):
            EditFileInput(path="a.md", **kwargs)


class TestVaultModels:
    def test_set_active_vault_strips_name(self):
        assert SetActiveVaultInput(vault="  work ").vault == "work"

    def test_set_active_vault_rejects_blank(self):
        with pytest.raises(ValidationError):
            SetActiveVaultInput(vault="   ")


class TestPydanticIntegration:
    """Test Pydantic-specific features and integration."""

    def test_model_dump_produces_dict(self):
        model = GraphNotesInput(path="index.md", vault="personal")

        assert model.model_dump() == {
            "vault": "personal",
            "path": "index.md",
            "depth": 1,
            "direction": "both",
        }

    def test_extra_fields_are_ignored(self):
        model = SearchVaultInput(query="api", extra_field="ignored")  # type: ignore
        assert not hasattr(model, "extra_field")

"""Tests for loading workflow documents from disk."""

import json

import pytest

from n8n_deploy.documents import load_document, resolve_path
from n8n_deploy.exceptions import LoadError


class TestResolvePath:
    def test_relative_path_uses_base_dir(self, tmp_path):
        assert resolve_path("flows/a.json", tmp_path) == (tmp_path / "flows" / "a.json").resolve()

    def test_absolute_path_ignores_base_dir(self, tmp_path):
        target = tmp_path / "a.json"
        assert resolve_path(target, "/somewhere/else") == target.resolve()

    def test_parent_segments_are_normalised(self, tmp_path):
        base = tmp_path / "scripts"
        assert resolve_path("../docs/flow.json", base) == (tmp_path / "docs" / "flow.json").resolve()


class TestLoadDocument:
    """Tests for load_document."""

    def test_loads_json_object(self, tmp_path, workflow_document):
        """Test a valid document round-trips unchanged."""
        (tmp_path / "flow.json").write_text(json.dumps(workflow_document))

        document = load_document("flow.json", tmp_path)

        assert document == workflow_document

    def test_document_shape_is_not_validated(self, tmp_path):
        """Test that any JSON object is accepted; the server validates workflows."""
        (tmp_path / "odd.json").write_text('{"unexpected": true}')

        assert load_document("odd.json", tmp_path) == {"unexpected": True}

    def test_missing_file_raises_load_error(self, tmp_path):
        with pytest.raises(LoadError) as exc_info:
            load_document("missing.json", tmp_path)

        error = exc_info.value
        assert error.path == (tmp_path / "missing.json").resolve()
        assert "missing.json" in str(error)
        assert "not found" in str(error)

    def test_invalid_json_raises_load_error(self, tmp_path):
        (tmp_path / "broken.json").write_text("{not json")

        with pytest.raises(LoadError) as exc_info:
            load_document("broken.json", tmp_path)

        assert "broken.json" in str(exc_info.value)
        assert "invalid JSON" in str(exc_info.value)

    def test_non_object_raises_load_error(self, tmp_path):
        (tmp_path / "list.json").write_text("[1, 2, 3]")

        with pytest.raises(LoadError) as exc_info:
            load_document("list.json", tmp_path)

        assert "expected a JSON object" in str(exc_info.value)

    def test_directory_raises_load_error(self, tmp_path):
        (tmp_path / "flows").mkdir()

        with pytest.raises(LoadError):
            load_document("flows", tmp_path)

    def test_default_base_dir_is_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "flow.json").write_text('{"name": "cwd"}')

        assert load_document("flow.json")["name"] == "cwd"

import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from datarepo.config.workspace import load_workspace_context


def _write_workspace(root: Path, content: str) -> Path:
    path = root / "datarepo.yaml"
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


def test_ingest_defaults(tmp_path):
    _write_workspace(
        tmp_path,
        """
        shared:
          log_level: info
        ingest:
          editor: "code --wait"
          sample_rows: 50
          preview_rows: 5
        """,
    )

    context = load_workspace_context(tmp_path)
    assert context
    assert context.root == tmp_path.resolve()
    assert context.config.shared.log_level == "INFO"
    assert context.config.ingest.editor == "code --wait"
    assert context.config.ingest.sample_rows == 50
    assert context.config.ingest.sample_files is None
    assert context.config.ingest.preview_rows == 5


def test_workspace_is_found_from_nested_directory(tmp_path):
    _write_workspace(tmp_path, "ingest:\n  sample_files: 2\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    context = load_workspace_context(nested)
    assert context
    assert context.file_path == (tmp_path / "datarepo.yaml").resolve()
    assert context.config.ingest.sample_files == 2


def test_null_sections_fall_back_to_defaults(tmp_path):
    _write_workspace(tmp_path, "shared:\ningest:\n")

    context = load_workspace_context(tmp_path)
    assert context
    assert context.config.shared.log_level is None
    assert context.config.ingest.editor is None


def test_missing_workspace_returns_none(tmp_path):
    assert load_workspace_context(tmp_path) is None


@pytest.mark.parametrize(
    "content",
    [
        "shared:\n  log_level: loud\n",
        "ingest:\n  sample_rows: 0\n",
        "ingest:\n  preview_rows: -1\n",
    ],
)
def test_invalid_values_are_rejected(tmp_path, content):
    _write_workspace(tmp_path, content)

    with pytest.raises(ValidationError):
        load_workspace_context(tmp_path)


def test_non_mapping_workspace_is_rejected(tmp_path):
    _write_workspace(tmp_path, "- not\n- a mapping\n")

    with pytest.raises(TypeError):
        load_workspace_context(tmp_path)

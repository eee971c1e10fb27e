from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from datarepo.utils.load import load_yaml

WORKSPACE_FILENAME = "datarepo.yaml"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SharedDefaults(BaseModel):
    log_level: Optional[str] = Field(default=None, description="DEFAULT LOG LEVEL")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object):
        if value is None:
            return None
        text = str(value).strip().upper()
        if not text:
            return None
        if text not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}, got {value!r}"
            )
        return text


class IngestDefaults(BaseModel):
    editor: Optional[str] = None
    sample_rows: Optional[int] = Field(default=None, gt=0)
    sample_files: Optional[int] = Field(default=None, gt=0)
    preview_rows: Optional[int] = Field(default=None, ge=0)

    @field_validator("editor", mode="before")
    @classmethod
    def _normalize_editor(cls, value: object):
        if value is None:
            return None
        text = str(value).strip()
        return text if text else None


class WorkspaceConfig(BaseModel):
    shared: SharedDefaults = Field(default_factory=SharedDefaults)
    ingest: IngestDefaults = Field(default_factory=IngestDefaults)


@dataclass
class WorkspaceContext:
    file_path: Path
    config: WorkspaceConfig

    @property
    def root(self) -> Path:
        return self.file_path.parent


def load_workspace_context(start_dir: Optional[Path] = None) -> Optional[WorkspaceContext]:
    """Search from start_dir upward for datarepo.yaml and return parsed config."""
    directory = (start_dir or Path.cwd()).resolve()
    for path in [directory, *directory.parents]:
        candidate = path / WORKSPACE_FILENAME
        if candidate.is_file():
            data = load_yaml(candidate)
            # Allow users to set a section to null to fall back to defaults
            for key in ("shared", "ingest"):
                if key in data and data[key] is None:
                    data.pop(key)
            cfg = WorkspaceConfig.model_validate(data)
            return WorkspaceContext(file_path=candidate, config=cfg)
    return None

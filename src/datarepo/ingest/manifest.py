from __future__ import annotations

from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from datarepo.ingest.config import FormatConfig, LocationConfig
from datarepo.ingest.errors import SchemaParseError
from datarepo.ingest.options import (
    FORMAT_OPTIONS,
    LOCATION_OPTIONS,
    SelectOption,
    option_by_value,
)
from datarepo.utils.load import dump_yaml


class IngestManifest(BaseModel):
    """Location and format of a data source, as confirmed by the user.

    The selected options are not stored separately: each config carries the
    value of the option it was built for in its ``type`` field.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    location_config: Optional[LocationConfig] = Field(
        default=None, alias="datasourceLocation"
    )
    format_config: Optional[FormatConfig] = Field(
        default=None, alias="datasourceFormat"
    )

    @property
    def selected_location(self) -> Optional[SelectOption]:
        if self.location_config is None:
            return None
        return option_by_value(LOCATION_OPTIONS, self.location_config.type)

    @property
    def selected_format(self) -> Optional[SelectOption]:
        if self.format_config is None:
            return None
        return option_by_value(FORMAT_OPTIONS, self.format_config.type)

    @property
    def is_complete(self) -> bool:
        return self.location_config is not None and self.format_config is not None

    def to_yaml(self) -> str:
        return dump_yaml(self.model_dump(mode="json", by_alias=True, exclude_none=True))

    @classmethod
    def from_yaml(cls, text: str) -> "IngestManifest":
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise SchemaParseError(f"manifest is not valid YAML: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SchemaParseError(
                f"manifest must be a mapping, got {type(data).__name__}")
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise SchemaParseError(f"invalid manifest: {exc}") from exc

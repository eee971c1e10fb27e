from __future__ import annotations

from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from datarepo.ingest.errors import SchemaParseError
from datarepo.utils.load import dump_yaml


FieldType = Literal["record", "string", "int64", "float64", "bool", "uri/s3", "uri/http"]

SCHEMA_EDITOR_TUTORIAL_BLURB = """\
# This editor lets you make manual modifications to your field types to help ingest your data.
#
# Types and what they mean:
#
#     "string": A simple string
#     "int64": A 64-bit signed integer
#     "float64": A 64-bit floating point number
#     "bool": true or false
#     "uri/s3": A URL to S3 that starts with s3://...
#     "uri/http": A URL to a HTTP resource that can be retrieved with a GET request
#
# Set "nullable: true" on fields that may be empty. Lines starting with # are ignored.


"""


class SchemaField(BaseModel):
    """One field of a tabular schema; ``record`` fields nest child fields."""

    model_config = ConfigDict(extra="forbid")

    name: str
    type: FieldType
    nullable: bool = False
    fields: list[SchemaField] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_children(self) -> "SchemaField":
        if self.type != "record" and self.fields:
            raise ValueError(f"field {self.name!r} of type {self.type!r} cannot have child fields")
        names = [child.name for child in self.fields]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"record {self.name!r} has duplicate fields: {', '.join(duplicates)}")
        return self

    def to_yaml(self) -> str:
        return dump_yaml(self._dump())

    def _dump(self) -> dict:
        data: dict = {"name": self.name, "type": self.type}
        if self.nullable:
            data["nullable"] = True
        if self.type == "record":
            data["fields"] = [child._dump() for child in self.fields]
        return data

    @classmethod
    def from_yaml(cls, text: str) -> "SchemaField":
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise SchemaParseError(f"schema is not valid YAML: {exc}") from exc
        if not isinstance(data, dict):
            kind = "empty document" if data is None else type(data).__name__
            raise SchemaParseError(f"schema must be a mapping, got {kind}")
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise SchemaParseError(f"invalid schema: {exc}") from exc

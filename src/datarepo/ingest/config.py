from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from datarepo.ingest.options import (
    CSV_DELIMITER_COMMAS,
    CSV_DELIMITER_TABS,
    DATAFORMAT_CSV_FILES,
    DATASOURCE_AWS_S3,
    DATASOURCE_LOCAL_DIRECTORY,
)


_DELIMITER_CHARS = {
    CSV_DELIMITER_COMMAS: ",",
    CSV_DELIMITER_TABS: "\t",
}


class _ManifestConfig(BaseModel):
    """Common base for every manifest config variant.

    Each variant carries a ``type`` literal equal to the option value it was
    built for; that literal is the union discriminator when parsing YAML.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)


class CSVFilesFormatConfig(_ManifestConfig):
    type: Literal["csv_files"] = DATAFORMAT_CSV_FILES
    delimiter: Literal["comma", "tab"]
    header: bool

    @property
    def delimiter_char(self) -> str:
        return _DELIMITER_CHARS[self.delimiter]


class AWSS3LocationConfig(_ManifestConfig):
    type: Literal["aws_s3"] = DATASOURCE_AWS_S3
    bucket: str
    prefix: str = ""

    @field_validator("bucket")
    @classmethod
    def _require_bucket(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("bucket must not be empty")
        return text

    @property
    def url(self) -> str:
        return f"s3://{self.bucket}/{self.prefix}"


class LocalDirectoryLocationConfig(_ManifestConfig):
    type: Literal["local_directory"] = DATASOURCE_LOCAL_DIRECTORY
    path: str

    @field_validator("path")
    @classmethod
    def _require_path(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("path must not be empty")
        return text


# Only one format variant so far; turn this into a discriminated Union like
# LocationConfig once a second format builder lands.
FormatConfig = CSVFilesFormatConfig
LocationConfig = Annotated[
    Union[AWSS3LocationConfig, LocalDirectoryLocationConfig],
    Field(discriminator="type"),
]
ManifestConfig = Union[CSVFilesFormatConfig, AWSS3LocationConfig, LocalDirectoryLocationConfig]

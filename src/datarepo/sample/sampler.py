from __future__ import annotations

import csv
import logging
import re
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import ValidationError

from datarepo.ingest.config import (
    AWSS3LocationConfig,
    CSVFilesFormatConfig,
    LocalDirectoryLocationConfig,
)
from datarepo.ingest.errors import SamplingError, UnsupportedFeatureError
from datarepo.sample.decoders import CsvDecoder
from datarepo.sample.infer import infer_type
from datarepo.sample.transports import LocalDirectoryTransport, S3Transport, Transport
from datarepo.schema import SchemaField

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_ROWS = 100
DEFAULT_SAMPLE_FILES = 5


class Sampler(ABC):
    """Reads a bounded sample of a data source and proposes a schema."""

    columns: list[str]
    rows: list[list[str]]

    @abstractmethod
    def sample_schema(self) -> SchemaField:
        pass


def _schema_name(transport: Transport) -> str:
    if isinstance(transport, S3Transport):
        raw = f"{transport.bucket}_{transport.prefix}"
    elif isinstance(transport, LocalDirectoryTransport):
        raw = transport.path.rstrip("/").rsplit("/", 1)[-1]
    else:
        raw = "records"
    slug = re.sub(r"[^a-z0-9]+", "_", raw.strip().lower()).strip("_")
    return slug or "records"


class CSVSampler(Sampler):
    def __init__(
        self,
        format_config: CSVFilesFormatConfig,
        transport: Transport,
        *,
        sample_rows: int = DEFAULT_SAMPLE_ROWS,
        sample_files: int = DEFAULT_SAMPLE_FILES,
    ):
        self.format_config = format_config
        self.transport = transport
        self.sample_rows = sample_rows
        self.sample_files = sample_files
        self.columns = []
        self.rows = []
        self.files: list[str] = []

    def _read(self) -> None:
        decoder = CsvDecoder(
            delimiter=self.format_config.delimiter_char,
            header=self.format_config.header,
        )
        self.columns, self.rows, self.files = [], [], []
        for resource, chunks in self.transport.streams(limit=self.sample_files):
            remaining = self.sample_rows - len(self.rows)
            if remaining <= 0:
                break
            try:
                columns, rows = decoder.decode(chunks, limit=remaining)
            except (UnicodeDecodeError, ValueError, csv.Error) as exc:
                raise SamplingError(f"failed to decode {resource} as CSV: {exc}") from exc
            if not columns:
                logger.debug("Skipping empty file %s", resource)
                continue
            if self.columns and columns != self.columns and self.format_config.header:
                raise SamplingError(
                    f"header of {resource} does not match earlier files: "
                    f"{columns} != {self.columns}"
                )
            if len(columns) > len(self.columns):
                self.columns = columns
            self.files.append(resource)
            self.rows.extend(rows)
        logger.info(
            "Sampled %d rows from %d file(s)", len(self.rows), len(self.files))

    def sample_schema(self) -> SchemaField:
        self._read()
        if not self.files:
            raise SamplingError("no CSV data found to sample")
        fields = []
        for idx, column in enumerate(self.columns):
            values = [row[idx] if idx < len(row) else "" for row in self.rows]
            field_type, nullable = infer_type(values)
            fields.append({"name": column, "type": field_type, "nullable": nullable})
        try:
            return SchemaField.model_validate(
                {"name": _schema_name(self.transport), "type": "record", "fields": fields}
            )
        except ValidationError as exc:
            raise SamplingError(f"sampled columns do not form a valid schema: {exc}") from exc


def transport_for(location_config) -> Transport:
    if isinstance(location_config, AWSS3LocationConfig):
        return S3Transport(location_config.bucket, location_config.prefix)
    if isinstance(location_config, LocalDirectoryLocationConfig):
        return LocalDirectoryTransport(location_config.path)
    raise UnsupportedFeatureError(
        f"sampling from location {getattr(location_config, 'type', location_config)!r} not yet supported"
    )


def sampler_factory(
    format_config,
    location_config,
    *,
    sample_rows: Optional[int] = None,
    sample_files: Optional[int] = None,
) -> Sampler:
    transport = transport_for(location_config)
    if isinstance(format_config, CSVFilesFormatConfig):
        return CSVSampler(
            format_config,
            transport,
            sample_rows=sample_rows or DEFAULT_SAMPLE_ROWS,
            sample_files=sample_files or DEFAULT_SAMPLE_FILES,
        )
    raise UnsupportedFeatureError(
        f"sampling data format {getattr(format_config, 'type', format_config)!r} not yet supported"
    )

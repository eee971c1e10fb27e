from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping, Sequence

from datarepo.ingest.errors import CompatibilityError


@dataclass(frozen=True)
class SelectOption:
    """A choice offered in a single-select prompt; branch on ``value`` only."""

    name: str
    value: str
    description: str

    def __str__(self) -> str:
        return self.name


DATAFORMAT_INDIVIDUAL_FILES = "individual_files"
DATAFORMAT_CSV_FILES = "csv_files"
DATAFORMAT_DATABASE_TABLE = "database_table"

DATASOURCE_LOCAL_DIRECTORY = "local_directory"
DATASOURCE_AWS_S3 = "aws_s3"

CSV_DELIMITER_COMMAS = "comma"
CSV_DELIMITER_TABS = "tab"


INDIVIDUAL_BINARY_FILES = SelectOption(
    name="Files (WIP)",
    value=DATAFORMAT_INDIVIDUAL_FILES,
    description="Individual files on disk or in object storage.",
)
COMMA_SEPARATED_VALUES_FILES = SelectOption(
    name="CSV Files",
    value=DATAFORMAT_CSV_FILES,
    description=(
        "Comma-separated value files on disk or in object storage. "
        "Other delimiters such as tabs are also supported."
    ),
)
DATABASE_TABLE = SelectOption(
    name="Database Table (WIP)",
    value=DATAFORMAT_DATABASE_TABLE,
    description="A database table from databases such as PostgreSQL, Snowflake or BigQuery.",
)

LOCAL_DIRECTORY = SelectOption(
    name="Local Directory",
    value=DATASOURCE_LOCAL_DIRECTORY,
    description="A directory on your current machine's local filesystem.",
)
AWS_S3 = SelectOption(
    name="AWS S3",
    value=DATASOURCE_AWS_S3,
    description="An AWS S3 Bucket and prefix, indicating a collection of AWS S3 objects.",
)

COMMAS = SelectOption(
    name="Commas: ,",
    value=CSV_DELIMITER_COMMAS,
    description="The most common type of delimiter in CSV files.",
)
TABS = SelectOption(
    name="Tabs: \\t",
    value=CSV_DELIMITER_TABS,
    description="Values in each column are separated by a tab.",
)

LOCATION_OPTIONS: tuple[SelectOption, ...] = (AWS_S3, LOCAL_DIRECTORY)
FORMAT_OPTIONS: tuple[SelectOption, ...] = (
    COMMA_SEPARATED_VALUES_FILES,
    INDIVIDUAL_BINARY_FILES,
    DATABASE_TABLE,
)
CSV_DELIMITER_OPTIONS: tuple[SelectOption, ...] = (COMMAS, TABS)


def option_by_value(options: Sequence[SelectOption], value: str) -> SelectOption:
    for option in options:
        if option.value == value:
            return option
    known = ", ".join(o.value for o in options)
    raise KeyError(f"unknown option value {value!r}; expected one of: {known}")


class CompatibilityTable(Mapping[str, tuple[SelectOption, ...]]):
    """Location value -> ordered formats that location supports.

    Lookups for a location that has no entry raise ``CompatibilityError``
    rather than returning an empty list.
    """

    def __init__(self, entries: Mapping[str, Sequence[SelectOption]]):
        self._entries = {key: tuple(value) for key, value in entries.items()}

    def __getitem__(self, location_value: str) -> tuple[SelectOption, ...]:
        try:
            return self._entries[location_value]
        except KeyError:
            raise CompatibilityError(
                f"no compatible data formats registered for location {location_value!r}"
            ) from None

    def __contains__(self, location_value: object) -> bool:
        return location_value in self._entries

    def get(self, location_value: str, default=None):
        return self._entries.get(location_value, default)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def formats_for(self, location: SelectOption) -> tuple[SelectOption, ...]:
        return self[location.value]


# S3 and local directories currently only support CSV or raw files.
ALLOWED_FORMATS = CompatibilityTable(
    {
        AWS_S3.value: (COMMA_SEPARATED_VALUES_FILES, INDIVIDUAL_BINARY_FILES),
        LOCAL_DIRECTORY.value: (COMMA_SEPARATED_VALUES_FILES, INDIVIDUAL_BINARY_FILES),
    }
)

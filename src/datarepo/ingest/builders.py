"""Prompt sequences that produce manifest configs.

Builders only ask questions and return a fresh config; they never touch the
manifest, so re-running one has no leftover effect from an earlier attempt.
"""

from __future__ import annotations

from typing import Callable

from datarepo.cli.prompts import PromptEngine
from datarepo.ingest.config import (
    AWSS3LocationConfig,
    CSVFilesFormatConfig,
    LocalDirectoryLocationConfig,
)
from datarepo.ingest.options import (
    AWS_S3,
    COMMA_SEPARATED_VALUES_FILES,
    CSV_DELIMITER_OPTIONS,
    LOCAL_DIRECTORY,
)


def csv_files_format_config_from_prompts(prompts: PromptEngine) -> CSVFilesFormatConfig:
    delimiter = prompts.select(
        "Delimiter",
        "Columns in each file are delimited by this character",
        CSV_DELIMITER_OPTIONS,
    )
    header = prompts.confirm("CSV files contain header row")
    return CSVFilesFormatConfig(delimiter=delimiter.value, header=header)


def aws_s3_location_config_from_prompts(prompts: PromptEngine) -> AWSS3LocationConfig:
    bucket = prompts.text("AWS S3 Bucket")
    prefix = prompts.text("AWS S3 Prefix", required=False)
    return AWSS3LocationConfig(bucket=bucket, prefix=prefix)


def local_directory_location_config_from_prompts(
    prompts: PromptEngine,
) -> LocalDirectoryLocationConfig:
    path = prompts.text("Local Directory Path")
    return LocalDirectoryLocationConfig(path=path)


LOCATION_BUILDERS: dict[str, Callable[[PromptEngine], object]] = {
    AWS_S3.value: aws_s3_location_config_from_prompts,
    LOCAL_DIRECTORY.value: local_directory_location_config_from_prompts,
}

FORMAT_BUILDERS: dict[str, Callable[[PromptEngine], object]] = {
    COMMA_SEPARATED_VALUES_FILES.value: csv_files_format_config_from_prompts,
}

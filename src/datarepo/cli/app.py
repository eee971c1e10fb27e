import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from datarepo.cli.commands.ingest import handle as handle_ingest
from datarepo.config.workspace import load_workspace_context

DATAREPO_DESCRIPTION = (
    "Data Repositories are tabular and unbounded collections of data (they have rows and "
    "columns, and the number of rows can grow indefinitely). They can natively support "
    "storing binary column types, with no limit to the size of data in rows or columns."
)

INGEST_DESCRIPTION = (
    "Interactive UI for ingesting data from an existing data source, creating a new Data Repo. "
    "A best-effort schema is detected from a sample of the data, and you can modify and "
    "confirm the schema manually before the repo is created."
)


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    # Common options shared by top-level and subcommands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        default=argparse.SUPPRESS,
        help="set logging level (default: WARNING)",
    )

    parser = argparse.ArgumentParser(
        prog="datarepo",
        description="Create and manage Data Repositories.",
        parents=[common],
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_datarepo = sub.add_parser(
        "datarepo",
        help="commands related to Data Repositories",
        description=DATAREPO_DESCRIPTION,
        parents=[common],
    )
    datarepo_sub = p_datarepo.add_subparsers(dest="datarepo_cmd", required=True)

    p_ingest = datarepo_sub.add_parser(
        "ingest",
        help="create a Data Repo by ingesting an existing data source",
        description=INGEST_DESCRIPTION,
        parents=[common],
    )
    p_ingest.add_argument(
        "--editor",
        help="editor command used to review the detected schema (default: $VISUAL, $EDITOR, vi)",
    )
    p_ingest.add_argument(
        "--sample-rows",
        type=_positive_int,
        default=None,
        help="maximum number of rows read when detecting the schema",
    )
    p_ingest.add_argument(
        "--sample-files",
        type=_positive_int,
        default=None,
        help="maximum number of files read when detecting the schema",
    )
    p_ingest.add_argument(
        "--preview-rows",
        type=_non_negative_int,
        default=None,
        help="number of sampled rows shown above the schema in the editor",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    workspace_context = load_workspace_context(Path.cwd())

    cli_level_arg = getattr(args, "log_level", None)
    shared_defaults = workspace_context.config.shared if workspace_context else None
    default_level_name = (
        shared_defaults.log_level
        if shared_defaults and shared_defaults.log_level
        else "WARNING"
    )
    base_level_name = (cli_level_arg or default_level_name).upper()
    base_level = logging.getLevelName(base_level_name)
    if not isinstance(base_level, int):
        base_level = logging.WARNING

    logging.basicConfig(level=base_level, format="%(message)s", stream=sys.stderr)

    if args.cmd == "datarepo" and args.datarepo_cmd == "ingest":
        handle_ingest(
            editor=getattr(args, "editor", None),
            sample_rows=getattr(args, "sample_rows", None),
            sample_files=getattr(args, "sample_files", None),
            preview_rows=getattr(args, "preview_rows", None),
            workspace=workspace_context,
        )
        return
    parser.error(f"unknown command: {args.cmd}")


if __name__ == "__main__":
    main()

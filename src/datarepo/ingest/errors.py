"""Failures raised while running the ingest wizard.

Every step raises one of these and lets it propagate; only the CLI command
turns them into an exit status.
"""


class IngestError(Exception):
    """Base class for wizard failures."""

    exit_code = 1


class PromptError(IngestError):
    """The input mechanism failed (EOF, interrupt, editor exited non-zero)."""


class UnsupportedFeatureError(IngestError):
    """The user picked a combination that is not implemented yet."""


class UserCancelledError(IngestError):
    """The user answered no at a confirmation checkpoint."""

    exit_code = 0


class SchemaParseError(IngestError):
    """Edited text could not be parsed back into a schema."""


class SamplingError(IngestError):
    """The data source could not be read while sampling a schema."""


class CompatibilityError(IngestError, LookupError):
    """A location has no entry in the format compatibility table."""


class InternalConsistencyError(IngestError):
    """An option value reached a branch that does not know it."""

"""Interactive wizard that describes a data source and confirms its schema.

The wizard runs a fixed sequence of steps::

    START -> LOCATION_CHOSEN -> FORMAT_CHOSEN -> CONFIRMED
          -> SCHEMA_SAMPLED -> SCHEMA_EDITED -> SCHEMA_CONFIRMED

Any step may raise; the wizard never catches or retries, so the first
failure ends the run and the in-progress manifest is simply dropped. Nothing
outside the process is touched before the sampler runs, and the sampler only
reads.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, TextIO

from datarepo.cli.prompts import PromptEngine
from datarepo.ingest.builders import FORMAT_BUILDERS, LOCATION_BUILDERS
from datarepo.ingest.errors import (
    InternalConsistencyError,
    UnsupportedFeatureError,
    UserCancelledError,
)
from datarepo.ingest.manifest import IngestManifest
from datarepo.ingest.options import (
    ALLOWED_FORMATS,
    COMMA_SEPARATED_VALUES_FILES,
    DATABASE_TABLE,
    INDIVIDUAL_BINARY_FILES,
    LOCATION_OPTIONS,
    CompatibilityTable,
    SelectOption,
)
from datarepo.sample.preview import as_comment_block, render_preview
from datarepo.sample.sampler import Sampler
from datarepo.sample.sampler import sampler_factory as default_sampler_factory
from datarepo.schema import SCHEMA_EDITOR_TUTORIAL_BLURB, SchemaField

logger = logging.getLogger(__name__)


class WizardState(str, Enum):
    START = "start"
    LOCATION_CHOSEN = "location_chosen"
    FORMAT_CHOSEN = "format_chosen"
    CONFIRMED = "confirmed"
    SCHEMA_SAMPLED = "schema_sampled"
    SCHEMA_EDITED = "schema_edited"
    SCHEMA_CONFIRMED = "schema_confirmed"


# Formats that appear in the compatibility table but have no builder yet.
_UNSUPPORTED_FORMATS = {
    INDIVIDUAL_BINARY_FILES.value: "individual binary files not yet supported",
    DATABASE_TABLE.value: "database tables not yet supported",
}


@dataclass(frozen=True)
class IngestResult:
    manifest: IngestManifest
    schema: SchemaField


SamplerFactory = Callable[..., Sampler]
PreviewRenderer = Callable[[SchemaField, Sampler], str]


class IngestWizard:
    def __init__(
        self,
        prompts: PromptEngine,
        *,
        sampler_factory: SamplerFactory = default_sampler_factory,
        preview_renderer: PreviewRenderer = render_preview,
        allowed_formats: CompatibilityTable = ALLOWED_FORMATS,
        out: Optional[TextIO] = None,
    ):
        self.prompts = prompts
        self.sampler_factory = sampler_factory
        self.preview_renderer = preview_renderer
        self.allowed_formats = allowed_formats
        self.manifest = IngestManifest()
        self.state = WizardState.START
        self._out = out

    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    def _advance(self, state: WizardState) -> None:
        logger.debug("Wizard state %s -> %s", self.state.value, state.value)
        self.state = state

    def _print(self, message: str = "") -> None:
        print(message, file=self.out)

    def choose_location(self) -> SelectOption:
        """Ask for the data source location and build its config."""
        selected = self.prompts.select(
            "Data Source",
            "Specify the source for importing data from.",
            LOCATION_OPTIONS,
        )
        builder = LOCATION_BUILDERS.get(selected.value)
        if builder is None:
            raise InternalConsistencyError(
                f"datasource location {selected.value!r} has no config builder")
        self.manifest.location_config = builder(self.prompts)
        self._advance(WizardState.LOCATION_CHOSEN)
        return selected

    def choose_format(self) -> SelectOption:
        """Ask for the data format among those the chosen location supports."""
        location = self.manifest.selected_location
        if location is None:
            raise InternalConsistencyError("data format chosen before data source location")
        choices = self.allowed_formats.formats_for(location)
        selected = self.prompts.select(
            "Data format",
            "Choose how your data is laid out.",
            choices,
        )
        if selected.value not in {c.value for c in choices}:
            raise InternalConsistencyError(
                f"data format {selected.value!r} is not offered for location {location.value!r}")
        if selected.value in _UNSUPPORTED_FORMATS:
            raise UnsupportedFeatureError(_UNSUPPORTED_FORMATS[selected.value])
        if selected.value == COMMA_SEPARATED_VALUES_FILES.value:
            self.manifest.format_config = FORMAT_BUILDERS[selected.value](self.prompts)
            self._advance(WizardState.FORMAT_CHOSEN)
            return selected
        raise InternalConsistencyError(f"datasource type {selected.value!r} not supported")

    def confirm_manifest(self) -> None:
        if not self.manifest.is_complete:
            raise InternalConsistencyError("cannot confirm an incomplete manifest")
        self._print("Data Source Configurations:")
        self._print()
        self._print(self.manifest.to_yaml())
        if not self.prompts.confirm("Confirm and detect schema"):
            raise UserCancelledError("user cancelled data source configurations")
        self._advance(WizardState.CONFIRMED)

    def build_schema(self) -> SchemaField:
        """Sample a schema, let the user edit it once, and confirm the result."""
        sampler = self.sampler_factory(
            self.manifest.format_config, self.manifest.location_config)
        sampled = sampler.sample_schema()
        preview = self.preview_renderer(sampled, sampler)
        self._advance(WizardState.SCHEMA_SAMPLED)

        buffer = SCHEMA_EDITOR_TUTORIAL_BLURB + as_comment_block(preview) + sampled.to_yaml()
        edited = self.prompts.editor(buffer, "yaml")
        finalized = SchemaField.from_yaml(edited)
        self._advance(WizardState.SCHEMA_EDITED)

        self._print("Final Schema:")
        self._print(finalized.to_yaml())
        if not self.prompts.confirm("Confirm finalized schema"):
            raise UserCancelledError("aborted finalizing schema")
        self._advance(WizardState.SCHEMA_CONFIRMED)
        return finalized

    def run(self) -> IngestResult:
        self.choose_location()
        self.choose_format()
        self.confirm_manifest()
        schema = self.build_schema()
        logger.info("Schema %r confirmed with %d field(s)", schema.name, len(schema.fields))
        return IngestResult(manifest=self.manifest, schema=schema)

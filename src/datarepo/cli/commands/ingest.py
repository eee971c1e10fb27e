import logging
from functools import partial
from typing import Optional

from datarepo.cli.prompts import PromptEngine, TerminalPrompts
from datarepo.config.workspace import IngestDefaults, WorkspaceContext
from datarepo.ingest.errors import IngestError, UserCancelledError
from datarepo.ingest.wizard import IngestResult, IngestWizard
from datarepo.sample.preview import DEFAULT_PREVIEW_ROWS, render_preview
from datarepo.sample.sampler import sampler_factory

logger = logging.getLogger(__name__)


def _pick(cli_value, config_value):
    return cli_value if cli_value is not None else config_value


def handle(
    *,
    editor: Optional[str] = None,
    sample_rows: Optional[int] = None,
    sample_files: Optional[int] = None,
    preview_rows: Optional[int] = None,
    workspace: Optional[WorkspaceContext] = None,
    prompts: Optional[PromptEngine] = None,
) -> IngestResult:
    defaults = workspace.config.ingest if workspace else IngestDefaults()
    rows = _pick(preview_rows, defaults.preview_rows)
    wizard = IngestWizard(
        prompts or TerminalPrompts(editor=_pick(editor, defaults.editor)),
        sampler_factory=partial(
            sampler_factory,
            sample_rows=_pick(sample_rows, defaults.sample_rows),
            sample_files=_pick(sample_files, defaults.sample_files),
        ),
        preview_renderer=partial(
            render_preview, rows=DEFAULT_PREVIEW_ROWS if rows is None else rows),
    )
    print("")
    try:
        return wizard.run()
    except UserCancelledError as exc:
        logger.warning("%s", exc)
        raise SystemExit(exc.exit_code) from exc
    except IngestError as exc:
        logger.error("[%s] %s", wizard.state.value, exc)
        raise SystemExit(exc.exit_code) from exc

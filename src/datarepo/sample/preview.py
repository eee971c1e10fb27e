from __future__ import annotations

import io

from rich.console import Console
from rich.table import Table

from datarepo.sample.sampler import Sampler
from datarepo.schema import SchemaField

DEFAULT_PREVIEW_ROWS = 10
PREVIEW_WIDTH = 120


def render_preview(
    schema: SchemaField,
    sampler: Sampler,
    *,
    rows: int = DEFAULT_PREVIEW_ROWS,
    width: int = PREVIEW_WIDTH,
) -> str:
    """Render the first sampled rows as a plain-text table headed by field types."""
    rows = max(rows, 0)
    table = Table(title=f"Preview: {schema.name}", show_lines=False, expand=False)
    for field in schema.fields:
        table.add_column(f"{field.name}\n({field.type})", overflow="ellipsis", no_wrap=True)
    width_cols = len(schema.fields)
    for row in sampler.rows[:rows]:
        cells = [row[i] if i < len(row) else "" for i in range(width_cols)]
        table.add_row(*cells)

    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=width,
        markup=False,
        highlight=False,
        color_system=None,
        force_terminal=False,
    )
    console.print(table)
    shown = min(rows, len(sampler.rows))
    console.print(f"{shown} of {len(sampler.rows)} sampled rows shown")
    return buffer.getvalue()


def as_comment_block(text: str) -> str:
    """Prefix every line with '# ' so the block survives a YAML parse."""
    lines = text.rstrip("\n").splitlines()
    return "".join(f"# {line}".rstrip() + "\n" for line in lines) + "\n"

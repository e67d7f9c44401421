"""Output formats for report rows."""

from __future__ import annotations

import csv
import io
import json

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .models import Row

FIELD_LABELS: dict[str, str] = {
    "project": "Project",
    "display_name": "Name",
    "name": "Name",
    "path": "Path",
    "status": "Status",
    "version": "Version",
}
DEFAULT_FIELDS: list[str] = ["project", "display_name", "status", "version", "path"]
FORMATS: tuple[str, ...] = ("table", "json", "yaml", "csv")

STATUS_STYLES = {"Enabled": "green", "Disabled": "yellow"}


def parse_fields(text: str) -> list[str]:
    """Parse a comma-separated field list.

    Raises:
        ValueError: If an unknown field is named or the list is empty.
    """
    fields = [part.strip().lower() for part in text.split(",") if part.strip()]
    if not fields:
        raise ValueError("No fields selected")
    unknown = [f for f in fields if f not in FIELD_LABELS]
    if unknown:
        raise ValueError(f"Unknown field: {', '.join(unknown)}. Choices: {', '.join(FIELD_LABELS)}")
    return fields


def _records(rows: dict[str, Row], fields: list[str]) -> list[dict[str, str]]:
    return [{f: row.as_dict()[f] for f in fields} for row in rows.values()]


def render_table(rows: dict[str, Row], fields: list[str], console: Console, title: str | None = None) -> None:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    for f in fields:
        table.add_column(FIELD_LABELS[f], style="green" if f == "project" else None)

    for row in rows.values():
        values = row.as_dict()
        cells = []
        for f in fields:
            value = escape(values[f])
            style = STATUS_STYLES.get(values[f]) if f == "status" else None
            cells.append(f"[{style}]{value}[/{style}]" if style else value)
        table.add_row(*cells)

    console.print(table)


def render_json(rows: dict[str, Row], fields: list[str]) -> str:
    return json.dumps(_records(rows, fields), indent=2, ensure_ascii=False) + "\n"


def render_yaml(rows: dict[str, Row], fields: list[str]) -> str:
    return yaml.safe_dump(_records(rows, fields), sort_keys=False, allow_unicode=True)


def render_csv(rows: dict[str, Row], fields: list[str]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=fields, lineterminator="\n")
    writer.writeheader()
    writer.writerows(_records(rows, fields))
    return buffer.getvalue()


def render(rows: dict[str, Row], fmt: str, fields: list[str], console: Console, title: str | None = None) -> None:
    """Write rows to the console in the requested format."""
    if fmt == "table":
        render_table(rows, fields, console, title=title)
        return

    renderers = {"json": render_json, "yaml": render_yaml, "csv": render_csv}
    if fmt not in renderers:
        raise ValueError(f"Unknown format: {fmt}. Choices: {', '.join(FORMATS)}")
    # Machine-readable output goes out unstyled
    console.print(renderers[fmt](rows, fields), markup=False, emoji=False, highlight=False, soft_wrap=True, end="")

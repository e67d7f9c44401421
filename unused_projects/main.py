"""unused-projects CLI - report installed extensions grouped by project."""

import logging
import sys
from pathlib import Path

import click

from .console import console
from .extension_filter import filter_extensions
from .grouping import group_extensions
from .inventory import InventoryError
from .inventory import load_manifest
from .inventory import scan_site
from .logging_setup import init_json_logging
from .models import ExtensionRecord
from .render import FORMATS
from .render import parse_fields
from .render import render
from .report import ReportOptions
from .report import build_rows
from .report import parse_status_filter
from .report import summarize
from .settings import SettingsManager
from .utils.error_format import escape_markup
from .utils.error_format import format_error_message

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.version_option(package_name="unused-projects")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Append JSONL logs to this file")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level for the JSONL log",
)
@click.pass_context
def cli(ctx: click.Context, log_file: str | None, log_level: str | None):
    """Report installed extensions grouped by project."""
    init_json_logging(log_file, log_level)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit()


@click.command("report")
@click.option("--root", type=click.Path(file_okay=False, path_type=Path), help="Site root to scan for .info.yml files")
@click.option("--manifest", type=click.Path(dir_okay=False, path_type=Path), help="YAML/JSON manifest of extensions")
@click.option(
    "--enabled-config",
    type=click.Path(dir_okay=False, path_type=Path),
    help="core.extension.yml export listing enabled extensions",
)
@click.option("--status", default=None, help="Only show projects with these statuses: enabled, disabled [default: disabled]")
@click.option("--subs/--no-subs", default=None, help="Show sub-modules under each project")
@click.option("--hide-modules/--show-modules", default=None, help="Hide solo modules")
@click.option("--format", "fmt", type=click.Choice(FORMATS), default=None, help="Output format [default: table]")
@click.option("--fields", default=None, help="Comma-separated fields to show")
def report_cmd(
    root: Path | None,
    manifest: Path | None,
    enabled_config: Path | None,
    status: str | None,
    subs: bool | None,
    hide_modules: bool | None,
    fmt: str | None,
    fields: str | None,
):
    """Show projects and their modules, filtered by status.

    Unlike a flat module list, extensions are grouped by the project that
    ships them. Solo modules are listed as their own project.
    """
    settings = SettingsManager().get_settings()

    if root and manifest:
        raise click.UsageError("Use either --root or --manifest, not both")

    try:
        status_filter = parse_status_filter(status if status is not None else settings.report.status)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--status") from e

    try:
        field_list = parse_fields(fields if fields is not None else settings.report.fields)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--fields") from e

    fmt = fmt or settings.report.format
    if fmt not in FORMATS:
        raise click.BadParameter(f"Unknown format: {fmt}. Choices: {', '.join(FORMATS)}", param_hint="--format")

    options = ReportOptions(
        status_filter=status_filter,
        show_subs=settings.report.subs if subs is None else subs,
        hide_modules=settings.report.hide_modules if hide_modules is None else hide_modules,
    )

    try:
        records = _load_inventory(root, manifest, enabled_config, settings.inventory)
    except InventoryError as e:
        console.print(f"[red]Error:[/red] {escape_markup(format_error_message(e))}")
        sys.exit(1)

    groups = group_extensions(filter_extensions(records))
    rows = build_rows(groups, options)
    logger.info(f"Reporting {len(rows)} rows for statuses {sorted(status_filter)}")

    if fmt != "table":
        render(rows, fmt, field_list, console)
        return

    if not rows:
        console.print(f"[dim]No projects with status {', '.join(sorted(status_filter))}[/dim]")
    else:
        render(rows, fmt, field_list, console, title="Projects")

    summary = summarize(groups)
    console.print(
        f"\n[dim]{summary.projects} projects, {summary.solo_modules} solo modules "
        f"({summary.enabled} enabled, {summary.disabled} disabled)[/dim]"
    )


def _load_inventory(
    root: Path | None,
    manifest: Path | None,
    enabled_config: Path | None,
    inventory_settings,
) -> dict[str, ExtensionRecord]:
    """Load extensions from the command line source, else from settings."""
    if enabled_config is None and inventory_settings.enabled_config:
        enabled_config = Path(inventory_settings.enabled_config)

    if root is None and manifest is None:
        if inventory_settings.manifest:
            manifest = Path(inventory_settings.manifest)
        elif inventory_settings.root:
            root = Path(inventory_settings.root)
        else:
            raise click.UsageError("No extension source: pass --root or --manifest, or set one in settings.yaml")

    if manifest is not None:
        return load_manifest(manifest)
    assert root is not None
    return scan_site(root, enabled_config)


cli.add_command(report_cmd)
cli.add_command(report_cmd, name="un-p")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()

"""Interface source export command."""

from __future__ import annotations

import json
from pathlib import Path

import click
import structlog
from rich.console import Console
from rich.table import Table

from wow_ui_exporter.core.config import AppConfig
from wow_ui_exporter.core.errors import ExporterError
from wow_ui_exporter.core.pipeline import ExportPipeline, ExportResult
from wow_ui_exporter.core.types import Product, Region

logger = structlog.get_logger()


def _show_summary(result: ExportResult, console: Console, verbose: bool) -> None:
    """Print the run summary table."""
    table = Table(title="Interface Export")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Version", result.build.version_name)
    table.add_row("Region", result.build.region)
    table.add_row("Build Config", result.build.build_config)
    table.add_row("CDN Config", result.build.cdn_config)
    table.add_row("Manifest Entries", f"{result.candidates:,}")
    table.add_row("Exported", f"{result.exported:,}")
    table.add_row("Not In Listfile", f"{len(result.unresolved):,}")
    table.add_row("Output", str(result.output_dir))

    console.print(table)

    if verbose and result.unresolved:
        console.print("[yellow]Not in listfile:[/yellow]")
        for name in result.unresolved:
            console.print(f"  {name}")


@click.command(name="export")
@click.option(
    "--product",
    "-p",
    required=True,
    type=click.Choice([p.value for p in Product]),
    help="Product to export interface files for",
)
@click.option(
    "--output",
    "-o",
    "output_dir",
    required=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory the files are exported to",
)
@click.option(
    "--region",
    "-r",
    type=click.Choice([r.value for r in Region]),
    default=Region.US.value,
    show_default=True,
    help="CDN region to query",
)
@click.option("--keep-manifests", is_flag=True, help="Keep the manifest text files")
@click.option("--export-version", is_flag=True, help="Write version.txt to the output directory")
@click.option("--tool", "tool_path", help="Retrieval tool executable")
@click.option("--listfile-url", help="Listfile snapshot URL")
@click.pass_context
def export(
    ctx: click.Context,
    product: str,
    output_dir: Path,
    region: str,
    keep_manifests: bool,
    export_version: bool,
    tool_path: str | None,
    listfile_url: str | None,
) -> None:
    """Export interface source files for the current build."""
    config: AppConfig = ctx.obj["config"]
    console: Console = ctx.obj["console"]
    verbose: bool = ctx.obj.get("verbose", False)

    if tool_path:
        config = config.model_copy(
            update={"export_tool": config.export_tool.model_copy(update={"executable": tool_path})}
        )

    pipeline = ExportPipeline(config, listfile_url=listfile_url)

    try:
        with console.status(f"Exporting {product} interface files..."):
            result = pipeline.run(
                Product(product),
                output_dir,
                region=Region(region),
                keep_manifests=keep_manifests,
                export_version=export_version,
            )
    except ExporterError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise click.ClickException(f"Export failed during {pipeline.state.value}: {e}") from e

    if config.output_format == "json":
        # Use regular print for JSON to avoid Rich formatting
        print(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    console.print(f"[green]✓[/green] Exported {result.exported} files for {result.build.version_name}")
    _show_summary(result, console, verbose)

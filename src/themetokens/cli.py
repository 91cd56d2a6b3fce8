"""
themetokens command line.

Commands:
- export: Export a variable snapshot to theme.json and style variations
- presets: List the color preset catalog
- apply-syntax: Write CSS var code syntax back into the snapshot
- import: Import design-token documents into the snapshot
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from themetokens import __version__
from themetokens.config import CONFIG_FILE, get_log_level, load_base_theme, load_options
from themetokens.errors import ThemeTokensError
from themetokens.models import ExportOptions, OutputFile
from themetokens.source import SnapshotSource

console = Console()

app = typer.Typer(
    help="Export design-token snapshots to WordPress theme.json.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"themetokens {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """themetokens CLI main callback for global options."""
    logging.basicConfig(
        level=get_log_level(verbose),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _load_snapshot(path: Path) -> SnapshotSource:
    try:
        return SnapshotSource.load(path)
    except ThemeTokensError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _resolve_options(config: Path | None, snapshot: Path) -> ExportOptions:
    path = config or snapshot.parent / CONFIG_FILE
    if config is None and not path.exists():
        return ExportOptions()
    return load_options(path)


def write_files(files: list[OutputFile], output_dir: Path) -> list[Path]:
    """Write export files under ``output_dir`` as pretty-printed JSON."""
    written = []
    for file in files:
        target = output_dir / file.file_name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(file.body, indent=2, ensure_ascii=False) + "\n", "utf-8")
        written.append(target)
    return written


# =============================================================================
# Commands
# =============================================================================


@app.command("export")
def export_command(
    snapshot: Path = typer.Argument(..., help="Variable snapshot JSON file"),
    output: Path = typer.Option(Path("theme"), "--output", "-o", help="Output directory"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Options YAML file"),
    base_theme: Path | None = typer.Option(None, "--base-theme", help="Seed theme.json"),
    typography: bool | None = typer.Option(
        None, "--typography/--no-typography", help="Append typography presets"
    ),
    color_presets: bool | None = typer.Option(
        None, "--color-presets/--no-color-presets", help="Append a color palette"
    ),
    spacing_presets: bool | None = typer.Option(
        None, "--spacing-presets/--no-spacing-presets", help="Append spacing sizes"
    ),
    rem: bool | None = typer.Option(None, "--rem/--no-rem", help="Convert px values to rem"),
) -> None:
    """Export a snapshot to theme.json plus style variation files."""
    from themetokens.exporter import ThemeExporter

    source = _load_snapshot(snapshot)

    try:
        options = _resolve_options(config, snapshot)
        overrides: dict[str, object] = {
            "generate_typography": typography,
            "generate_color_presets": color_presets,
            "generate_spacing_presets": spacing_presets,
            "use_rem": rem,
        }
        if base_theme is not None:
            overrides["base_theme"] = load_base_theme(base_theme)
        options = options.model_copy(
            update={key: value for key, value in overrides.items() if value is not None}
        )
        files = asyncio.run(ThemeExporter(source, options).export())
    except ThemeTokensError as e:
        console.print(f"[red]Export failed: {e}[/red]")
        raise typer.Exit(1)

    written = write_files(files, output)

    table = Table(title="Exported files")
    table.add_column("File")
    table.add_column("Path", style="dim")
    for file, path in zip(files, written):
        table.add_row(file.file_name, str(path))
    console.print(table)
    console.print(f"[green]Wrote {len(written)} files to {output}[/green]")


@app.command("presets")
def presets_command(
    snapshot: Path = typer.Argument(..., help="Variable snapshot JSON file"),
    as_json: bool = typer.Option(False, "--json", help="Print presets as JSON"),
) -> None:
    """List the color preset catalog with resolved preview colors."""
    from themetokens.presets import build_all_color_presets

    source = _load_snapshot(snapshot)
    presets = asyncio.run(build_all_color_presets(source))

    if as_json:
        typer.echo(json.dumps([p.model_dump(by_alias=True) for p in presets], indent=2))
        return

    if not presets:
        console.print("No color presets found.")
        return

    table = Table(title="Color presets")
    table.add_column("Collection")
    table.add_column("Name")
    table.add_column("Slug", style="dim")
    table.add_column("Reference")
    table.add_column("Preview")
    for preset in presets:
        table.add_row(
            preset.collection_name,
            preset.name,
            preset.slug,
            preset.color,
            preset.resolved_color or "",
        )
    console.print(table)


@app.command("apply-syntax")
def apply_syntax_command(
    snapshot: Path = typer.Argument(..., help="Variable snapshot JSON file"),
    overwrite: bool = typer.Option(
        False, "--overwrite", help="Rewrite variables that already have CSS var syntax"
    ),
) -> None:
    """Write var(--wp--custom--...) code syntax onto every variable."""
    from themetokens.code_syntax import apply_css_var_syntax

    source = _load_snapshot(snapshot)
    result = asyncio.run(apply_css_var_syntax(source, overwrite_existing=overwrite))

    try:
        source.save(snapshot)
    except ThemeTokensError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        f"[green]Updated {result.updated_count} variables[/green] "
        f"(skipped {result.skipped_count}, processed {result.total_processed})"
    )


@app.command("import")
def import_command(
    snapshot: Path = typer.Argument(..., help="Variable snapshot JSON file"),
    documents: list[Path] = typer.Argument(..., help="Token documents to import"),
    create: bool = typer.Option(False, "--create", help="Start a new snapshot if missing"),
) -> None:
    """Import design-token documents as new collections."""
    from themetokens.importer import import_token_document

    if create and not snapshot.exists():
        source = SnapshotSource()
    else:
        source = _load_snapshot(snapshot)

    for document in documents:
        try:
            collection = import_token_document(
                source, document.stem, document.read_text(encoding="utf-8")
            )
        except (OSError, ThemeTokensError) as e:
            console.print(f"[red]Failed to import {document}: {e}[/red]")
            raise typer.Exit(1)
        console.print(
            f"Imported [bold]{collection.name}[/bold] ({len(collection.variable_ids)} tokens)"
        )

    try:
        source.save(snapshot)
    except ThemeTokensError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


# =============================================================================
# Main Entry Point
# =============================================================================


def main() -> None:
    app()


if __name__ == "__main__":
    main()

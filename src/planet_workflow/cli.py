"""
CLI module - Command line interface for Planet Workflow

Entry point for the `pwf` command using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import AppConfig, build_template, load_config
from .generator import generate_manifests
from .logging_setup import setup_logging
from .manifest import ManifestWriteError, ManifestWriter, read_manifest
from .workflow import InvalidTemplateError, RegionPatterns

console = Console()
app = typer.Typer(
    name="pwf",
    help="Planet Workflow - OpenStreetMap import workflow manifest generator.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool):
    if value:
        console.print(f"pwf version {__version__}")
        raise typer.Exit()


# Type aliases for common options
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to config file", exists=True, dir_okay=False),
]


def get_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration and set up logging from it."""
    cfg = load_config(config_path)
    setup_logging(cfg.logging)
    return cfg


@app.callback()
def main(
    version: Annotated[
        bool, typer.Option("--version", "-v", callback=version_callback, is_eager=True, help="Show version")
    ] = False,
):
    """Planet Workflow - OpenStreetMap import workflow manifest generator."""
    pass


@app.command()
def generate(
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Directory for manifest files")] = None,
    region: Annotated[
        list[str] | None, typer.Option("--region", "-r", help="Region to include (repeatable, default: continents)")
    ] = None,
    database: Annotated[str | None, typer.Option("--database", help="Database connection string")] = None,
    prefix: Annotated[str | None, typer.Option("--prefix", help="Manifest name prefix")] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Show what would be written without writing")] = False,
    config: ConfigOption = None,
):
    """
    Generate the combined workflow manifest and one manifest per step.

    [bold]Examples:[/bold]

        pwf generate -o ./manifests

        pwf generate -r liechtenstein -r europe/monaco --prefix small

        pwf generate --database "jdbc:postgresql://db:5432/osm?&user=osm&password=osm" --dry-run
    """
    cfg = get_config(config)
    if output is not None:
        cfg.paths.output_dir = output
    if region:
        cfg.template.regions = list(region)
    if database is not None:
        cfg.database.url = database
    if prefix is not None:
        cfg.template.prefix = prefix

    try:
        template = build_template(cfg)
        result = generate_manifests(
            template,
            ManifestWriter(cfg.paths.output_dir),
            prefix=cfg.template.prefix,
            dry_run=dry_run,
        )
    except (InvalidTemplateError, ManifestWriteError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None

    title = "Manifests (dry run)" if dry_run else "Manifests"
    table = Table(title=title)
    table.add_column("Manifest", style="cyan")
    table.add_column("Path", style="dim")

    for name, path in result.manifests.items():
        table.add_row(name, str(path))

    console.print(table)
    counts = ", ".join(f"{step_id}={count}" for step_id, count in result.task_counts.items())
    console.print(f"[bold]Regions:[/bold] {len(result.regions)}  [bold]Tasks:[/bold] {counts}")


@app.command()
def show(
    manifest: Annotated[Path, typer.Argument(help="Manifest file to display", exists=True, dir_okay=False)],
):
    """Show the steps and tasks of a manifest file."""
    try:
        workflow = read_manifest(manifest)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {manifest.name}: {e}")
        raise typer.Exit(1) from None

    table = Table(title=f"Manifest: {manifest.name}")
    table.add_column("Step", style="cyan")
    table.add_column("Needs")
    table.add_column("Type", style="green")
    table.add_column("Target", style="dim")

    for step in workflow.steps:
        needs = ", ".join(step.needs) or "-"
        if not step.tasks:
            table.add_row(step.id, needs, "-", "-")
        for task in step.tasks:
            data = task.to_dict()
            target = data.get("url") or data.get("file", "")
            table.add_row(step.id, needs, data["type"], target)

    console.print(table)


@app.command("list-regions")
def list_regions(config: ConfigOption = None):
    """List configured regions and their download URLs."""
    cfg = get_config(config)

    try:
        patterns = RegionPatterns(url_pattern=cfg.template.url_pattern, path_pattern=cfg.template.path_pattern)
    except InvalidTemplateError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None

    table = Table(title="Regions")
    table.add_column("Region", style="cyan")
    table.add_column("URL")
    table.add_column("Path", style="dim")

    for name in cfg.template.regions:
        table.add_row(name, patterns.url(name), patterns.path(name))

    console.print(table)


def main_cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main_cli()

#!/usr/bin/env python3
"""Command line entry point for publishing release binaries."""

import sys
from pathlib import Path
from typing import Optional

import humanize
import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from binpublish.config import PublishSettings, build_metadata_command
from binpublish.errors import BinPublishError
from binpublish.provider import FileMetadataProvider, MetadataProvider, ShellMetadataProvider
from binpublish.publisher import Publisher, PublishReport, PublishStatus

app = typer.Typer(help="Copy a workspace's release binaries into a versioned publish directory", add_completion=False)
console = Console()

STATUS_STYLES = {
    PublishStatus.COPIED: "green",
    PublishStatus.ALREADY_PUBLISHED: "yellow",
    PublishStatus.NOT_RELEASED: "yellow",
    PublishStatus.NO_ARTIFACT: "dim",
}


def configure_logging(level: str) -> None:
    logger.remove()
    # resolve sys.stderr per message so redirected streams are honoured
    logger.add(lambda msg: sys.stderr.write(msg), level=level, format="{level: <8} | {message}")


def get_provider(
    settings: PublishSettings,
    metadata_command: Optional[str] = None,
    manifest_path: Optional[Path] = None,
    metadata_file: Optional[Path] = None,
) -> MetadataProvider:
    if metadata_file is not None:
        return FileMetadataProvider(metadata_file)
    command = build_metadata_command(metadata_command or settings.metadata_command, manifest_path)
    return ShellMetadataProvider(command)


def render_report(report: PublishReport) -> None:
    table = Table(title=f"{report.package.name} {report.package.version}")
    table.add_column("Target", style="cyan", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Destination", overflow="fold")
    table.add_column("Size", justify="right")

    for result in report.results:
        style = STATUS_STYLES[result.status]
        table.add_row(
            result.target,
            f"[{style}]{result.status.value}[/{style}]",
            str(result.destination) if result.destination else "",
            humanize.naturalsize(result.size) if result.status is PublishStatus.COPIED else "",
        )

    console.print(table)
    console.print(f"[bold]{len(report.copied)}[/bold] copied ({humanize.naturalsize(report.total_bytes)}) into {report.publish_path}")


@app.command()
def publish(
    publish_dir: Path = typer.Argument(..., help="Root of the publish directory tree"),
    metadata_command: Optional[str] = typer.Option(
        None, "--metadata-command", help="Command that prints the workspace metadata as JSON"
    ),
    manifest_path: Optional[Path] = typer.Option(None, "--manifest-path", help="Manifest passed to the metadata command"),
    metadata_file: Optional[Path] = typer.Option(
        None, "--metadata-file", help="Read metadata from a saved JSON document instead of running a command"
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show debug output"),
):
    """Publish the workspace package's release binaries into PUBLISH_DIR/<name>/<version>/<target>/."""
    settings = PublishSettings.from_env()
    configure_logging("DEBUG" if verbose else settings.log_level)

    provider = get_provider(settings, metadata_command, manifest_path, metadata_file)
    try:
        metadata = provider.load()
        report = Publisher(metadata, publish_dir).publish()
    except (BinPublishError, OSError) as e:
        logger.error(str(e))
        raise typer.Exit(code=1)

    render_report(report)


def main():
    """Main entry point for the binpublish CLI."""
    app()


if __name__ == "__main__":
    main()

"""Thin CLI wrapper for incremental_cache.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.
"""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from incremental_cache import __version__
from incremental_cache.config import get_settings, print_settings_json
from incremental_cache.errors import IncrementalCacheError
from incremental_cache.types import FileServerConfig, OutputDir

app = typer.Typer(
    name="incremental-cache",
    help="Incremental Cache - stage, package, and restore container build caches",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

# image-exists exit code when the container CLI cannot be launched; 1 means not found.
LAUNCH_FAILURE_EXIT_CODE = 2


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"incremental-cache version {__version__}")
        raise typer.Exit()


def _fail(
    operation: str, error: IncrementalCacheError, exit_code: int = 1
) -> typer.Exit:
    """Report a failed cache sub-operation and return the exit to raise."""
    err_console.print(f"[red]{operation} failed: {escape(str(error))}[/red]")
    return typer.Exit(code=exit_code)


def _output_dir(output_dir: Path | None) -> OutputDir:
    if output_dir is not None:
        return OutputDir(root=output_dir)
    return OutputDir.from_settings(get_settings())


def _print_lines(lines: list[str], json_output: bool) -> None:
    # Fragments are emitted raw; rich would wrap or reinterpret them.
    if json_output:
        typer.echo(json.dumps(lines, indent=2))
    else:
        for line in lines:
            typer.echo(line)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Incremental Cache - stage, package, and restore container build caches."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        typer.echo(print_settings_json(settings))
    else:
        console.print("[bold]Effective Configuration:[/bold]")
        console.print()
        console.print("[bold]Paths:[/bold]")
        console.print(f"  Output directory:    {settings.output_dir}")
        console.print()
        console.print("[bold]Tooling:[/bold]")
        console.print(f"  Docker command:      {settings.docker_command}")
        console.print(f"  Log level:           {settings.log_level}")
        console.print()
        console.print("[bold]File server:[/bold]")
        upload_display = settings.upload_url or "(not set)"
        console.print(f"  Upload URL:          {upload_display}")
        token_display = "(set)" if settings.access_token else "(not set)"
        console.print(f"  Access token:        {token_display}")


@app.command()
def reset(
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir", "-o", help="Output directory (default: settings)"
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Reset the incremental cache directories to an empty state."""
    from incremental_cache.cache.dirs import CacheDirectoryManager

    dirs = CacheDirectoryManager(_output_dir(output_dir))
    try:
        dirs.create()
    except IncrementalCacheError as e:
        raise _fail("Resetting incremental cache directories", e) from None

    if json_output:
        output = {
            "root": str(dirs.root),
            "uploads_dir": str(dirs.uploads_dir),
            "image_dir": str(dirs.image_dir),
        }
        typer.echo(json.dumps(output, indent=2))
    else:
        console.print("[green]Incremental cache reset[/green]")
        console.print(f"  Uploads: {dirs.uploads_dir}")
        console.print(f"  Image:   {dirs.image_dir}")


@app.command("create-image")
def create_image(
    tag: Annotated[str, typer.Argument(help="Tag for the cache image")],
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir", "-o", help="Output directory (default: settings)"
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Package uploaded archives into a tagged cache image."""
    from incremental_cache.cache.dirs import CacheDirectoryManager
    from incremental_cache.cache.image import CacheImageBuilder

    settings = get_settings()
    dirs = CacheDirectoryManager(_output_dir(output_dir))
    builder = CacheImageBuilder(docker_command=settings.docker_command)
    try:
        result = builder.create_image(dirs, tag)
    except IncrementalCacheError as e:
        raise _fail("Creating incremental cache image", e) from None

    if json_output:
        output = {
            "tag": result.tag,
            "archives": [str(a) for a in result.archives],
        }
        typer.echo(json.dumps(output, indent=2))
    elif result.imported:
        count = len(result.archives)
        console.print(f"[green]Created {escape(tag)} from {count} archive(s)[/green]")
    else:
        console.print("[yellow]No archives to import[/yellow]")


@app.command("image-exists")
def image_exists(
    tag: Annotated[str, typer.Argument(help="Image tag to look up")],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Check whether a cache image exists in its registry.

    Exits with code 0 if the image exists, 1 if it does not, and 2 if the
    inspection command could not be launched.
    """
    from incremental_cache.cache.image import RemoteImageExistenceChecker

    settings = get_settings()
    checker = RemoteImageExistenceChecker(docker_command=settings.docker_command)
    try:
        exists = checker.image_exists(tag)
    except IncrementalCacheError as e:
        raise _fail(
            "Checking incremental cache image", e, exit_code=LAUNCH_FAILURE_EXIT_CODE
        ) from None

    if json_output:
        typer.echo(json.dumps({"tag": tag, "exists": exists}, indent=2))
    elif exists:
        console.print(f"[green]{escape(tag)} exists[/green]")
    else:
        console.print(f"[yellow]{escape(tag)} not found[/yellow]")

    if not exists:
        raise typer.Exit(code=1)


@app.command("copy-to-image")
def copy_to_image_cmd(
    image_ref: Annotated[str, typer.Argument(help="Cache image to copy from")],
    dirs: Annotated[
        list[str] | None,
        typer.Option("--dir", "-d", help="Cached directory (can be repeated)"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Print COPY instructions restoring cached directories."""
    from incremental_cache.cache.commands import copy_to_image

    _print_lines(copy_to_image(dirs, image_ref), json_output)


@app.command("copy-from-image")
def copy_from_image_cmd(
    dirs: Annotated[
        list[str] | None,
        typer.Option("--dir", "-d", help="Cached directory (can be repeated)"),
    ] = None,
    upload_url: Annotated[
        str | None,
        typer.Option(
            "--upload-url", help="File server upload URL (default: settings)"
        ),
    ] = None,
    token: Annotated[
        str | None,
        typer.Option(
            "--token", help="File server access token (default: settings)"
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Print shell lines archiving and uploading cached directories."""
    from incremental_cache.cache.commands import copy_from_image

    server_config = get_settings().file_server_config()
    if upload_url and token:
        server_config = FileServerConfig(upload_url=upload_url, access_token=token)
    elif upload_url or token:
        err_console.print("[red]Error: --upload-url and --token go together[/red]")
        raise typer.Exit(code=1)

    _print_lines(copy_from_image(dirs, server_config), json_output)


if __name__ == "__main__":
    app()

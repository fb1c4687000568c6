"""CLI interface for postshelf."""

import logging
from datetime import date
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from postshelf.config import PostshelfConfig, load_config, merge_cli_overrides
from postshelf.errors import PostshelfError
from postshelf.index import write_index, write_manifest
from postshelf.loader import PostLoader
from postshelf.models import IssueSeverity, ValidationReport
from postshelf.scaffold import new_post
from postshelf.validate import validate_directory

app = typer.Typer(
    name="postshelf",
    help="Check, list and index a directory of front-matter blog posts.",
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to a .postshelf.toml file."),
]
PostsDirOption = Annotated[
    Optional[Path],
    typer.Option("--dir", "-d", help="Posts directory. Defaults to ./_posts/"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from postshelf import __version__

        console.print(f"postshelf {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
) -> None:
    """Postshelf - keep a directory of posts well-formed."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _config(config_path: Path | None, **overrides: object) -> PostshelfConfig:
    try:
        return merge_cli_overrides(load_config(config_path), **overrides)
    except ValidationError as exc:
        console.print(f"[red]Error:[/red] Invalid configuration: {exc}")
        raise typer.Exit(2) from None


def _print_report(report: ValidationReport, root: Path) -> None:
    if not report.issues:
        console.print(f"[green]Checked {report.checked} post(s): no issues.[/green]")
        return

    table = Table(title="Post issues")
    table.add_column("File", no_wrap=True)
    table.add_column("Line", justify="right")
    table.add_column("Severity")
    table.add_column("Check")
    table.add_column("Message")
    for issue in sorted(report.issues, key=lambda i: (str(i.path), i.line or 0)):
        color = "red" if issue.severity == IssueSeverity.ERROR else "yellow"
        try:
            shown = issue.path.relative_to(root)
        except ValueError:
            shown = issue.path
        table.add_row(
            str(shown),
            str(issue.line) if issue.line else "",
            f"[{color}]{issue.severity}[/{color}]",
            str(issue.code),
            issue.message,
        )
    console.print(table)
    console.print(
        f"Checked {report.checked} post(s): "
        f"{len(report.errors)} error(s), {len(report.warnings)} warning(s)"
    )


@app.command()
def check(
    directory: PostsDirOption = None,
    config_path: ConfigOption = None,
    strict: Annotated[
        Optional[bool],
        typer.Option("--strict/--no-strict", help="Treat warnings as errors."),
    ] = None,
) -> None:
    """Check every post's file name, header and code fences."""
    config = _config(config_path, posts_dir=directory, strict=strict)
    posts_dir = config.posts_dir
    if not posts_dir.is_dir():
        console.print(f"[red]Error:[/red] Posts directory not found: {posts_dir}")
        raise typer.Exit(2)

    report = validate_directory(posts_dir, config)
    _print_report(report, posts_dir)
    if not report.ok:
        raise typer.Exit(1)


@app.command("list")
def list_cmd(
    directory: PostsDirOption = None,
    config_path: ConfigOption = None,
    oldest_first: Annotated[
        bool,
        typer.Option("--oldest-first", help="List in chronological order."),
    ] = False,
) -> None:
    """List posts, newest first."""
    config = _config(config_path, posts_dir=directory)
    result = PostLoader(config.posts).load_all(config.posts_dir)

    posts = list(reversed(result.posts)) if oldest_first else result.posts
    if not posts:
        console.print("[yellow]No posts found.[/yellow]")
        console.print(f"Searched in: {config.posts_dir}")
    else:
        table = Table()
        table.add_column("Date", no_wrap=True)
        table.add_column("Title")
        table.add_column("Layout")
        table.add_column("URL")
        for post in posts:
            table.add_row(post.date.isoformat(), post.title, post.layout, post.url)
        console.print(table)

    for path, error in result.failures.items():
        console.print(f"[yellow]Skipped[/yellow] {path.name}: {error.cause}")


@app.command()
def index(
    directory: PostsDirOption = None,
    config_path: ConfigOption = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Markdown index file to write."),
    ] = None,
    manifest: Annotated[
        Optional[Path],
        typer.Option("--manifest", "-m", help="Also write a JSON manifest here."),
    ] = None,
    title: Annotated[
        Optional[str],
        typer.Option("--title", help="Index page heading."),
    ] = None,
) -> None:
    """Write a reverse-chronological index of all posts."""
    config = _config(
        config_path,
        posts_dir=directory,
        index_output=output,
        manifest=manifest,
        index_title=title,
    )
    result = PostLoader(config.posts).load_all(config.posts_dir)
    if result.failures:
        for path, error in result.failures.items():
            console.print(f"[red]Error:[/red] {path.name}: {error.cause}")
        console.print("Run 'postshelf check' for details.")
        raise typer.Exit(1)

    index_path = write_index(result.posts, Path(config.index.output), config.index.title)
    console.print(f"[green]Wrote index of {len(result.posts)} post(s) to {index_path}[/green]")
    if config.index.manifest:
        manifest_path = write_manifest(result.posts, Path(config.index.manifest))
        console.print(f"[green]Wrote manifest to {manifest_path}[/green]")


@app.command()
def new(
    title: Annotated[str, typer.Argument(help="Post title.")],
    directory: PostsDirOption = None,
    config_path: ConfigOption = None,
    on_date: Annotated[
        Optional[str],
        typer.Option("--date", help="Publication date (YYYY-MM-DD). Defaults to today."),
    ] = None,
    layout: Annotated[
        Optional[str],
        typer.Option("--layout", "-l", help="Layout name for the header."),
    ] = None,
) -> None:
    """Create a new post with a layout/title header."""
    config = _config(config_path, posts_dir=directory, layout=layout)

    post_date: date | None = None
    if on_date:
        try:
            post_date = date.fromisoformat(on_date)
        except ValueError:
            console.print(f"[red]Error:[/red] Invalid date format: {on_date}")
            console.print("Use YYYY-MM-DD format (e.g., 2016-11-26)")
            raise typer.Exit(1) from None

    try:
        path = new_post(
            config.posts_dir,
            title,
            on_date=post_date,
            layout=config.posts.default_layout,
            extension=config.posts.extensions[0],
        )
    except PostshelfError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from None

    console.print(f"[green]Created[/green] {path}")


if __name__ == "__main__":
    app()

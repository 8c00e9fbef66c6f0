"""CLI entry point for Refdoc."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from refdoc.config import ProjectConfig, load_config
from refdoc.core.builder import DocBuilder, Project
from refdoc.core.exceptions import RefdocError
from refdoc.core.models import SymbolKind
from refdoc.sources import PhpSource

app = typer.Typer(
    name="refdoc",
    help="Cross-linked Markdown reference pages from PHP docblocks.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def fail(error: Exception) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {error}")
    return typer.Exit(code=1)


def load_project(path: Path, config_path: Path | None = None) -> Project:
    """Build the project rooted at ``path`` without writing pages."""
    config = load_config(path, config_path)
    return DocBuilder(config).build()


@app.command()
def build(
    path: Annotated[Path, typer.Argument(help="Project root")] = Path("."),
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Output directory (default: docs/)")
    ] = None,
    namespace: Annotated[
        str | None, typer.Option("--namespace", "-n", help="Only document this namespace")
    ] = None,
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to refdoc.yaml")
    ] = None,
    exclude: Annotated[
        list[str] | None, typer.Option("--exclude", "-e", help="Patterns to exclude")
    ] = None,
    manifest: Annotated[
        Path | None, typer.Option("--manifest", "-m", help="Read symbols from a JSON manifest")
    ] = None,
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output stats as JSON")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Generate reference pages for a project."""
    setup_logging(verbose)
    path = path.resolve()

    try:
        config: ProjectConfig = load_config(path, config_path)
        config.override(output=output, namespace=namespace, exclude=exclude, manifest=manifest)
        builder = DocBuilder(config)

        if config.manifest is not None or output_json:
            project = builder.build()
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console,
            ) as progress:
                task = progress.add_task(f"Scanning [cyan]{path.name}[/]", total=None)

                def on_progress(file: Path, current: int, total: int) -> None:
                    progress.update(task, total=total, completed=current)
                    try:
                        rel_path: Path | str = file.relative_to(path)
                    except ValueError:
                        rel_path = file.name
                    progress.update(task, description=f"[cyan]{rel_path}[/]")

                source = PhpSource(path, config.exclude, on_progress=on_progress)
                project = builder.build(source)

        stats = builder.write(project)
    except RefdocError as e:
        raise fail(e) from e

    if output_json:
        print(json.dumps(stats.as_dict()))
        return

    console.print("[green]Done![/green]")
    console.print(f"  Symbols documented: {stats.symbols}")
    console.print(f"  Pages written: {stats.pages} ([cyan]{config.output_dir}[/])")
    console.print(f"  References: {stats.references}")

    if stats.skipped:
        console.print(f"  [dim]Skipped: {stats.skipped}[/]")
    if stats.ignored:
        console.print(f"  [dim]Ignored: {stats.ignored}[/]")
    if stats.unresolved:
        console.print(f"  [dim]Unresolved references: {stats.unresolved}[/]")
    if stats.errors:
        console.print(f"  [red]Errors: {len(stats.errors)}[/red]")
        for error in stats.errors:
            console.print(f"    {error}")


@app.command()
def symbols(
    query: Annotated[str, typer.Argument(help="Substring of the symbol name")] = "",
    kind: Annotated[
        str | None,
        typer.Option("--kind", "-k", help="Filter by kind: class, interface, trait, function"),
    ] = None,
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to refdoc.yaml")
    ] = None,
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """List documented symbols."""
    setup_logging()
    try:
        kind_filter = SymbolKind(kind) if kind else None
    except ValueError as e:
        raise fail(e) from e

    try:
        project = load_project(Path(".").resolve(), config_path)
    except RefdocError as e:
        raise fail(e) from e

    documents = project.find(query, kind_filter)

    if output_json:
        result = [
            {
                "name": d.name,
                "kind": d.kind.value,
                "title": d.record.title,
                "page": d.page,
            }
            for d in documents
        ]
        print(json.dumps(result))
        return

    if not documents:
        console.print(f"No matches for '[cyan]{query}[/cyan]'")
        return
    for document in documents:
        console.print(f"[cyan]{document.name}[/cyan] ({document.kind.value})")
        if document.record.title:
            console.print(f"  {document.record.title}")
        console.print(f"  [dim]{document.page}[/]")


@app.command()
def resolve(
    symbol: Annotated[str, typer.Argument(help="Symbol whose imports apply")],
    type_text: Annotated[str, typer.Argument(metavar="TYPE", help="Type annotation to resolve")],
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to refdoc.yaml")
    ] = None,
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Resolve a type annotation as written inside a symbol."""
    setup_logging()
    try:
        project = load_project(Path(".").resolve(), config_path)
        resolution = project.resolve(symbol, type_text)
    except (RefdocError, ValueError) as e:
        raise fail(e) from e

    if output_json:
        print(json.dumps({"text": resolution.text, "references": resolution.references}))
        return

    console.print(f"[bold]{resolution.text}[/]")
    for reference in resolution.references:
        marker = "[green]known[/]" if project.is_known(reference) else "[dim]external[/]"
        console.print(f"  {reference} {marker}")


@app.command()
def link(
    from_name: Annotated[str, typer.Argument(metavar="FROM", help="Symbol whose page links")],
    to_name: Annotated[str, typer.Argument(metavar="TO", help="Symbol being linked to")],
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to refdoc.yaml")
    ] = None,
) -> None:
    """Print the relative link from one symbol's page to another's."""
    setup_logging()
    try:
        project = load_project(Path(".").resolve(), config_path)
    except RefdocError as e:
        raise fail(e) from e

    path = project.link_path(from_name, to_name)
    if path is None:
        err_console.print(f"[yellow]{to_name} is not linkable[/]")
        raise typer.Exit(code=1)
    print(path)


if __name__ == "__main__":
    app()

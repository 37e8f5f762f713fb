from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from quire.build import build_site, publish_site
from quire.core.config import QuireConfig
from quire.core.exceptions import QuireError
from quire.core.logging import configure_logging
from quire.core.pipeline import BuildResult
from quire.core.routes import output_paths
from quire.core.rss import feed_to_xml_string

app = typer.Typer(name="quire", help="Quire - validate content collections and build the static site.")

console = Console()

SiteRootOption = typer.Option(Path("."), "--site-root", "-r", help="Root directory of the site.")


def _report(exc: QuireError) -> None:
    console.print(f"[bold red]Build failed:[/] {escape(str(exc))}", highlight=False)


def _run(site_root: Path) -> tuple[QuireConfig, BuildResult]:
    configure_logging()
    try:
        config = QuireConfig.load(site_root.resolve())
        return config, build_site(config)
    except QuireError as exc:
        _report(exc)
        raise typer.Exit(code=1) from exc


@app.command()
def build(site_root: Path = SiteRootOption):
    """
    Validate all collections, then write pages and the feed.
    """
    config, result = _run(site_root)
    try:
        written = publish_site(result, config)
    except QuireError as exc:
        _report(exc)
        raise typer.Exit(code=1) from exc

    console.print(f"[bold green]Build complete![/bold green] {len(written)} file(s) in {config.paths.abs_output_dir}")


@app.command()
def check(site_root: Path = SiteRootOption):
    """
    Validate all collections and references without writing output.
    """
    _config, result = _run(site_root)
    for name, records in result.collections.items():
        console.print(f"[bold cyan]{name}[/]: {len(records)} record(s)")
    console.print("[bold green]All collections are valid.[/bold green]")


@app.command()
def routes(site_root: Path = SiteRootOption):
    """
    List every page the build would write.
    """
    config, result = _run(site_root)
    try:
        paths = output_paths(result.routes, config.routes.prefixes())
    except QuireError as exc:
        _report(exc)
        raise typer.Exit(code=1) from exc

    table = Table(title="Routes")
    table.add_column("Collection", style="bold cyan")
    table.add_column("Slug")
    table.add_column("Output")
    for path, record in paths.items():
        table.add_row(record.collection, record.slug or record.id, path.as_posix())
    console.print(table)


@app.command()
def feed(site_root: Path = SiteRootOption):
    """
    Print the RSS feed to standard output.
    """
    _config, result = _run(site_root)
    if result.feed is None:
        console.print("[bold red]No posts collection is declared.[/]")
        raise typer.Exit(code=1)
    typer.echo(feed_to_xml_string(result.feed))


if __name__ == "__main__":
    app()

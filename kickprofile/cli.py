"""Command-line interface for kickprofile."""

import asyncio
import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from kickprofile import Resolver, ResolverConfig, __version__
from kickprofile.core.exporter import batch_item_to_dict
from kickprofile.models.result import BatchItem

app = typer.Typer(
    name="kickprofile",
    help="Kick channel profile resolver",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"kickprofile version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """kickprofile - Kick channel profile resolver."""
    pass


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (config default if unset)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (config default if unset)"),
):
    """Run the HTTP server."""
    import uvicorn

    from kickprofile.api import create_app

    config = ResolverConfig()
    if host is not None:
        config.host = host
    if port is not None:
        config.port = port

    console.print(f"Server running on http://localhost:{config.port}")
    console.print(f"   - Menu:  http://localhost:{config.port}/")
    console.print(f"   - Game:  http://localhost:{config.port}/game")
    console.print(f"   - Debug: http://localhost:{config.port}/_debug")
    uvicorn.run(create_app(config), host=config.host, port=config.port)


@app.command()
def lookup(
    users: list[str] = typer.Argument(..., help="Channel URLs, handles or slugs"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table"),
):
    """Resolve one or more channels."""
    config = ResolverConfig()

    async def run() -> list[BatchItem]:
        async with Resolver(config) as resolver:
            return await resolver.resolve_many(users)

    results = asyncio.run(run())

    if not results:
        console.print("[red]No valid channel slugs given[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps([batch_item_to_dict(r) for r in results]))
        return

    _print_results(results)


@app.command()
def players():
    """List configured channels."""
    for slug in ResolverConfig().channels:
        console.print(slug)


def _print_results(results: list[BatchItem]):
    """Print resolved profiles as a table."""
    table = Table(title="Kick channels")
    table.add_column("Slug", style="dim")
    table.add_column("Display Name")
    table.add_column("Followers", justify="right")
    table.add_column("Sources")

    for item in results:
        if not item.ok or item.data is None:
            table.add_row(item.slug, f"[red]{item.error}[/red]", "-", "-")
            continue

        p = item.data
        followers = f"{p.followers:,}" if p.followers is not None else "-"
        sources = ", ".join(f"{k}={v}" for k, v in p.sources.items() if v)
        table.add_row(p.slug, p.display_name, followers, sources)

    console.print(table)


if __name__ == "__main__":
    app()

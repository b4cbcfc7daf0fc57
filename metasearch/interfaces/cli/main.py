"""
CLI Main - Typer-based command-line interface.

Usage:
    metasearch search "rust async runtime comparison"
    metasearch classify "比較 Rust 和 Go 的效能差異"
    metasearch web "linux kernel" --category it
    metasearch serve
"""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from metasearch.config import MetaSearchError, get_settings
from metasearch.domains.search import SearchQuery
from metasearch.interfaces.services import build_router, build_services

app = typer.Typer(
    name="metasearch",
    help="MetaSearch - Confidence-gated tiered web search",
    add_completion=False,
)
console = Console()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _truncate(text: str | None, limit: int = 120) -> str:
    if not text:
        return ""
    return text if len(text) <= limit else text[: limit - 3] + "..."


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    limit: int = typer.Option(10, "--limit", "-n", help="Results to display"),
) -> None:
    """Run a tiered search (L1 -> L2 -> L3 as confidence requires)."""
    asyncio.run(_search_async(query, limit))


async def _search_async(query: str, limit: int) -> None:
    services = build_services(get_settings())

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task("Searching...", total=None)
            decision = services.router.route(query)
            result = await services.retrieval.search(query)
    except MetaSearchError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)
    finally:
        await services.aclose()

    console.print(
        Panel(
            f"[bold]Tier:[/bold] {result.tier_used.value}"
            f"{' (cached)' if result.cache_hit else ''}\n"
            f"[bold]Confidence:[/bold] {result.confidence:.2f}\n"
            f"[bold]Cost:[/bold] ${result.cost_estimate:.3f}\n"
            f"[bold]Complexity:[/bold] {decision.complexity.value} "
            f"[dim]({decision.strategy.value}, {decision.model})[/dim]",
            title=f"Results for: {query}",
        )
    )
    if result.cache_error:
        console.print(f"[yellow]Warning:[/yellow] result not cached: {result.cache_error}")
    if result.refined_query:
        console.print(f"[dim]Refined query: {result.refined_query}[/dim]")

    if not result.results:
        console.print("[yellow]No results found[/yellow]")
        return

    table = Table()
    table.add_column("#", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("URL", style="blue")
    table.add_column("Snippet")
    for i, item in enumerate(result.results[:limit], 1):
        table.add_row(str(i), item.title, item.url, _truncate(item.snippet or item.content))
    console.print(table)


@app.command()
def classify(
    query: str = typer.Argument(..., help="Query to classify"),
) -> None:
    """Show the complexity, strategy and model the router picks."""
    decision = build_router(get_settings()).route(query)

    table = Table(title="Routing Decision")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Complexity", decision.complexity.value)
    table.add_row("Strategy", decision.strategy.value)
    table.add_row("Model tier", decision.model_tier.value)
    table.add_row("Model", decision.model)
    console.print(table)


@app.command()
def web(
    query: str = typer.Argument(..., help="Search query"),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Number of results"),
    category: str | None = typer.Option(None, "--category", "-c", help="SearXNG category"),
    language: str | None = typer.Option(None, "--language", "-l", help="Result language"),
    time_range: str | None = typer.Option(None, "--time-range", "-t", help="day, week, month or year"),
) -> None:
    """Search through the SearXNG meta-search instance."""
    asyncio.run(_web_async(query, limit, category, language, time_range))


async def _web_async(
    query: str,
    limit: int | None,
    category: str | None,
    language: str | None,
    time_range: str | None,
) -> None:
    settings = get_settings()
    services = build_services(settings)
    limit = limit or settings.default_num_results
    search_query = SearchQuery(
        query=query,
        num_results=limit,
        category=category,
        language=language,
        time_range=time_range,
    )

    try:
        response = await services.searxng.search(search_query)
    except MetaSearchError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)
    finally:
        await services.aclose()

    console.print(
        f"\n[green]{len(response.results)} results[/green] "
        f"[dim]in {response.elapsed_seconds * 1000:.0f}ms "
        f"from {', '.join(response.engines_used) or 'no engines'}[/dim]\n"
    )

    table = Table()
    table.add_column("Title", style="cyan")
    table.add_column("URL", style="blue")
    table.add_column("Engine", style="magenta")
    for item in response.results[:limit]:
        table.add_row(item.title, item.url, item.engine)
    console.print(table)


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Host to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to bind"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print("\n[green]Starting MetaSearch API server[/green]")
    console.print(f"[dim]http://{host}:{port}[/dim]\n")

    uvicorn.run(
        "metasearch.interfaces.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


@app.command()
def version() -> None:
    """Show version information."""
    from metasearch import __version__

    console.print(f"MetaSearch v{__version__}")


def main() -> None:
    """CLI entry point."""
    configure_logging()
    app()


if __name__ == "__main__":
    main()

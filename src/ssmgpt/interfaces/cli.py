"""Command-line interface for the SSM GPT Slack bot.

Commands:
- serve: Run the Slack event and static asset server
- ask: Answer a question through the full pipeline
- search: Show the chunks retrieved for a query
- info: Show configuration and corpus statistics
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ssmgpt.config.loader import get_default_config_path, get_default_env_file, load_config
from ssmgpt.config.schema import AppConfig
from ssmgpt.observability.logging import configure_logging, get_logger
from ssmgpt.providers.base import ProviderError
from ssmgpt.storage.base import CorpusLoadError

app = typer.Typer(
    name="ssmgpt",
    help="Slack coaching assistant answering from the Altitude knowledge base",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


def _build_pipeline(config: AppConfig):
    """Load the corpus and create the pipeline, exiting on startup errors."""
    from ssmgpt.service import build_pipeline

    try:
        return build_pipeline(config)
    except CorpusLoadError as e:
        console.print(f"[red]Failed to load corpus: {e.message}[/red]")
        logger.error("corpus_load_failed", error=e.message)
        raise typer.Exit(1)
    except (ProviderError, ValueError) as e:
        console.print(f"[red]Error creating providers: {str(e)}[/red]")
        raise typer.Exit(1)


@app.command()
def serve(
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (overrides config)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (overrides config)"),
):
    """Run the Slack bot HTTP server."""
    import uvicorn

    from ssmgpt.interfaces.server import create_app

    config = _load_config(config_file)

    if not config.slack.bot_token or not config.slack.signing_secret:
        console.print("[red]Slack bot token and signing secret are required to serve[/red]")
        raise typer.Exit(1)

    pipeline = _build_pipeline(config)
    http_app = create_app(config, pipeline)

    host = host or config.server.host
    port = port or config.server.port
    logger.info(
        "server_starting",
        host=host,
        port=port,
        corpus_chunks=len(pipeline.retriever.corpus),
        command=config.slack.command,
    )
    console.print(f"[green]SSM GPT Slack bot listening on {host}:{port}[/green]")
    uvicorn.run(http_app, host=host, port=port, log_level=config.log_level.value.lower())


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question to answer"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
):
    """Ask a question and print the rendered answer."""
    asyncio.run(_ask_async(question, config_file))


async def _ask_async(question: str, config_file: Optional[Path]):
    """Async implementation of ask command."""
    config = _load_config(config_file)
    pipeline = _build_pipeline(config)

    try:
        console.print("[cyan]Retrieving relevant information...[/cyan]")
        result = await pipeline.answer(question)

        if not result.has_context:
            console.print("[yellow]No relevant context found; answer is ungrounded[/yellow]")

        for i, segment in enumerate(result.segments, 1):
            if len(result.segments) > 1:
                console.print(f"[bold cyan]Segment {i}/{len(result.segments)}[/bold cyan]")
            console.print(segment, markup=False)

        if result.sources:
            console.print("\n[dim]Sources: " + ", ".join(dict.fromkeys(r.chunk.source for r in result.sources)) + "[/dim]")

    except ProviderError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        logger.error("ask_error", error=e.message, provider=e.provider)
        raise typer.Exit(1)
    finally:
        await pipeline.close()


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    top_k: Optional[int] = typer.Option(None, "--top-k", "-k", help="Number of results (defaults to config)"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
):
    """Show the chunks retrieved for a query."""
    asyncio.run(_search_async(query, top_k, config_file))


async def _search_async(query: str, top_k: Optional[int], config_file: Optional[Path]):
    """Async implementation of search command."""
    config = _load_config(config_file)

    if top_k is not None and top_k < 1:
        console.print("[red]Error: --top-k must be greater than 0[/red]")
        raise typer.Exit(1)

    pipeline = _build_pipeline(config)

    try:
        results = await pipeline.search(query, top_k=top_k)

        if not results:
            console.print("[yellow]No results found[/yellow]")
            return

        table = Table(title=f"Top {len(results)} chunks")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Similarity", style="green", justify="right")
        table.add_column("Source", style="cyan")
        table.add_column("Text")

        for i, result in enumerate(results, 1):
            text = result.chunk.text.replace("\n", " ")
            table.add_row(
                str(i),
                f"{result.similarity:.4f}",
                result.chunk.source,
                text[:120] + ("..." if len(text) > 120 else ""),
            )

        console.print(table)

    except ProviderError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        logger.error("search_error", error=e.message, provider=e.provider)
        raise typer.Exit(1)
    finally:
        await pipeline.close()


@app.command()
def info(
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
):
    """Show configuration and corpus statistics."""
    from ssmgpt.service import load_corpus

    config = _load_config(config_file)

    table = Table(title="SSM GPT Information")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Log Level", config.log_level.value)
    table.add_row("Embedding Model", config.embedding.model_name)
    table.add_row("LLM Model", config.llm.model_name)
    table.add_row("Top K", str(config.retrieval.top_k))
    table.add_row("Question Enhancement", "on" if config.retrieval.enhance_questions else "off")
    table.add_row("Slash Command", config.slack.command)
    table.add_row("Public Base URL", config.formatting.public_base_url)
    table.add_row("Corpus Path", str(config.corpus.path))

    try:
        corpus = load_corpus(config)
        table.add_row("Corpus Chunks", str(len(corpus)))
        table.add_row("Corpus Sources", str(len(corpus.sources())))
        table.add_row("Embedding Dimension", str(corpus.dimension))
    except CorpusLoadError as e:
        table.add_row("Corpus", f"[red]unavailable: {e.message}[/red]")

    console.print(table)


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """Load configuration and setup logging."""
    if config_file is None:
        config_file = get_default_config_path()

    config = load_config(config_file, env_file=get_default_env_file())
    configure_logging(
        level=config.log_level.value,
        json_logs=config.json_logs,
        log_file=config.log_file,
    )

    return config


if __name__ == "__main__":
    app()

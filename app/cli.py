"""CLI entry point for httpbatch."""

import asyncio
import logging
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from app_factory import create_client, create_runner, initialize_extensions
from configs import AppConfig, app_config
from exceptions import BatchRunnerError
from libs.template import load_environment
from schemas.batch import RequestSpec, TestSummary
from services.report import PrettyReporter, render_json
from services.spec_loader import load_specs

logger = logging.getLogger(__name__)

app = typer.Typer(help="Run a batch of HTTP requests described in a JSON file", no_args_is_help=True)


class OutputFormat(StrEnum):
    PRETTY = "pretty"
    JSON = "json"


def print_error(console: Console, message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)


async def run_batch(
    specs: list[RequestSpec],
    config: AppConfig,
    timeout: int,
    reporter: PrettyReporter | None = None,
    max_concurrency: int | None = None,
) -> TestSummary:
    async with create_client(config, timeout) as client:
        if reporter:
            reporter.start(timeout)
        runner = create_runner(client, max_concurrency=max_concurrency)
        return await runner.run(specs, on_result=reporter.result if reporter else None)


@app.command()
def run(
    file: Annotated[Path, typer.Option("--file", "-f", help="JSON file describing the requests to send")],
    timeout: Annotated[
        int | None,
        typer.Option("--timeout", "-t", min=1, help="Per-request timeout in seconds"),
    ] = None,
    output: Annotated[
        OutputFormat | None,
        typer.Option("--output", "-o", help="Report format"),
    ] = None,
    concurrency: Annotated[
        int | None,
        typer.Option("--concurrency", "-c", min=1, help="Maximum requests in flight (default: unbounded)"),
    ] = None,
    env_file: Annotated[
        Path,
        typer.Option("--env-file", help="Dotenv file providing {{NAME}} placeholder values"),
    ] = Path(".env"),
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log at DEBUG level")] = False,
):
    """Send every request in FILE concurrently and report the outcomes."""
    config = app_config
    initialize_extensions(config, verbose=verbose)
    err_console = Console(stderr=True, soft_wrap=True)

    timeout = timeout or config.REQUEST_TIMEOUT
    output_format = output or OutputFormat(config.OUTPUT_FORMAT)
    max_concurrency = concurrency or config.MAX_CONCURRENCY

    reporter = None
    if output_format == OutputFormat.PRETTY:
        reporter = PrettyReporter(body_preview_limit=config.BODY_PREVIEW_LIMIT)

    try:
        specs = load_specs(file, load_environment(env_file))
        summary = asyncio.run(
            run_batch(specs, config, timeout, reporter=reporter, max_concurrency=max_concurrency)
        )
    except BatchRunnerError as e:
        logger.error(f"Run aborted: {e.detail}")
        print_error(err_console, e.detail)
        raise typer.Exit(code=1)

    if reporter:
        reporter.summary(summary)
    else:
        typer.echo(render_json(summary))


@app.command()
def version():
    """Show the httpbatch version."""
    typer.echo(app_config.CURRENT_VERSION)


def main() -> None:
    app()


if __name__ == "__main__":
    main()

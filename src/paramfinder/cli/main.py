"""
CLI interface for paramfinder.

Takes a raw HTTP request (as saved from Burp or Caido), injects candidate
parameters on the chosen attack surface and prints the synthesized request,
or sends it and prints the response summary.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import structlog
import typer
from rich.console import Console
from rich.markup import escape as rich_escape
from rich.panel import Panel
from rich.table import Table

from paramfinder import __version__
from paramfinder.cli.logging_config import configure_logging
from paramfinder.config.settings import ParamFinderSettings
from paramfinder.core.detector import detect_body_format
from paramfinder.core.errors import InjectionError
from paramfinder.core.models import AttackSurface, Parameter, Request, RequestContext
from paramfinder.core.requester import Requester
from paramfinder.utils.http_client import HttpxTransport, TransportError

logger = structlog.get_logger(__name__)

app = typer.Typer(
    name="paramfinder",
    help="paramfinder - synthesize hidden-parameter probes from a raw HTTP request",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


def _load_request(path: Path, scheme: str) -> Request:
    try:
        return Request.from_raw(path.read_text(encoding="utf-8"), scheme=scheme)
    except (OSError, ValueError) as e:
        console.print(f"[red]Cannot read request: {rich_escape(str(e))}[/red]")
        raise typer.Exit(2)


def _notice(message: str) -> None:
    err_console.print(f"[dim]{rich_escape(message)}[/dim]")


def _parse_params(specs: list[str]) -> list[Parameter]:
    try:
        return [Parameter.parse(spec) for spec in specs]
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--param")


@app.command()
def inject(
    request_file: Annotated[Path, typer.Argument(help="Raw HTTP request file", exists=True, dir_okay=False)],
    param: Annotated[list[str], typer.Option("--param", "-p", help="Parameter as name=value (repeatable)")],
    surface: Annotated[Optional[AttackSurface], typer.Option("--surface", "-s", help="Attack surface")] = None,
    json_path: Annotated[Optional[str], typer.Option("--json-path", help="JSON path to inject into")] = None,
    cache_buster: Annotated[bool, typer.Option("--cache-buster", help="Add a cache buster parameter")] = False,
    content_length: Annotated[bool, typer.Option("--content-length/--no-content-length", help="Recompute Content-Length")] = True,
    scheme: Annotated[str, typer.Option("--scheme", help="Scheme for origin-form requests")] = "https",
    send: Annotated[bool, typer.Option("--send", help="Send the request and show the response")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Verbose logging")] = False,
) -> None:
    """
    Inject parameters into a raw request.

    Prints the synthesized request; with --send, sends it and prints the
    response status and length instead.
    """
    settings = ParamFinderSettings()
    configure_logging(verbose=verbose, level="DEBUG" if verbose else settings.log_level)

    config = settings.miner
    if surface is not None:
        config.attack_type = surface
    if json_path is not None:
        config.json_body_path = json_path
    if cache_buster:
        config.add_cache_buster_parameter = True
    config.update_content_length = content_length

    base = _load_request(request_file, scheme)
    parameters = _parse_params(param)

    async def _run() -> None:
        async with HttpxTransport(settings.http) as transport:
            requester = Requester(config, transport, log_sink=_notice)
            if not send:
                built = requester.build_request(base, parameters, RequestContext.DISCOVERY)
                typer.echo(built.to_raw())
                return
            response = await requester.send_request_with_params(base, parameters, RequestContext.DISCOVERY)
            console.print(
                Panel(
                    f"Status: [bold]{response.status_code}[/bold]\n"
                    f"Length: {response.length}\n"
                    f"Time: {response.elapsed_ms:.0f} ms",
                    title=rich_escape(response.url),
                )
            )

    try:
        asyncio.run(_run())
    except InjectionError as e:
        console.print(f"[red]Injection failed ({e.error_code}): {rich_escape(e.message)}[/red]")
        raise typer.Exit(1)
    except TransportError as e:
        console.print(f"[red]Request failed: {rich_escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def detect(
    request_file: Annotated[Path, typer.Argument(help="Raw HTTP request file", exists=True, dir_okay=False)],
    scheme: Annotated[str, typer.Option("--scheme", help="Scheme for origin-form requests")] = "https",
) -> None:
    """Show the body format detected for a raw request."""
    request = _load_request(request_file, scheme)
    try:
        body_format = detect_body_format(request.body, request.get_header("Content-Type"))
    except InjectionError as e:
        console.print(f"[red]{rich_escape(e.message)}[/red]")
        raise typer.Exit(1)
    console.print(f"Body format: [bold]{body_format.value}[/bold]")


@app.command()
def config() -> None:
    """Show the effective configuration (environment and .env)."""
    settings = ParamFinderSettings()

    table = Table(title="Current Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    miner = settings.miner
    table.add_row("Attack Type", miner.attack_type.value)
    table.add_row("JSON Body Path", miner.json_body_path or "[dim](root)[/dim]")
    table.add_row("Cache Buster", str(miner.cache_buster_enabled))
    table.add_row("Update Content-Length", str(miner.update_content_length))
    table.add_row("Autopilot", str(miner.autopilot_enabled))
    table.add_row("Debug", str(miner.debug))
    table.add_row("HTTP Timeout", f"{settings.http.timeout}s")
    table.add_row("Proxy", settings.http.proxy or "[dim]none[/dim]")
    table.add_row("Log Level", settings.log_level)

    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold blue]paramfinder[/bold blue] version {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

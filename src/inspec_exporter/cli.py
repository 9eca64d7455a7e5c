"""InSpec Exporter CLI - Main entry point."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from inspec_exporter import __version__
from inspec_exporter.core.exceptions import ConfigurationError
from inspec_exporter.core.logging import configure_logging
from inspec_exporter.core.reload import SettingsSource

app = typer.Typer(
    name="inspec-exporter",
    help="Prometheus exporter running InSpec profiles on demand",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        console.print(f"inspec_exporter v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """InSpec Exporter - compliance results as Prometheus gauges."""
    pass


@app.command()
def serve(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to configuration file"),
    listen_address: Optional[str] = typer.Option(None, help="Address to listen on"),
    port: Optional[int] = typer.Option(None, help="Port to listen on"),
    log_level: Optional[str] = typer.Option(None, help="Log level (DEBUG, INFO, WARNING, ERROR)"),
    log_json: Optional[bool] = typer.Option(None, "--log-json/--no-log-json", help="JSON log output"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write logs to this file"),
) -> None:
    """
    Serve /inspec, /metrics and a landing page.

    Fails at startup if the inspec binary cannot be found.
    """
    from inspec_exporter.scraper import AuditorInvoker
    from inspec_exporter.server import start_server

    source = SettingsSource.from_file_or_default(config)
    settings = source.current()

    configure_logging(
        level=log_level or settings.log_level,
        json_format=settings.log_json if log_json is None else log_json,
        log_file=str(log_file) if log_file else settings.log_file or None,
    )

    if not AuditorInvoker(settings.inspec_path).is_available():
        console.print(f"[red]Error: inspec not found at '{settings.inspec_path}'[/red]")
        raise typer.Exit(1)

    host = listen_address or settings.listen_address
    listen_port = port or settings.listen_port

    console.print(Panel.fit(
        f"[bold cyan]Version:[/bold cyan] {__version__}\n"
        f"[bold cyan]Config:[/bold cyan] {source.path or 'defaults'}\n"
        f"[bold cyan]Profiles:[/bold cyan] {settings.profile_path or '-'}\n"
        f"[bold cyan]Listen:[/bold cyan] {host}:{listen_port}",
        title="inspec exporter",
    ))

    start_server(source, host, listen_port)


@app.command()
def scrape(
    target: str = typer.Argument("", help="Host to audit over SSH, empty for the local host"),
    module: str = typer.Option("", "--module", "-m", help="Module to run, all modules if omitted"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to configuration file"),
) -> None:
    """Run one scrape and print the exposition text to stdout."""
    from inspec_exporter.scraper import build_collectors, render

    settings = SettingsSource.from_file_or_default(config).current()
    configure_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        log_file=settings.log_file or None,
    )

    try:
        collectors = build_collectors(target, module, settings)
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    sys.stdout.write(render(collectors).decode("utf-8"))


@app.command()
def modules(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to configuration file"),
) -> None:
    """List the modules a batch scrape would run."""
    from inspec_exporter.core.modules import resolve_all

    settings = SettingsSource.from_file_or_default(config).current()

    try:
        configs = resolve_all(settings)
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Modules")
    table.add_column("Module", style="cyan", no_wrap=True)
    table.add_column("Prefix")
    table.add_column("Profile", overflow="fold")
    table.add_column("SSH")
    table.add_column("Sudo", justify="center")

    for module in configs:
        ssh = module.ssh_user or "-"
        if module.ssh_port:
            ssh += f":{module.ssh_port}"
        table.add_row(
            module.name,
            module.prefix,
            module.path,
            ssh,
            "[green]✓[/green]" if module.need_sudo else "",
        )

    Console().print(table)


if __name__ == "__main__":
    app()

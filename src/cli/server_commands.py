"""Server CLI commands."""

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.users_api.runtime.context import get_config

console = Console()

APP_IMPORT_PATH = "src.users_api.api.http.app:app"


def serve(
    host: str | None = typer.Option(None, help="Host to bind the server to"),
    port: int | None = typer.Option(None, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """
    🚀 Start the Users API server.

    Host and port default to the values in config.yaml. Users live in memory
    and are lost when the server stops.
    """
    import uvicorn

    config = get_config()
    bind_host = host or config.app.host
    bind_port = port or config.app.port

    console.print(
        Panel.fit(
            "[bold green]Starting Users API Server[/bold green]",
            border_style="green",
        )
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{bind_host}:{bind_port}")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    try:
        uvicorn.run(
            APP_IMPORT_PATH,
            host=bind_host,
            port=bind_port,
            reload=reload,
            reload_dirs=["src"] if reload else None,
            log_level=log_level,
            access_log=False,
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped by user[/yellow]")


def show_config() -> None:
    """📋 Show the effective configuration."""
    config = get_config()

    table = Table(title="Users API configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("environment", config.app.environment)
    table.add_row("title", config.app.title)
    table.add_row("base_url", config.app.base_url)
    table.add_row("cors.origins", ", ".join(config.app.cors.origins))
    table.add_row("logging.level", config.logging.level)
    table.add_row("logging.format", config.logging.format)
    table.add_row("logging.file", config.logging.file or "-")
    table.add_row("users.report_filename", config.users.report_filename)

    console.print(table)

"""Main CLI application module."""

import typer

from .server_commands import serve, show_config

# Create the main CLI application
app = typer.Typer(
    help="🛠️  Users API CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="serve")(serve)
app.command(name="config")(show_config)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

"""School CLI application using Typer.

This module provides command-line utilities for the School API:
running the server, creating the database schema and generating
secrets for deployment configuration.
"""

import asyncio
import secrets

import typer
import uvicorn
from pydantic import ValidationError
from rich.console import Console

from school_config.settings import Settings, get_settings
from school_identity.infrastructure.persistence.sqlalchemy import (
    create_engine,
    create_tables,
)

app = typer.Typer(
    name="school",
    help="School - user registration and token authentication API",
    no_args_is_help=True,
)
console = Console()


def _load_settings() -> Settings:
    """Load settings or exit with a readable message."""
    try:
        return get_settings()
    except ValidationError as e:
        console.print("[bold red]Invalid configuration:[/bold red]")
        for error in e.errors():
            field = ".".join(str(p) for p in error["loc"]) or "settings"
            console.print(f"  [red]{field}[/red]: {error['msg']}")
        console.print(
            "[dim]Set JWT_SECRET_KEY (run `school secrets generate`) "
            "in the environment or config/.env.[/dim]"
        )
        raise typer.Exit(code=1) from None


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: int | None = typer.Option(None, help="Bind port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the API server with uvicorn."""
    settings = _load_settings()
    bind_host = host or settings.api_host
    bind_port = port or settings.api_port

    console.print(
        f"[bold green]{settings.app_name} API[/bold green] "
        f"listening on [cyan]{bind_host}:{bind_port}[/cyan]"
    )
    uvicorn.run(
        "school.presentation.api.app:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


# Create db subcommand group
db_app = typer.Typer(
    name="db",
    help="Database utilities",
    no_args_is_help=True,
)
app.add_typer(db_app)


async def _init_database(database_url: str) -> None:
    engine = create_engine(database_url)
    try:
        await create_tables(engine)
    finally:
        await engine.dispose()


@db_app.command("init")
def init_db() -> None:
    """Create all database tables (existing tables are left alone)."""
    settings = _load_settings()
    asyncio.run(_init_database(settings.database_url))
    console.print("[green]Database schema is up to date.[/green]")


# Create secrets subcommand group
secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate a secure JWT signing secret.

    Copy the output to your .env file.
    """
    console.print("\n[bold green]School Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secret for your [bold].env[/bold] configuration file:\n"
    )

    # 64 random bytes, URL-safe, for HS256 signing
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}", soft_wrap=True)

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep this secret secure and never commit it "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above value to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()

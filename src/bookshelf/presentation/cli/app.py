"""Bookshelf CLI application using Typer.

This module provides command-line utilities for the Bookshelf backend:
secret generation for deployment configuration, database setup, admin
bootstrap and running the API server.
"""

import asyncio
import secrets

import typer
import uvicorn
from rich.console import Console

from bookshelf.application.services import UserService
from bookshelf.domain.shared.exceptions import DomainException
from bookshelf.domain.user import UserRole
from bookshelf.infrastructure.persistence.sqlalchemy.database import (
    create_engine,
    create_session_maker,
    create_tables,
)
from bookshelf.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from bookshelf_auth import PasswordHashingService
from bookshelf_config.settings import get_settings

app = typer.Typer(
    name="bookshelf",
    help="Bookshelf - book catalog backend CLI",
    no_args_is_help=True,
)
console = Console()


# Create subcommand groups
secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
db_app = typer.Typer(
    name="db",
    help="Database utilities",
    no_args_is_help=True,
)
users_app = typer.Typer(
    name="users",
    help="User administration",
    no_args_is_help=True,
)
app.add_typer(secrets_app)
app.add_typer(db_app)
app.add_typer(users_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for Bookshelf configuration.

    Generates three required secrets:
    - ACCESS_TOKEN_SECRET: Secret for signing access tokens
    - REFRESH_TOKEN_SECRET: Secret for signing refresh tokens
    - POSTGRES_PASSWORD: Database password

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Bookshelf Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # Two independent 64-byte secrets for HS256; soft_wrap keeps each on one line
    generated = {
        "ACCESS_TOKEN_SECRET": secrets.token_urlsafe(64),
        "REFRESH_TOKEN_SECRET": secrets.token_urlsafe(64),
        "POSTGRES_PASSWORD": secrets.token_urlsafe(32),
    }
    for name, value in generated.items():
        console.print(f"[cyan]{name}[/cyan]={value}", soft_wrap=True)

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]⚠  Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


@db_app.command("init")
def init_database() -> None:
    """Create all missing tables. Existing tables are left untouched."""

    async def _run() -> None:
        engine = create_engine(get_settings().database_url)
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_run())
    console.print("[green]✓ Database schema is up to date[/green]")


async def _set_role(email: str, role: UserRole) -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    try:
        async with create_session_maker(engine)() as session:
            service = UserService(
                user_repository=UserRepositorySQLAlchemy(session),
                password_service=PasswordHashingService(
                    rounds=settings.password_hash_rounds,
                ),
            )
            await service.set_role(email, role)
            await session.commit()
    finally:
        await engine.dispose()


def _change_role(email: str, role: UserRole) -> None:
    try:
        asyncio.run(_set_role(email, role))
    except DomainException as e:
        console.print(f"[red]✗ {e.message}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"[green]✓ {email} is now {role.value}[/green]")


@users_app.command("promote")
def promote(email: str = typer.Argument(..., help="Email of the user")) -> None:
    """Grant the admin role to a user."""
    _change_role(email, UserRole.ADMIN)


@users_app.command("demote")
def demote(email: str = typer.Argument(..., help="Email of the user")) -> None:
    """Revoke the admin role from a user."""
    _change_role(email, UserRole.USER)


@app.command("serve")
def serve(
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the API server with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "bookshelf.presentation.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=reload,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()

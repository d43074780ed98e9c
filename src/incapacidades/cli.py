"""Command-line interface for the Incapacidades API.

This module provides the CLI commands for running and managing
the application.
"""

import asyncio

import click
from sqlalchemy.engine import make_url

from incapacidades import __version__
from incapacidades.core.config import get_settings
from incapacidades.core.logging import configure_logging, get_logger


def _mask(secret: str | None) -> str:
    if not secret:
        return "(not set)"
    return f"{secret[:4]}{'*' * 8}"


@click.group()
@click.version_option(version=__version__, prog_name="incapacidades")
def cli() -> None:
    """Incapacidades API - authentication and user management.

    Settings are read from INCAPACIDADES_* environment variables and .env.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    configure_logging(settings)
    logger = get_logger(__name__)
    logger.info(
        "Starting server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "incapacidades.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command("init-db")
def init_db() -> None:
    """Create database tables and ensure the configured default admin."""
    from incapacidades.infrastructure.persistence.database import (
        close_database,
        get_db_manager,
        init_database,
    )
    from incapacidades.infrastructure.persistence.models import (  # noqa: F401
        TokenBlacklistModel,
        UserModel,
    )

    configure_logging(get_settings())

    async def run() -> None:
        try:
            # init_database skips table creation in production
            await get_db_manager().create_tables()
            await init_database()
        finally:
            await close_database()

    try:
        asyncio.run(run())
    except RuntimeError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from e

    click.echo("Database initialized successfully.")


@cli.command("create-admin")
@click.option("--email", type=str, default=None, help="Administrator email")
@click.option("--password", type=str, default=None, help="Administrator password")
def create_admin(email: str | None, password: str | None) -> None:
    """Create an administrator, or promote and reset an existing user."""
    from incapacidades.domain.services import AdminBootstrapError, ensure_default_admin
    from incapacidades.infrastructure.persistence.database import (
        close_database,
        get_db_manager,
    )

    settings = get_settings()
    configure_logging(settings)

    if email is None:
        email = click.prompt("Admin email", type=str)
    if password is None:
        password = click.prompt("Admin password", hide_input=True, confirmation_prompt=True)

    async def run():
        db = get_db_manager()
        try:
            await db.create_tables()
            async with db.session() as session:
                return await ensure_default_admin(
                    session, settings, email=email, password=password
                )
        finally:
            await close_database()

    try:
        created, admin = asyncio.run(run())
    except AdminBootstrapError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1) from e

    action = "created" if created else "updated"
    click.echo(
        f"\nAdministrator {action} successfully!\n"
        f"  User ID: {admin.id}\n"
        f"  Email:   {admin.email}\n"
    )


@cli.command("purge-tokens")
def purge_tokens() -> None:
    """Delete denylist entries for refresh tokens that have already expired."""
    from incapacidades.infrastructure.persistence.database import (
        close_database,
        get_db_manager,
    )
    from incapacidades.infrastructure.persistence.repositories import (
        TokenBlacklistRepository,
    )

    configure_logging(get_settings())
    logger = get_logger(__name__)

    async def run() -> int:
        db = get_db_manager()
        try:
            await db.create_tables()
            async with db.session() as session:
                removed = await TokenBlacklistRepository(session).purge_expired()
                await session.commit()
                return removed
        finally:
            await close_database()

    removed = asyncio.run(run())
    logger.info("Expired denylist entries purged", removed=removed)
    click.echo(f"Removed {removed} expired token entries.")


@cli.command()
def info() -> None:
    """Display configuration with secrets masked."""
    settings = get_settings()

    click.echo(f"""
{settings.app_name} v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {make_url(settings.database_url).render_as_string(hide_password=True)}
  Pool Size:    {settings.db_pool_size}
  Echo:         {settings.db_echo}

Security:
  Access Secret:  {_mask(settings.access_token_secret)}
  Refresh Secret: {_mask(settings.refresh_token_secret)}
  Token Expire:   {settings.access_token_expire_minutes} minutes
  Refresh Exp:    {settings.refresh_token_expire_days} days
  Revocation:     {settings.refresh_token_revocation_enabled}

Default Admin:
  Email:        {settings.default_admin_email or '(not set)'}
  Password:     {_mask(settings.default_admin_password)}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> None:
    """Main entry point for the CLI."""
    cli()

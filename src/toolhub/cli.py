"""Command-line interface for ToolHub.

This module provides the CLI commands for running and managing
the ToolHub application.
"""

from typing import NoReturn

import click

from toolhub import __version__
from toolhub.core.config import get_settings
from toolhub.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="ToolHub")
def cli() -> None:
    """ToolHub - REST API for users and a catalogue of tools.

    Settings are read from the environment and from .env / .env.local.
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
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the ToolHub server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    if settings.sqlalchemy_url.startswith("sqlite") and bind_workers > 1:
        click.echo("Error: SQLite does not support multiple worker processes.", err=True)
        raise SystemExit(1)

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting ToolHub server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "toolhub.infrastructure.api.app:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.effective_log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt",
)
def init_db(force: bool) -> None:
    """Create all database tables.

    Tables are also created at startup unless DB_AUTO_CREATE is off.
    """
    import asyncio

    from toolhub.infrastructure.persistence.database import DatabaseManager

    settings = get_settings()
    configure_logging(settings)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        db = DatabaseManager(settings)
        try:
            if not await db.check_connection():
                click.echo("Error: could not connect to the database.", err=True)
                raise SystemExit(1)
            await db.create_tables()
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    asyncio.run(initialize())


@cli.command()
@click.option("--email", type=str, default=None, help="Owner email (prompts if not provided)")
@click.option(
    "--password",
    type=str,
    default=None,
    help="Owner password (prompts if not provided)",
)
@click.option("--first-name", type=str, default=None, help="Owner first name")
@click.option("--last-name", type=str, default=None, help="Owner last name")
def create_owner(
    email: str | None,
    password: str | None,
    first_name: str | None,
    last_name: str | None,
) -> None:
    """Create a user with the owner role.

    Owners are the only users allowed to create other users through the API.
    """
    import asyncio

    from toolhub.domain.entities import UserRole
    from toolhub.domain.services import EmailAlreadyRegisteredError, UserService
    from toolhub.infrastructure.persistence.database import DatabaseManager

    settings = get_settings()
    configure_logging(settings)
    logger = get_logger(__name__)

    if email is None:
        email = click.prompt("Owner email", type=str)
    if "@" not in email or "." not in email.split("@")[-1]:
        click.echo("Error: Invalid email format", err=True)
        raise SystemExit(1)
    if password is None:
        password = click.prompt("Owner password", hide_input=True, confirmation_prompt=True)
    if first_name is None:
        first_name = click.prompt("First name", default=settings.owner_first_name)
    if last_name is None:
        last_name = click.prompt("Last name", default=settings.owner_last_name)

    async def create() -> None:
        db = DatabaseManager(settings)
        try:
            async with db.session() as session:
                owner = await UserService(session).create_user(
                    first_name=first_name,
                    last_name=last_name,
                    email=email,
                    password=password,
                    role=UserRole.OWNER,
                )
        except EmailAlreadyRegisteredError:
            click.echo(f"Error: {email} is already registered", err=True)
            raise SystemExit(1)
        finally:
            await db.disconnect()

        click.echo(
            f"\nOwner created successfully!\n"
            f"  User ID: {owner.id}\n"
            f"  Email:   {owner.email}\n"
        )
        logger.info("Owner created via CLI", user_id=owner.id, email=owner.email)

    asyncio.run(create())


@cli.command()
def info() -> None:
    """Display ToolHub configuration."""
    from sqlalchemy.engine import make_url

    settings = get_settings()
    database_url = make_url(settings.sqlalchemy_url).render_as_string(hide_password=True)

    click.echo(f"""
ToolHub v{settings.app_version}
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
  URL:          {database_url}
  Pool Size:    {settings.db_pool_size}
  Auto Create:  {settings.db_auto_create}

Security:
  JWT Algorithm: {settings.jwt_alg}
  Token Expire:  {settings.access_token_expire_minutes} minutes

Logging:
  Level:        {settings.effective_log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `toolhub` command is run
    or when using `python -m toolhub`.
    """
    cli()

#!/usr/bin/env python3
"""
Main CLI entry point for the staffdir backend.
"""

import asyncio
import os
import sys

import click
import uvicorn

from staffdir import __version__
from staffdir.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="staffdir")
def cli() -> None:
    """staffdir CLI - run the API and manage directory data."""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
@click.option("--port", default=8090, type=int, help="Port to bind to (default: 8090)")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the staffdir API server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info("Starting staffdir API server", host=host, port=port, reload=reload)

    # The app reads these at import time
    if log_level == "debug":
        os.environ["STAFFDIR_DEBUG"] = "true"
        os.environ["STAFFDIR_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("STAFFDIR_DEBUG", "false")
        os.environ.setdefault("STAFFDIR_LOG_LEVEL", log_level)

    try:
        uvicorn.run(
            "staffdir.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("init-db")
def init_db() -> None:
    """Create all tables from the ORM models (development databases)."""
    from staffdir.database.connection import create_all, dispose_database

    configure_logging()

    async def do_init():
        try:
            await create_all()
        finally:
            await dispose_database()

    try:
        asyncio.run(do_init())
    except Exception as e:
        logger.error("Failed to create tables", error=str(e))
        click.echo(f"✗ Error creating tables: {e}", err=True)
        sys.exit(1)

    click.echo("✓ Tables created")


@cli.command()
@click.option("--count", default=25, type=int, help="Number of demo employees (default: 25)")
def seed(count: int) -> None:
    """Insert demo employees."""
    from staffdir.database.connection import dispose_database, get_async_session
    from staffdir.database.seed_data import seed_employees

    configure_logging()

    async def do_seed() -> int:
        try:
            async with get_async_session() as db:
                return await seed_employees(db, count)
        finally:
            await dispose_database()

    try:
        inserted = asyncio.run(do_seed())
    except Exception as e:
        logger.error("Failed to seed employees", error=str(e))
        click.echo(f"✗ Error seeding employees: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Inserted {inserted} demo employees")


@cli.command("grant-role")
@click.argument("user_id")
@click.argument("role", type=click.Choice(["admin", "employee"]))
def grant_role(user_id: str, role: str) -> None:
    """Set ROLE for USER_ID (the identity provider's subject)."""
    from staffdir.database.connection import dispose_database, get_async_session
    from staffdir.database.seed_data import ensure_user_role

    configure_logging()

    async def do_grant() -> None:
        try:
            async with get_async_session() as db:
                await ensure_user_role(db, user_id, role)
        finally:
            await dispose_database()

    try:
        asyncio.run(do_grant())
    except Exception as e:
        logger.error("Failed to grant role", user_id=user_id, role=role, error=str(e))
        click.echo(f"✗ Error granting role: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ {user_id} is now {role}")


@cli.command("issue-token")
@click.argument("user_id")
@click.option("--hours", default=24, type=int, help="Token lifetime in hours (default: 24)")
@click.option("--email", default=None, help="Email claim to embed")
def issue_token(user_id: str, hours: int, email: str | None) -> None:
    """Print a signed JWT for USER_ID (jwt auth provider only)."""
    from staffdir.auth.adapters.jwt import JWTAuthAdapter
    from staffdir.auth.factory import get_auth_adapter

    try:
        adapter = get_auth_adapter()
    except ValueError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    if not isinstance(adapter, JWTAuthAdapter):
        click.echo("✗ issue-token requires STAFFDIR_AUTH_PROVIDER=jwt", err=True)
        sys.exit(1)

    claims = {"email": email} if email else None
    click.echo(adapter.issue_token(user_id, claims=claims, expires_in_hours=hours))


if __name__ == "__main__":
    cli()

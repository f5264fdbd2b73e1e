#!/usr/bin/env python3
"""
``staffdir-migrate``: Alembic commands against the configured directory database.
"""

import sys
from collections.abc import Callable
from pathlib import Path

import click
from sqlalchemy.engine import make_url

from alembic import command
from alembic.config import Config
from staffdir import __version__
from staffdir.logging import configure_logging, get_logger

from .connection import get_database_url

logger = get_logger(__name__)

PROJECT_DIR = Path(__file__).resolve().parents[3]


def _database_label() -> str:
    return make_url(get_database_url()).render_as_string(hide_password=True)


def get_alembic_config() -> Config:
    """Load alembic.ini from the project root and point it at ``alembic/``."""
    ini_path = PROJECT_DIR / "alembic.ini"
    if not ini_path.exists():
        raise FileNotFoundError(f"alembic.ini not found at {ini_path}")

    config = Config(str(ini_path))
    config.set_main_option("script_location", str(PROJECT_DIR / "alembic"))
    return config


def run_alembic(action: str, fn: Callable[..., None], *args: str) -> None:
    """Run one Alembic command, logging the outcome; exit 1 on failure."""
    try:
        fn(get_alembic_config(), *args)
    except Exception as e:
        logger.error("Migration command failed", action=action, args=list(args), error=str(e))
        sys.exit(1)
    logger.debug("Migration command finished", action=action, args=list(args))


@click.group()
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.version_option(version=__version__, prog_name="staffdir-migrate")
def main(log_level: str) -> None:
    """Manage the staffdir schema (employees, user_roles)."""
    configure_logging(debug=(log_level == "debug"))


@main.command()
@click.argument("revision", default="head")
def upgrade(revision: str) -> None:
    """Apply migrations up to REVISION (default: head)."""
    logger.info("Upgrading staffdir schema", revision=revision, database=_database_label())
    run_alembic("upgrade", command.upgrade, revision)


@main.command()
@click.argument("revision", default="-1")
def downgrade(revision: str) -> None:
    """Revert migrations down to REVISION (default: one step)."""
    logger.info("Downgrading staffdir schema", revision=revision, database=_database_label())
    run_alembic("downgrade", command.downgrade, revision)


@main.command()
def current() -> None:
    """Print the revision the database is at."""
    run_alembic("current", command.current)


@main.command()
def history() -> None:
    """List every known revision."""
    run_alembic("history", command.history)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
CLI entry point for notegraph database migrations.
"""

import os
import sys
from collections.abc import Callable
from pathlib import Path

import click

from alembic import command
from alembic.config import Config
from notegraph import __version__
from notegraph.logging import configure_logging, get_logger

logger = get_logger(__name__)

PROJECT_DIR = Path(__file__).resolve().parent.parent.parent.parent


def get_alembic_config() -> Config:
    """Get Alembic configuration from the project's alembic.ini."""
    alembic_ini = Path(os.getenv("NOTEGRAPH_ALEMBIC_INI", PROJECT_DIR / "alembic.ini"))

    if not alembic_ini.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini}")

    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(alembic_ini.parent / "alembic"))
    return config


def run_alembic(description: str, action: Callable[[Config], None], **log_fields) -> None:
    """Run one alembic command, logging the outcome and exiting non-zero on failure."""
    try:
        config = get_alembic_config()
        logger.info(f"{description} started", **log_fields)
        action(config)
        logger.info(f"{description} completed", **log_fields)
    except Exception as e:
        logger.error(f"{description} failed", error=str(e), **log_fields)
        click.echo(f"✗ {description} failed: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.option(
    "--database-url",
    default=None,
    help="Database to migrate (default: NOTEGRAPH_DATABASE_URL or settings)",
)
@click.version_option(version=__version__, prog_name="notegraph-migrate")
def main(log_level: str, database_url: str | None) -> None:
    """notegraph database migration management."""
    configure_logging(debug=(log_level == "debug"))
    if database_url:
        # alembic/env.py reads the URL from the environment
        os.environ["NOTEGRAPH_DATABASE_URL"] = database_url


@main.command()
@click.argument("revision", default="head")
def upgrade(revision: str) -> None:
    """Upgrade database to a revision (default: head)."""
    run_alembic(
        "Database upgrade", lambda cfg: command.upgrade(cfg, revision), revision=revision
    )


@main.command()
@click.argument("revision", default="-1")
def downgrade(revision: str) -> None:
    """Downgrade database to a revision (default: -1)."""
    run_alembic(
        "Database downgrade", lambda cfg: command.downgrade(cfg, revision), revision=revision
    )


@main.command()
def current() -> None:
    """Show current database revision."""
    run_alembic("Revision lookup", command.current)


@main.command()
def history() -> None:
    """Show migration history."""
    run_alembic("History listing", command.history)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Main CLI entry point for the notegraph server and tools.
"""

import asyncio
import json
import os
import sys

import click
import httpx
import uvicorn

from notegraph import __version__
from notegraph.logging import configure_logging, get_logger

logger = get_logger(__name__)

STORE_CHOICES = click.Choice(["memory", "sql"])


@click.group()
@click.version_option(version=__version__, prog_name="notegraph")
def cli() -> None:
    """notegraph CLI - serve, query and seed the notes graph."""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
@click.option("--port", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option("--store", "store_backend", type=STORE_CHOICES, help="Store backend to serve")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, store_backend: str | None, log_level: str) -> None:
    """Start the notegraph API server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting notegraph API server",
        host=host,
        port=port,
        reload=reload,
        store=store_backend,
        log_level=log_level,
    )

    # The app factory reads settings from the environment, also under reload
    if store_backend:
        os.environ["NOTEGRAPH_STORE_BACKEND"] = store_backend
    if log_level == "debug":
        os.environ["NOTEGRAPH_DEBUG"] = "true"
    else:
        os.environ.setdefault("NOTEGRAPH_DEBUG", "false")
    os.environ.setdefault("NOTEGRAPH_LOG_LEVEL", log_level)

    try:
        uvicorn.run(
            "notegraph.api.app:create_default_app",
            factory=True,
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


@cli.command("exec")
@click.argument("query")
@click.option("--variables", default=None, help="Variables as a JSON object")
@click.option("--operation-name", default=None, help="Operation to run from the document")
@click.option("--store", "store_backend", type=STORE_CHOICES, help="Store backend to run against")
def exec_query(
    query: str, variables: str | None, operation_name: str | None, store_backend: str | None
) -> None:
    """Run QUERY in-process and print the JSON result.

    Queries and mutations are both allowed. Use '-' to read the document
    from stdin.
    """
    from notegraph.graphql.schema import execute, result_envelope
    from notegraph.store.factory import create_note_store

    configure_logging(stream=sys.stderr)

    if query == "-":
        query = sys.stdin.read()

    try:
        variable_values = json.loads(variables) if variables else None
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--variables")

    async def do_exec():
        async with create_note_store(store_backend) as store:
            return await execute(
                store, query, variables=variable_values, operation_name=operation_name
            )

    result = asyncio.run(do_exec())
    click.echo(json.dumps(result_envelope(result), indent="\t", ensure_ascii=False))
    if result.errors:
        sys.exit(1)


@cli.command("query")
@click.argument("query")
@click.option(
    "--url",
    default="http://localhost:8000/graphql",
    help="GraphQL endpoint (default: http://localhost:8000/graphql)",
)
@click.option("--timeout", default=10.0, type=float, help="Request timeout in seconds")
def http_query(query: str, url: str, timeout: float) -> None:
    """Send QUERY to a running server with GET /graphql?query=... and print the body."""
    try:
        response = httpx.get(url, params={"query": query}, timeout=timeout)
    except httpx.HTTPError as e:
        click.echo(f"✗ Request failed: {e}", err=True)
        sys.exit(1)

    click.echo(response.text)
    if response.status_code != 200:
        click.echo(f"✗ Server answered {response.status_code}", err=True)
        sys.exit(1)


@cli.command("schema")
def print_schema_command() -> None:
    """Print the GraphQL schema (SDL)."""
    from notegraph.graphql.schema import print_schema

    click.echo(print_schema())


@cli.command()
@click.option("--database-url", default=None, help="Database URL (default: from settings)")
def seed(database_url: str | None) -> None:
    """Insert the mock users and notes into the database."""
    from notegraph.database.seed_data import seed_mock_data
    from notegraph.store.sql import SqlNoteStore

    configure_logging(stream=sys.stderr)

    async def do_seed():
        async with SqlNoteStore.from_url(database_url) as store:
            async with store.session() as db:
                return await seed_mock_data(db)

    try:
        user_ids = asyncio.run(do_seed())
    except Exception as e:
        logger.error("Failed to seed database", error=str(e))
        click.echo(f"✗ Error seeding database: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Seeded {len(user_ids)} user(s)")
    for username, user_id in user_ids.items():
        click.echo(f"  {user_id}  {username}")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()

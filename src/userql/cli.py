#!/usr/bin/env python3
"""
Main CLI entry point for the userql server.
"""

import json
import os
import sys

import click
import uvicorn

from userql import __version__
from userql.config import settings
from userql.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="userql")
def cli() -> None:
    """userql CLI - run the GraphQL server and query it locally."""
    pass


@cli.command()
@click.option(
    "--host",
    default=settings.api_host,
    help=f"Host to bind to (default: {settings.api_host})",
)
@click.option(
    "--port",
    default=settings.api_port,
    type=int,
    help=f"Port to bind to (default: {settings.api_port})",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the GraphQL API server."""

    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting userql API server",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )

    # A reloading server imports the app in a fresh process that reads settings from env
    if log_level == "debug":
        os.environ["USERQL_DEBUG"] = "true"
    os.environ["USERQL_LOG_LEVEL"] = log_level

    try:
        if reload:
            uvicorn.run(
                "userql.api.app:app",
                host=host,
                port=port,
                reload=True,
                log_level=log_level,
                access_log=True,
            )
        else:
            from userql.api.app import app

            # Importing the app configures logging from settings; apply the CLI choice
            configure_logging(debug=(log_level == "debug"), log_level=log_level)
            uvicorn.run(app, host=host, port=port, log_level=log_level, access_log=True)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command()
@click.argument("document")
@click.option("--variables", default=None, help="Variables as a JSON object")
@click.option("--operation-name", default=None, help="Operation to run in a multi-operation document")
def query(document: str, variables: str | None, operation_name: str | None) -> None:
    """Execute a GraphQL DOCUMENT against the seeded users ('-' reads stdin)."""
    from userql.errors import TransportError
    from userql.graphql.adapter import decode_request, encode_outcome
    from userql.graphql.dispatch import QueryFailure, execute_query

    configure_logging(log_level="warning")

    if document == "-":
        document = click.get_text_stream("stdin").read()

    try:
        variables_value = json.loads(variables) if variables else None
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON ({e})", param_hint="--variables") from e

    body = json.dumps(
        {"query": document, "variables": variables_value, "operationName": operation_name}
    )
    try:
        request = decode_request(body)
    except TransportError as e:
        raise click.UsageError(str(e)) from e

    outcome = execute_query(request)
    click.echo(json.dumps(encode_outcome(outcome), indent=2))

    if isinstance(outcome, QueryFailure):
        sys.exit(1)


@cli.command()
def schema() -> None:
    """Print the GraphQL schema in SDL form."""
    from userql.graphql.schema import schema_sdl

    click.echo(schema_sdl())


@cli.command()
@click.option(
    "--field",
    "fields",
    multiple=True,
    type=click.Choice(["id", "name", "email"]),
    help="Field to include (repeatable; default: all fields)",
)
def users(fields: tuple[str, ...]) -> None:
    """List the seeded users."""
    from userql.store import UserField, get_user_store, select_fields

    configure_logging(log_level="warning")

    selected = [UserField(f) for f in fields] if fields else list(UserField)
    for user in get_user_store():
        click.echo(json.dumps(select_fields(user, selected)))


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()

#!/usr/bin/env python3
"""
Main CLI entry point for the feedgraph server.
"""

import os
import sys

import click
import uvicorn

from feedgraph import __version__
from feedgraph.config import settings
from feedgraph.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="feedgraph")
def cli() -> None:
    """feedgraph CLI - run the API server and inspect its schema."""


@cli.command()
@click.option("--host", default=settings.api_host, show_default=True, help="Host to bind to")
@click.option("--port", default=settings.api_port, type=int, show_default=True, help="Port to bind to")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option("--workers", default=1, type=int, show_default=True, help="Number of worker processes")
@click.option(
    "--database-url",
    envvar="FEEDGRAPH_DATABASE_URL",
    default=None,
    help="Database URL (postgresql:// or sqlite://)",
)
@click.option("--seed", is_flag=True, default=False, help="Seed member types on startup")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    show_default=True,
)
def serve(
    host: str,
    port: int,
    reload: bool,
    workers: int,
    database_url: str | None,
    seed: bool,
    log_level: str,
) -> None:
    """Start the feedgraph API server."""
    configure_logging(debug=(log_level == "debug"), level=log_level)

    # Worker processes build their own Settings from the environment
    os.environ["FEEDGRAPH_LOG_LEVEL"] = log_level
    os.environ.setdefault("FEEDGRAPH_DEBUG", "true" if log_level == "debug" else "false")
    if database_url:
        os.environ["FEEDGRAPH_DATABASE_URL"] = database_url
    if seed:
        os.environ["FEEDGRAPH_SEED_ON_STARTUP"] = "true"
        settings.seed_on_startup = True

    logger.info(
        "Starting feedgraph API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        seed_on_startup=settings.seed_on_startup,
    )

    try:
        if reload or workers > 1:
            uvicorn.run(
                "feedgraph.api.app:app",
                host=host,
                port=port,
                reload=reload,
                workers=1 if reload else workers,
                log_level=log_level,
            )
        else:
            from feedgraph.api.app import app

            uvicorn.run(app, host=host, port=port, log_level=log_level)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("schema")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the SDL to this file instead of stdout",
)
def export_schema(output: str | None) -> None:
    """Print the GraphQL schema in SDL form."""
    from feedgraph.graphql.schema import schema

    sdl = str(schema)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(sdl + "\n")
        click.echo(f"Schema written to {output}")
    else:
        click.echo(sdl)


if __name__ == "__main__":
    cli()

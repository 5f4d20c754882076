#!/usr/bin/env python3
"""
CLI entry point for feedgraph database bootstrap.
"""

import asyncio
import sys

import click

from feedgraph import __version__
from feedgraph.database.connection import (
    create_schema,
    dispose_database,
    drop_schema,
    get_async_session,
    init_database,
)
from feedgraph.database.seed_data import ensure_member_types
from feedgraph.logging import configure_logging, get_logger

logger = get_logger(__name__)


async def _seed() -> list[str]:
    async with get_async_session() as session:
        return await ensure_member_types(session)


async def _init(drop: bool) -> list[str]:
    try:
        if drop:
            await drop_schema()
        await create_schema()
        return await _seed()
    finally:
        await dispose_database()


async def _seed_only() -> list[str]:
    try:
        return await _seed()
    finally:
        await dispose_database()


@click.group()
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.option("--database-url", default=None, help="Override FEEDGRAPH_DATABASE_URL")
@click.version_option(version=__version__, prog_name="feedgraph-db")
def main(log_level: str, database_url: str | None) -> None:
    """feedgraph database management."""
    configure_logging(debug=(log_level == "debug"), level=log_level)
    init_database(database_url, force_reinit=database_url is not None)


@main.command()
@click.option("--drop", is_flag=True, default=False, help="Drop existing tables first")
def init(drop: bool) -> None:
    """Create all tables and seed member types."""
    try:
        created = asyncio.run(_init(drop))
        logger.info("Database initialized", seeded_member_types=created)
    except Exception as e:
        logger.error("Database initialization failed", error=str(e))
        sys.exit(1)


@main.command()
def seed() -> None:
    """Seed member types into an existing schema."""
    try:
        created = asyncio.run(_seed_only())
        logger.info("Seeding completed", seeded_member_types=created)
    except Exception as e:
        logger.error("Seeding failed", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()

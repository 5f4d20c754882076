"""
Tests for member type seeding
"""

import pytest
from sqlalchemy import delete, select

from feedgraph.database.connection import get_async_session
from feedgraph.database.seed_data import ensure_member_types, missing_member_types
from feedgraph.dbmodels import MemberTypes


@pytest.mark.integration
@pytest.mark.asyncio
async def test_seeding_is_idempotent(database):
    async with get_async_session() as session:
        created = await ensure_member_types(session)
        rows = (await session.execute(select(MemberTypes).order_by(MemberTypes.id))).scalars().all()

    assert created == []
    assert [(m.id, m.discount, m.posts_limit_per_month) for m in rows] == [
        ("BASIC", 2.3, 20),
        ("BUSINESS", 7.7, 100),
    ]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_missing_member_types_are_reported_and_restored(database):
    async with get_async_session() as session:
        await session.execute(delete(MemberTypes).where(MemberTypes.id == "BUSINESS"))

    async with get_async_session() as session:
        assert await missing_member_types(session) == ["BUSINESS"]
        assert await ensure_member_types(session) == ["BUSINESS"]

    async with get_async_session() as session:
        assert await missing_member_types(session) == []


@pytest.mark.integration
@pytest.mark.asyncio
async def test_existing_rows_are_not_overwritten(database):
    async with get_async_session() as session:
        row = await session.get(MemberTypes, "BASIC")
        row.discount = 5.0

    async with get_async_session() as session:
        await ensure_member_types(session)
        row = await session.get(MemberTypes, "BASIC")

    assert row.discount == 5.0

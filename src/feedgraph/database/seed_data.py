"""
Reusable seed data functions for database initialization.

Member types are reference data: their identifiers are fixed enum values
assigned here, outside the API's create/update/delete lifecycle.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import MEMBER_TYPE_SEED, MemberTypes
from ..logging import get_logger

logger = get_logger(__name__)


async def ensure_member_types(
    db: AsyncSession,
    member_types: Iterable[dict[str, Any]] = MEMBER_TYPE_SEED,
) -> list[str]:
    """
    Ensure every seeded member type exists in the database.

    Existing rows are left untouched so that operators can tune discounts
    and limits without a reseed overwriting them.

    Args:
        db: Database session
        member_types: Rows to seed, each with id, discount, posts_limit_per_month

    Returns:
        Ids of the member types that were inserted by this call
    """
    rows = list(member_types)
    result = await db.execute(
        select(MemberTypes.id).where(MemberTypes.id.in_([row["id"] for row in rows]))
    )
    existing = set(result.scalars().all())

    created: list[str] = []
    for row in rows:
        if row["id"] in existing:
            logger.debug("Member type already exists", member_type_id=row["id"])
            continue
        db.add(MemberTypes(**row))
        created.append(row["id"])

    if created:
        await db.flush()
        logger.info("Member types seeded", member_type_ids=created)

    return created


async def missing_member_types(db: AsyncSession) -> list[str]:
    """Return the seeded member type ids that are absent from the database."""
    result = await db.execute(select(MemberTypes.id))
    present = set(result.scalars().all())
    return [row["id"] for row in MEMBER_TYPE_SEED if row["id"] not in present]

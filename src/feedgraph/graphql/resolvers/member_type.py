from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry
from sqlalchemy import select

from ...database.connection import get_async_session
from ...dbmodels import MemberTypes
from ...logging import get_logger
from ..context import get_loaders

if TYPE_CHECKING:
    from ..types.member_type import MemberType, MemberTypeId
    from ..types.profile import Profile

logger = get_logger(__name__)


def convert_db_to_graphql_member_type(member_type: MemberTypes) -> MemberType:
    """Convert a database MemberTypes row to the GraphQL Member type."""
    from ..types.member_type import MemberType as MemberTypeType
    from ..types.member_type import MemberTypeId as MemberTypeIdEnum

    return MemberTypeType(
        id=MemberTypeIdEnum(member_type.id),
        discount=member_type.discount,
        posts_limit_per_month=member_type.posts_limit_per_month,
    )


async def resolve_member_types(info: strawberry.Info) -> list[MemberType]:
    async with get_async_session() as session:
        result = await session.execute(select(MemberTypes))
        return [convert_db_to_graphql_member_type(row) for row in result.scalars().all()]


async def resolve_member_type_by_id(info: strawberry.Info, id: MemberTypeId) -> MemberType | None:
    member_type = await get_loaders(info).member_type_loader.load(id.value)
    if member_type is None:
        logger.info("Member type not found", member_type_id=id.value)
        return None
    return convert_db_to_graphql_member_type(member_type)


async def resolve_profile_member_type(profile: Profile, info: strawberry.Info) -> MemberType:
    """Resolve the member type of a profile through the batched loader."""
    member_type = await get_loaders(info).member_type_loader.load(profile.member_type_id.value)
    if member_type is None:
        raise RuntimeError(f"Member type {profile.member_type_id.value} is not seeded")
    return convert_db_to_graphql_member_type(member_type)

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from ...database.connection import get_async_session
from ...dbmodels import Profiles
from ...logging import get_logger
from ..context import get_loaders, invalidate_loaders
from ..errors import NotFoundError, ValidationFailedError

if TYPE_CHECKING:
    from ..mutations.root import ChangeProfileInput, CreateProfileInput
    from ..types.profile import Profile
    from ..types.user import User

logger = get_logger(__name__)


def convert_db_to_graphql_profile(profile: Profiles) -> Profile:
    """Convert a database Profiles row to the GraphQL Profile type."""
    from ..types.member_type import MemberTypeId
    from ..types.profile import Profile as ProfileType

    return ProfileType(
        id=profile.id,
        is_male=profile.is_male,
        year_of_birth=profile.year_of_birth,
        user_id=profile.user_id,
        member_type_id=MemberTypeId(profile.member_type_id),
    )


# Query resolvers
async def resolve_profiles(info: strawberry.Info) -> list[Profile]:
    async with get_async_session() as session:
        result = await session.execute(select(Profiles))
        return [convert_db_to_graphql_profile(profile) for profile in result.scalars().all()]


async def resolve_profile_by_id(info: strawberry.Info, id: UUID) -> Profile | None:
    async with get_async_session() as session:
        profile = await session.get(Profiles, id)

    if profile is None:
        logger.info("Profile not found", profile_id=str(id))
        return None
    return convert_db_to_graphql_profile(profile)


# User field resolvers
async def resolve_user_profile(user: User, info: strawberry.Info) -> Profile | None:
    profile = await get_loaders(info).profile_by_user_loader.load(user.id)
    return convert_db_to_graphql_profile(profile) if profile else None


# Mutations
async def create_profile(info: strawberry.Info, dto: CreateProfileInput) -> Profile:
    """
    Create the profile of a user.

    The referenced user and member type must exist and the user must not
    already have a profile; the store enforces all three.
    """
    async with get_async_session() as session:
        profile = Profiles(
            is_male=dto.is_male,
            year_of_birth=dto.year_of_birth,
            user_id=dto.user_id,
            member_type_id=dto.member_type_id.value,
        )
        session.add(profile)
        try:
            await session.flush()
        except IntegrityError as e:
            logger.info("Profile rejected by store", user_id=str(dto.user_id), error=str(e.orig))
            raise ValidationFailedError(
                "Profile violates a data constraint: the user must exist and have no profile",
                user_id=dto.user_id,
            ) from e

        logger.info("Profile created", profile_id=str(profile.id), user_id=str(dto.user_id))
        created = convert_db_to_graphql_profile(profile)

    invalidate_loaders(info)
    return created


async def change_profile(info: strawberry.Info, id: UUID, dto: ChangeProfileInput) -> Profile:
    async with get_async_session() as session:
        profile = await session.get(Profiles, id)
        if profile is None:
            raise NotFoundError("Profile not found", id=id)

        if dto.is_male is not None:
            profile.is_male = dto.is_male
        if dto.year_of_birth is not None:
            profile.year_of_birth = dto.year_of_birth
        if dto.member_type_id is not None:
            profile.member_type_id = dto.member_type_id.value

        try:
            await session.flush()
        except IntegrityError as e:
            raise ValidationFailedError("Profile violates a data constraint", id=id) from e

        logger.info(
            "Profile updated",
            profile_id=str(id),
            updated_fields=[
                k
                for k, v in {
                    "is_male": dto.is_male,
                    "year_of_birth": dto.year_of_birth,
                    "member_type_id": dto.member_type_id,
                }.items()
                if v is not None
            ],
        )
        changed = convert_db_to_graphql_profile(profile)

    invalidate_loaders(info)
    return changed


async def delete_profile(info: strawberry.Info, id: UUID) -> str:
    async with get_async_session() as session:
        result = await session.execute(delete(Profiles).where(Profiles.id == id))
        if result.rowcount == 0:
            raise NotFoundError("Profile not found", id=id)

    logger.info("Profile deleted", profile_id=str(id))
    invalidate_loaders(info)
    return "Profile deleted"

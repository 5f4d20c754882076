from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry
from sqlalchemy import delete, select

from ...database.connection import get_async_session
from ...dbmodels import Users
from ...logging import get_logger
from ..context import get_loaders, invalidate_loaders
from ..errors import NotFoundError

if TYPE_CHECKING:
    from ..mutations.root import ChangeUserInput, CreateUserInput
    from ..types.user import User

logger = get_logger(__name__)


def convert_db_to_graphql_user(user: Users) -> User:
    """Convert a database Users row to the GraphQL User type."""
    from ..types.user import User as UserType

    return UserType(id=user.id, name=user.name, balance=user.balance)


# Query resolvers
async def resolve_users(info: strawberry.Info) -> list[User]:
    async with get_async_session() as session:
        result = await session.execute(select(Users))
        return [convert_db_to_graphql_user(user) for user in result.scalars().all()]


async def resolve_user_by_id(info: strawberry.Info, id: UUID) -> User | None:
    """
    Resolve a user by its ID.

    Nested profile, member type and posts are not fetched here; they resolve
    through the same batched loaders as for any other user.
    """
    user = await get_loaders(info).user_loader.load(id)
    if user is None:
        logger.info("User not found", user_id=str(id))
        return None
    return convert_db_to_graphql_user(user)


# Mutations
async def create_user(info: strawberry.Info, dto: CreateUserInput) -> User:
    async with get_async_session() as session:
        user = Users(name=dto.name, balance=dto.balance)
        session.add(user)
        await session.flush()

        logger.info("User created", user_id=str(user.id))
        created = convert_db_to_graphql_user(user)

    invalidate_loaders(info)
    return created


async def change_user(info: strawberry.Info, id: UUID, dto: ChangeUserInput) -> User:
    """
    Apply a partial update to a user.

    Fields omitted from the input (or sent as null) keep their stored value.
    """
    async with get_async_session() as session:
        user = await session.get(Users, id)
        if user is None:
            raise NotFoundError("User not found", id=id)

        if dto.name is not None:
            user.name = dto.name
        if dto.balance is not None:
            user.balance = dto.balance

        await session.flush()

        logger.info(
            "User updated",
            user_id=str(id),
            updated_fields=[
                k for k, v in {"name": dto.name, "balance": dto.balance}.items() if v is not None
            ],
        )
        changed = convert_db_to_graphql_user(user)

    invalidate_loaders(info)
    return changed


async def delete_user(info: strawberry.Info, id: UUID) -> str:
    """Delete a user; the store cascades to its profile, posts and subscriptions."""
    async with get_async_session() as session:
        result = await session.execute(delete(Users).where(Users.id == id))
        if result.rowcount == 0:
            raise NotFoundError("User not found", id=id)

    logger.info("User deleted", user_id=str(id))
    invalidate_loaders(info)
    return "User deleted"

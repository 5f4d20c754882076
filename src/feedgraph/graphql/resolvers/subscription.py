from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID

import strawberry
from sqlalchemy import and_, delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...database.connection import get_async_session
from ...dbmodels import Subscriptions, Users
from ...logging import get_logger
from ..context import get_loaders, invalidate_loaders
from ..errors import ConflictError, NotFoundError
from .user import convert_db_to_graphql_user

if TYPE_CHECKING:
    from ..types.user import User

logger = get_logger(__name__)


def _insert_if_absent(session: AsyncSession, subscriber_id: UUID, author_id: UUID) -> Any:
    """Build ``INSERT ... ON CONFLICT DO NOTHING RETURNING`` for the session's dialect."""
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        insert = pg_insert
    elif dialect == "sqlite":
        insert = sqlite_insert
    else:
        raise RuntimeError(f"Unsupported database dialect for subscriptions: {dialect}")

    return (
        insert(Subscriptions)
        .values(subscriber_id=subscriber_id, author_id=author_id)
        .on_conflict_do_nothing(index_elements=["subscriber_id", "author_id"])
        .returning(Subscriptions.subscriber_id)
    )


# User field resolvers
async def resolve_user_subscribed_to(user: User, info: strawberry.Info) -> list[User]:
    """Authors the user follows."""
    authors = await get_loaders(info).authors_by_subscriber_loader.load(user.id)
    return [convert_db_to_graphql_user(author) for author in authors]


async def resolve_subscribed_to_user(user: User, info: strawberry.Info) -> list[User]:
    """Users following the user."""
    subscribers = await get_loaders(info).subscribers_by_author_loader.load(user.id)
    return [convert_db_to_graphql_user(subscriber) for subscriber in subscribers]


# Mutations
async def subscribe_to(info: strawberry.Info, user_id: UUID, author_id: UUID) -> str:
    """
    Make ``user_id`` follow ``author_id``.

    Raises NotFoundError when either user is missing and ConflictError when
    the edge already exists. The edge itself is written with a single
    insert-if-absent, so concurrent identical calls create exactly one edge.
    """
    async with get_async_session() as session:
        result = await session.execute(select(Users.id).where(Users.id.in_([user_id, author_id])))
        found = set(result.scalars().all())
        missing = [str(key) for key in (user_id, author_id) if key not in found]
        if missing:
            logger.info("Subscription refused: user not found", missing_user_ids=missing)
            raise NotFoundError("User not found", user_ids=", ".join(missing))

        try:
            inserted = (
                await session.execute(_insert_if_absent(session, user_id, author_id))
            ).scalar_one_or_none()
        except IntegrityError as e:
            # A party was deleted between the existence check and the insert
            raise NotFoundError("User not found", user_id=user_id, author_id=author_id) from e

        if inserted is None:
            logger.info(
                "Subscription refused: already subscribed",
                user_id=str(user_id),
                author_id=str(author_id),
            )
            raise ConflictError("Already subscribed", user_id=user_id, author_id=author_id)

    logger.info("Subscription created", user_id=str(user_id), author_id=str(author_id))
    invalidate_loaders(info)
    return "Subscribed"


async def unsubscribe_from(info: strawberry.Info, user_id: UUID, author_id: UUID) -> None:
    """Remove the ``user_id`` -> ``author_id`` edge; a missing edge is NotFoundError."""
    async with get_async_session() as session:
        result = await session.execute(
            delete(Subscriptions).where(
                and_(
                    Subscriptions.subscriber_id == user_id,
                    Subscriptions.author_id == author_id,
                )
            )
        )
        if result.rowcount == 0:
            raise NotFoundError("Subscription not found", user_id=user_id, author_id=author_id)

    logger.info("Subscription removed", user_id=str(user_id), author_id=str(author_id))
    invalidate_loaders(info)
    return None

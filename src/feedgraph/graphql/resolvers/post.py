from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from ...database.connection import get_async_session
from ...dbmodels import Posts
from ...logging import get_logger
from ..context import get_loaders, invalidate_loaders
from ..errors import NotFoundError, ValidationFailedError

if TYPE_CHECKING:
    from ..mutations.root import ChangePostInput, CreatePostInput
    from ..types.post import Post
    from ..types.user import User

logger = get_logger(__name__)


def convert_db_to_graphql_post(post: Posts) -> Post:
    """Convert a database Posts row to the GraphQL Post type."""
    from ..types.post import Post as PostType

    return PostType(
        id=post.id,
        title=post.title,
        content=post.content,
        author_id=post.author_id,
    )


# Query resolvers
async def resolve_posts(info: strawberry.Info) -> list[Post]:
    async with get_async_session() as session:
        result = await session.execute(select(Posts))
        return [convert_db_to_graphql_post(post) for post in result.scalars().all()]


async def resolve_post_by_id(info: strawberry.Info, id: UUID) -> Post | None:
    async with get_async_session() as session:
        post = await session.get(Posts, id)

    if post is None:
        logger.info("Post not found", post_id=str(id))
        return None
    return convert_db_to_graphql_post(post)


# User field resolvers
async def resolve_user_posts(user: User, info: strawberry.Info) -> list[Post]:
    posts = await get_loaders(info).posts_by_author_loader.load(user.id)
    return [convert_db_to_graphql_post(post) for post in posts]


# Mutations
async def create_post(info: strawberry.Info, dto: CreatePostInput) -> Post:
    async with get_async_session() as session:
        post = Posts(title=dto.title, content=dto.content, author_id=dto.author_id)
        session.add(post)
        try:
            await session.flush()
        except IntegrityError as e:
            logger.info("Post rejected by store", author_id=str(dto.author_id), error=str(e.orig))
            raise ValidationFailedError(
                "Post violates a data constraint: the author must exist",
                author_id=dto.author_id,
            ) from e

        logger.info("Post created", post_id=str(post.id), author_id=str(dto.author_id))
        created = convert_db_to_graphql_post(post)

    invalidate_loaders(info)
    return created


async def change_post(info: strawberry.Info, id: UUID, dto: ChangePostInput) -> Post:
    async with get_async_session() as session:
        post = await session.get(Posts, id)
        if post is None:
            raise NotFoundError("Post not found", id=id)

        if dto.title is not None:
            post.title = dto.title
        if dto.content is not None:
            post.content = dto.content

        await session.flush()

        logger.info(
            "Post updated",
            post_id=str(id),
            updated_fields=[
                k for k, v in {"title": dto.title, "content": dto.content}.items() if v is not None
            ],
        )
        changed = convert_db_to_graphql_post(post)

    invalidate_loaders(info)
    return changed


async def delete_post(info: strawberry.Info, id: UUID) -> str:
    async with get_async_session() as session:
        result = await session.execute(delete(Posts).where(Posts.id == id))
        if result.rowcount == 0:
            raise NotFoundError("Post not found", id=id)

    logger.info("Post deleted", post_id=str(id))
    invalidate_loaders(info)
    return "Post deleted"

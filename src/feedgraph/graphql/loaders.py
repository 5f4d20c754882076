"""
Per-request batch loaders for relationship fields.

Every relationship field goes through one of these loaders, so a selection
such as ``users { posts { id } }`` costs one query for users and one for all
their posts instead of one per user.
"""

from collections import defaultdict
from uuid import UUID

from sqlalchemy import select
from strawberry.dataloader import DataLoader

from ..database.connection import get_async_session
from ..dbmodels import MemberTypes, Posts, Profiles, Subscriptions, Users


async def load_users(keys: list[UUID]) -> list[Users | None]:
    """Batch load users by ID."""
    async with get_async_session() as session:
        stmt = select(Users).where(Users.id.in_(keys))
        result = await session.execute(stmt)
        users_map = {user.id: user for user in result.scalars().all()}
        return [users_map.get(key) for key in keys]


async def load_member_types(keys: list[str]) -> list[MemberTypes | None]:
    """Batch load member types by ID."""
    async with get_async_session() as session:
        stmt = select(MemberTypes).where(MemberTypes.id.in_(keys))
        result = await session.execute(stmt)
        member_types_map = {member_type.id: member_type for member_type in result.scalars().all()}
        return [member_types_map.get(key) for key in keys]


async def load_profiles_by_user(keys: list[UUID]) -> list[Profiles | None]:
    """Batch load the profile of each user, keyed by user ID."""
    async with get_async_session() as session:
        stmt = select(Profiles).where(Profiles.user_id.in_(keys))
        result = await session.execute(stmt)
        profiles_map = {profile.user_id: profile for profile in result.scalars().all()}
        return [profiles_map.get(key) for key in keys]


async def load_posts_by_author(keys: list[UUID]) -> list[list[Posts]]:
    """Batch load posts of each author, keyed by author ID."""
    async with get_async_session() as session:
        stmt = select(Posts).where(Posts.author_id.in_(keys))
        result = await session.execute(stmt)
        posts_map: dict[UUID, list[Posts]] = defaultdict(list)
        for post in result.scalars().all():
            posts_map[post.author_id].append(post)
        return [posts_map.get(key, []) for key in keys]


async def load_authors_by_subscriber(keys: list[UUID]) -> list[list[Users]]:
    """Batch load the users each subscriber follows."""
    async with get_async_session() as session:
        stmt = (
            select(Subscriptions.subscriber_id, Users)
            .join(Users, Users.id == Subscriptions.author_id)
            .where(Subscriptions.subscriber_id.in_(keys))
        )
        result = await session.execute(stmt)
        authors_map: dict[UUID, list[Users]] = defaultdict(list)
        for subscriber_id, author in result.all():
            authors_map[subscriber_id].append(author)
        return [authors_map.get(key, []) for key in keys]


async def load_subscribers_by_author(keys: list[UUID]) -> list[list[Users]]:
    """Batch load the users following each author."""
    async with get_async_session() as session:
        stmt = (
            select(Subscriptions.author_id, Users)
            .join(Users, Users.id == Subscriptions.subscriber_id)
            .where(Subscriptions.author_id.in_(keys))
        )
        result = await session.execute(stmt)
        subscribers_map: dict[UUID, list[Users]] = defaultdict(list)
        for author_id, subscriber in result.all():
            subscribers_map[author_id].append(subscriber)
        return [subscribers_map.get(key, []) for key in keys]


class Loaders:
    def __init__(self):
        self.user_loader = DataLoader(load_fn=load_users)
        self.member_type_loader = DataLoader(load_fn=load_member_types)
        self.profile_by_user_loader = DataLoader(load_fn=load_profiles_by_user)
        self.posts_by_author_loader = DataLoader(load_fn=load_posts_by_author)
        self.authors_by_subscriber_loader = DataLoader(load_fn=load_authors_by_subscriber)
        self.subscribers_by_author_loader = DataLoader(load_fn=load_subscribers_by_author)

    def clear_all(self) -> None:
        """Drop cached results after a write so later fields see fresh rows."""
        for loader in (
            self.user_loader,
            self.member_type_loader,
            self.profile_by_user_loader,
            self.posts_by_author_loader,
            self.authors_by_subscriber_loader,
            self.subscribers_by_author_loader,
        ):
            loader.clear_all()

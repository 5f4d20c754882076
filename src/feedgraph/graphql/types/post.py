"""
Post GraphQL type definitions
"""

from uuid import UUID

import strawberry


@strawberry.type
class Post:
    """Post type for GraphQL API."""

    id: UUID
    title: str
    content: str
    author_id: UUID

"""
Member type GraphQL type definitions
"""

from enum import Enum

import strawberry


@strawberry.enum(name="MemberTypeId")
class MemberTypeId(Enum):
    """Subscription tier identifier."""

    BASIC = "BASIC"
    BUSINESS = "BUSINESS"


@strawberry.type(name="Member")
class MemberType:
    """Subscription tier with its discount and monthly post quota."""

    id: MemberTypeId
    discount: float
    posts_limit_per_month: int

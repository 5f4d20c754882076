"""
Per-request GraphQL context helpers
"""

from typing import Any

import strawberry
from fastapi import Request

from .loaders import Loaders


def build_context(request: Request | None = None) -> dict[str, Any]:
    """Build a fresh resolver context; loaders never outlive one request."""
    return {
        "request": request,
        "loaders": Loaders(),
    }


def get_loaders(info: strawberry.Info) -> Loaders:
    """Return the request's loaders, creating them if the context lacks them."""
    loaders = info.context.get("loaders")
    if loaders is None:
        loaders = Loaders()
        info.context["loaders"] = loaders
    return loaders


def invalidate_loaders(info: strawberry.Info) -> None:
    """Forget batched reads after a write in the same request."""
    loaders = info.context.get("loaders")
    if loaders is not None:
        loaders.clear_all()

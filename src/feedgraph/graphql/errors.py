"""
Error taxonomy shared by all resolvers.

Policy:
- single-entity reads that miss return ``None`` (GraphQL ``null``) silently;
- writes that cannot be applied raise an ``ApiError`` subclass.

``ApiError.extensions`` is picked up by graphql-core when it wraps the
exception, so each GraphQL error entry carries ``extensions.code``. On a
nullable mutation field (``subscribeTo``/``unsubscribeFrom``) the client sees
``null`` data plus a coded error.
"""

from typing import Any


class ApiError(Exception):
    """Base class for errors reported to GraphQL clients with a stable code."""

    code = "INTERNAL"

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = {k: str(v) for k, v in details.items()}

    @property
    def extensions(self) -> dict[str, Any]:
        return {"code": self.code, **self.details}


class NotFoundError(ApiError):
    code = "NOT_FOUND"


class ConflictError(ApiError):
    code = "CONFLICT"


class ValidationFailedError(ApiError):
    code = "VALIDATION_FAILED"

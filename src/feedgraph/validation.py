"""
Startup validation for the feedgraph application.

Checks that the database is reachable and that the member type reference
data has been seeded before the API starts serving requests.
"""

from __future__ import annotations

from typing import Any

from .config import is_production, settings
from .database.connection import get_async_session, test_database_connection
from .database.seed_data import ensure_member_types, missing_member_types
from .logging import get_logger

logger = get_logger(__name__)


class ValidationError(Exception):
    """Raised when application validation fails."""

    pass


async def validate_database_connection() -> dict[str, Any]:
    """Validate that the database is accessible and responsive."""
    results: dict[str, Any] = {"valid": True, "warnings": [], "errors": []}

    success, error_message = await test_database_connection()
    if success:
        logger.info("Database connection validation successful")
    else:
        results["valid"] = False
        results["errors"].append(error_message)
        logger.error("Database connection validation failed", error=error_message)

    return results


async def validate_member_types() -> dict[str, Any]:
    """
    Validate that every member type is present.

    When ``seed_on_startup`` is enabled missing member types are inserted
    instead of being reported.
    """
    results: dict[str, Any] = {"valid": True, "warnings": [], "errors": []}

    try:
        async with get_async_session() as db:
            if settings.seed_on_startup:
                created = await ensure_member_types(db)
                if created:
                    results["warnings"].append(f"Seeded missing member types: {created}")
            else:
                missing = await missing_member_types(db)
                if missing:
                    results["valid"] = False
                    results["errors"].append(
                        f"Member types not seeded: {missing}. Run 'feedgraph-db seed'."
                    )
    except Exception as e:
        results["valid"] = False
        results["errors"].append(f"Member type validation failed: {e}")
        logger.error("Member type validation failed", error=str(e))

    return results


async def validate_startup_configuration() -> dict[str, Any]:
    """Run all startup checks and return a combined report."""
    database = await validate_database_connection()
    member_types = (
        await validate_member_types()
        if database["valid"]
        else {"valid": False, "warnings": [], "errors": ["Skipped: database unavailable"]}
    )

    report = {
        "database": database,
        "member_types": member_types,
        "overall_valid": database["valid"] and member_types["valid"],
    }

    if report["overall_valid"]:
        logger.info("Startup validation passed")
    else:
        logger.error(
            "Startup validation failed",
            database_errors=database["errors"],
            member_type_errors=member_types["errors"],
        )
        if is_production():
            raise ValidationError("Critical configuration validation failed in production")

    return report

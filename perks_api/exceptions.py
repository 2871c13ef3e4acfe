"""
Perks API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the client-facing error cases.
Why:   Services raise typed errors; the global handlers registered in
       main.py turn them into structured JSON responses with the right
       HTTP status code. No route or service builds error responses itself.
How:   Each exception carries a user-facing message and an optional context
       dict that is returned as `details`.

Exception Hierarchy:
    PerksError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    └── ConflictError     → 409 Conflict (uniqueness violation)

    Any other store failure (sqlalchemy.exc.SQLAlchemyError) is NOT wrapped:
    it propagates unchanged to the 500 handler.
"""

from typing import Any, Dict, List, Optional


class PerksError(Exception):
    """
    Base exception for all Perks API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Extra structured detail returned as `details`
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PerksError):
    """
    Raised when client input is missing or fails validation.

    When:    Missing query parameter, empty update body, schema violation,
             malformed perk id.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Validation failed",
            "details": {"errors": ["discountPercent: Input should be less than or equal to 100"]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        if errors:
            ctx["errors"] = list(errors)
        super().__init__(message=message, context=ctx)
        self.errors = list(errors or [])


class NotFoundError(PerksError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; the service converts that into
    this exception so the handler can answer 404.
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class ConflictError(PerksError):
    """
    Raised when a write violates a uniqueness constraint.

    When:    A perk with the same (title, merchant) already exists.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

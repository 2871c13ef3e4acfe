"""
Perks API — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the perk API contract.
Why:   The same declarative field rules drive input validation (via
       PerkValidator), response serialization and the OpenAPI docs.
How:   JSON uses camelCase (`discountPercent`, `createdAt`); Python uses
       snake_case. `populate_by_name` accepts either spelling on input.

Validation configurations:
    PerkCreate  required title, defaults applied, unknown fields forbidden
    PerkUpdate  every field optional, no defaults, unknown fields ignored
"""

import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from perks_api.models.perk import PerkCategory

TITLE_MIN_LENGTH = 2
DISCOUNT_MIN = 0
DISCOUNT_MAX = 100


def _reject_bool(v: Any) -> Any:
    # bool is an int subclass, and lax mode would store true as 1.0
    if isinstance(v, bool):
        raise ValueError("Input should be a valid number")
    return v


# ══════════════════════════════════════════════════════════════════════════
# Input Models: validated by PerkValidator, never bound directly by FastAPI
# ══════════════════════════════════════════════════════════════════════════


class PerkCreate(BaseModel):
    """
    Field rules for creating a perk.

    Omitted optional fields receive their defaults, so the validated output
    is always a complete row.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        use_enum_values=True,
    )

    title: str = Field(min_length=TITLE_MIN_LENGTH)
    description: str = Field(default="")
    category: PerkCategory = Field(default=PerkCategory.OTHER, validate_default=True)
    discount_percent: float = Field(default=0, ge=DISCOUNT_MIN, le=DISCOUNT_MAX)
    merchant: str = Field(default="")

    @field_validator("discount_percent", mode="before")
    @classmethod
    def discount_not_bool(cls, v: Any) -> Any:
        return _reject_bool(v)


class PerkUpdate(BaseModel):
    """
    Field rules for a partial update.

    Same constraints as PerkCreate, but nothing is required and no defaults
    are filled in: only the fields the client sent come out of validation.
    Unknown fields are dropped. Explicit nulls are rejected because every
    column is NOT NULL.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        use_enum_values=True,
    )

    title: Optional[str] = Field(default=None, min_length=TITLE_MIN_LENGTH)
    description: Optional[str] = None
    category: Optional[PerkCategory] = None
    discount_percent: Optional[float] = Field(default=None, ge=DISCOUNT_MIN, le=DISCOUNT_MAX)
    merchant: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        # Defaults are not validated, so this only sees values the client sent
        if v is None:
            raise ValueError("Field may not be null")
        return v

    @field_validator("discount_percent", mode="before")
    @classmethod
    def discount_not_bool(cls, v: Any) -> Any:
        return _reject_bool(v)


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class PerkResponse(BaseModel):
    """Full representation of a stored perk."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: uuid.UUID = Field(description="Unique perk identifier (UUID)")
    title: str = Field(description="Perk title")
    description: str = Field(description="Free-text description")
    category: PerkCategory = Field(description="One of food, tech, travel, fitness, other")
    discount_percent: float = Field(description="Discount percentage, 0-100")
    merchant: str = Field(description="Merchant offering the perk")
    created_at: datetime = Field(description="Creation timestamp (UTC)")

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # SQLite drops tzinfo; stored values are always UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class PerkEnvelope(BaseModel):
    """
    Single-perk response wrapper: `{"perk": {...}}`.
    Returned by get, create and update.
    """
    perk: PerkResponse


class DeleteResponse(BaseModel):
    """Acknowledgement returned by DELETE /api/perks/{id}."""
    ok: bool = True


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "conflict",
            "message": "Duplicate perk for this merchant",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


PerkList = List[PerkResponse]

"""
Perks API — Perk SQLAlchemy Model
==================================

What:  ORM model representing the `perks` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads it for migrations.
Who:   Used by PerkService for every store call.

Table Design:
    - UUID primary key, generated in Python so SQLite and PostgreSQL behave alike
    - title and merchant are TEXT; no length limit is imposed on either
    - category stored as a short string; the allowed values are enforced by
      the validator, not by a database enum
    - UNIQUE (title, merchant): a merchant cannot list the same perk twice
    - Index on created_at DESC: every listing is "newest first"
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Index, String, Text, UniqueConstraint, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from perks_api.database import Base


class PerkCategory(str, enum.Enum):
    """Allowed perk categories."""

    FOOD = "food"
    TECH = "tech"
    TRAVEL = "travel"
    FITNESS = "fitness"
    OTHER = "other"


class Perk(Base):
    """
    A discount or benefit offered by a merchant.

    Lifecycle:
        1. Created with all defaults applied by the validator
        2. Partially updated (only supplied fields change)
        3. Hard-deleted; there is no soft delete
    """

    __tablename__ = "perks"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    category: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=PerkCategory.OTHER.value,
        server_default=text("'other'"),
    )

    discount_percent: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    merchant: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    # Assigned in Python at insert time so consecutive creates keep
    # sub-second ordering on every backend
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("title", "merchant", name="uq_perks_title_merchant"),
        Index("idx_perks_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Perk(id={self.id}, title='{self.title}', "
            f"merchant='{self.merchant}')>"
        )

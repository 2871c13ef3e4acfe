"""
Perks API — Perk Service (Business Logic)
==========================================

What:  CRUD operations over the `perks` table.
Why:   Keeps guards, validation order and store-error translation out of the
       route handlers, so every rule can be tested without HTTP.
How:   Each method takes the request's AsyncSession and performs one store
       call. Client errors are raised as typed exceptions (ValidationError,
       NotFoundError, ConflictError). Any other SQLAlchemy error propagates
       unchanged to the global 500 handler; nothing is retried here.
Who:   Called by the route handlers in `perks_api.routes.perks`.

Update flow (PATCH/PUT /api/perks/{id}):
    ┌────────────┐   ┌────────────┐   ┌──────────┐   ┌──────────┐   ┌─────────┐
    │ id present │──▶│ body not   │──▶│ id is a  │──▶│  row     │──▶│validate │──▶ merge + flush
    │            │   │ empty      │   │ UUID     │   │  exists  │   │ (all    │
    └────────────┘   └────────────┘   └──────────┘   └──────────┘   │ errors) │
         400              400              400            404       └─────────┘
                                                                        400
"""

import logging
from typing import Any, List, Mapping, Optional
from uuid import UUID

from sqlalchemy import delete, desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from perks_api.exceptions import ConflictError, NotFoundError, ValidationError
from perks_api.models.perk import Perk
from perks_api.services.perk_validator import PerkValidator, perk_validator

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Duplicate perk for this merchant"


def parse_perk_id(raw_id: Any) -> UUID:
    """
    Converts a path parameter into a UUID.

    Raises:
        ValidationError: "Invalid id format" when the value is not a UUID
    """
    if isinstance(raw_id, UUID):
        return raw_id
    try:
        return UUID(str(raw_id))
    except (TypeError, ValueError):
        raise ValidationError(message="Invalid id format", field="id") from None


class PerkService:
    """
    Stateless business logic for perks.

    Responsibilities:
        - list_perks(): all perks, newest first
        - filter_by_title(): exact title match, newest first
        - get_perk(): single perk or 404
        - create_perk(): validate, insert, translate duplicates to 409
        - update_perk(): guarded partial update
        - delete_perk(): atomic delete, 404 when nothing matched
    """

    def __init__(self, validator: Optional[PerkValidator] = None):
        self.validator = validator or perk_validator

    async def list_perks(self, db: AsyncSession) -> List[Perk]:
        result = await db.execute(select(Perk).order_by(desc(Perk.created_at)))
        return list(result.scalars().all())

    async def filter_by_title(self, db: AsyncSession, title: Optional[str]) -> List[Perk]:
        """
        Return perks whose title equals `title` exactly.

        Matching is case-sensitive and whole-string; "Gym" does not match
        "Gym Pass".

        Raises:
            ValidationError: title missing or empty (the store is not queried)
        """
        if not title:
            raise ValidationError(message="Title query parameter is required", field="title")

        result = await db.execute(
            select(Perk)
            .where(Perk.title == title)
            .order_by(desc(Perk.created_at))
        )
        return list(result.scalars().all())

    async def get_perk(self, db: AsyncSession, perk_id: Any) -> Perk:
        """
        Fetch a single perk by id.

        Raises:
            ValidationError: id is not a UUID
            NotFoundError: no perk with that id
        """
        pid = parse_perk_id(perk_id)
        perk = await db.get(Perk, pid)
        if perk is None:
            raise NotFoundError(resource="Perk", resource_id=str(pid))
        return perk

    async def create_perk(self, db: AsyncSession, data: Any) -> Perk:
        """
        Validate and insert a new perk.

        Defaults (description, category, discount, merchant) are applied by
        the validator, so the row is complete before it reaches the store.
        The id and created_at are assigned at flush time.

        Raises:
            ValidationError: first schema violation
            ConflictError: (title, merchant) already taken
        """
        values = self.validator.validate_create(data)

        perk = Perk(**values)
        db.add(perk)
        try:
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            logger.info("Rejected duplicate perk '%s' for merchant '%s'", values["title"], values["merchant"])
            raise ConflictError(
                message=DUPLICATE_MESSAGE,
                context={"title": values["title"], "merchant": values["merchant"]},
            ) from e

        logger.info("Perk created: %s", perk.id)
        return perk

    async def update_perk(
        self,
        db: AsyncSession,
        perk_id: Any,
        data: Optional[Mapping[str, Any]],
    ) -> Perk:
        """
        Apply a partial update to an existing perk.

        Only the supplied fields are validated and written; everything else
        on the row is left as it was. Validation happens before any attribute
        is touched, so a rejected update never changes the stored perk.

        Raises:
            ValidationError: missing id, empty body, malformed id, or one or
                more schema violations (all reported in `errors`)
            NotFoundError: no perk with that id
            ConflictError: the new (title, merchant) collides with another perk
        """
        if not perk_id:
            raise ValidationError(message="Missing id parameter", field="id")
        if not data:
            raise ValidationError(message="No update fields provided")
        if not isinstance(data, Mapping):
            raise ValidationError(message="Request body must be a JSON object")

        perk = await self.get_perk(db, perk_id)
        pid = perk.id

        values = self.validator.validate_update(data)
        for field, value in values.items():
            setattr(perk, field, value)

        try:
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            raise ConflictError(message=DUPLICATE_MESSAGE, context={"id": str(pid)}) from e

        logger.info("Perk %s updated: %s", pid, sorted(values))
        return perk

    async def delete_perk(self, db: AsyncSession, perk_id: Any) -> None:
        """
        Delete a perk in a single statement.

        DELETE ... RETURNING makes find-and-remove atomic; two concurrent
        deletes of the same id yield one success and one 404.

        Raises:
            ValidationError: id is not a UUID
            NotFoundError: nothing was deleted
        """
        pid = parse_perk_id(perk_id)
        result = await db.execute(
            delete(Perk).where(Perk.id == pid).returning(Perk.id)
        )
        if result.scalar_one_or_none() is None:
            raise NotFoundError(resource="Perk", resource_id=str(pid))
        logger.info("Perk deleted: %s", pid)


# ── Singleton Instance ────────────────────────────────────────────────────
perk_service = PerkService()

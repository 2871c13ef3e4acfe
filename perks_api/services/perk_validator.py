"""
Perks API — Perk Field Validator
=================================

What:  Checks and normalizes incoming perk field sets.
Why:   Request bodies are accepted as raw JSON objects so that the service
       can run its guards (missing id, empty body, existence) BEFORE schema
       validation, and so that failures answer 400 with our own error shape
       instead of FastAPI's automatic 422.
How:   Delegates the field rules to the Pydantic models in
       `perks_api.schemas.perk` and converts pydantic's error list into
       readable "field: message" strings.

Modes:
    validate_create  PerkCreate rules; reports only the first problem
    validate_update  PerkUpdate rules; reports every problem, returns only
                     the fields the client actually sent
"""

import logging
from typing import Any, Dict, List, Mapping, Type

import pydantic
from pydantic import BaseModel

from perks_api.exceptions import ValidationError
from perks_api.schemas.perk import PerkCreate, PerkUpdate

logger = logging.getLogger(__name__)


def format_errors(exc: pydantic.ValidationError) -> List[str]:
    """Turns pydantic error dicts into `"<field>: <message>"` strings."""
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()))
        msg = err.get("msg", "Invalid value")
        # "Value error, Field may not be null" -> "Field may not be null"
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        messages.append(f"{field}: {msg}" if field else msg)
    return messages


class PerkValidator:
    """
    Stateless validator for perk payloads.

    Both modes return plain dicts keyed by the ORM attribute names
    (snake_case), ready to be passed to `Perk(**values)` or set onto an
    existing row.
    """

    def _run(
        self,
        schema: Type[BaseModel],
        data: Any,
        abort_early: bool,
    ) -> BaseModel:
        try:
            return schema.model_validate(data)
        except pydantic.ValidationError as exc:
            messages = format_errors(exc)
            logger.debug("%s rejected payload: %s", schema.__name__, messages)
            if abort_early:
                raise ValidationError(message=messages[0], errors=messages[:1])
            raise ValidationError(message="Validation failed", errors=messages)

    def validate_create(self, data: Any) -> Dict[str, Any]:
        """
        Validate a full perk for creation.

        Raises:
            ValidationError: first schema violation (title too short, unknown
                field, category outside the enum, discount out of range, ...)
        """
        model = self._run(PerkCreate, data, abort_early=True)
        return model.model_dump()

    def validate_update(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Validate a partial perk update.

        Unknown keys are dropped silently. Keys that are present are checked
        against the same rules as create, and every violation is reported.

        Returns:
            Only the recognized fields that were supplied (may be empty when
            the body held nothing but unknown keys).
        """
        model = self._run(PerkUpdate, data, abort_early=False)
        return model.model_dump(exclude_unset=True)


# Stateless; one instance is shared by the service
perk_validator = PerkValidator()

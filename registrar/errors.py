"""Constraint violations raised by the registrar write paths."""
from __future__ import annotations

import logging

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

LOGGER = logging.getLogger(__name__)


class ConstraintViolation(RuntimeError):
    """Raised when a write would break an invariant of the data model."""


class ValidationError(ConstraintViolation):
    """A value failed a range, format or ordering check."""


class UniquenessViolation(ConstraintViolation):
    """A write duplicated a value that must be unique."""


class ReferentialViolation(ConstraintViolation):
    """A foreign key pointed at a row that does not exist."""


def translate_integrity_error(exc: IntegrityError) -> ConstraintViolation:
    """Map a driver level integrity failure onto the violation hierarchy."""

    message = str(exc.orig)
    lowered = message.lower()
    if "unique" in lowered or "duplicate key" in lowered:
        violation: ConstraintViolation = UniquenessViolation(message)
    elif "foreign key" in lowered:
        violation = ReferentialViolation(message)
    else:
        # CHECK and NOT NULL failures are value errors.
        violation = ValidationError(message)
    LOGGER.debug("Integrity error translated to %s: %s", type(violation).__name__, message)
    return violation


def from_pydantic(exc: PydanticValidationError) -> ValidationError:
    """Collapse pydantic error details into a single readable violation."""

    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        text = error.get("msg", "invalid value")
        details.append(f"{location}: {text}" if location else text)
    return ValidationError("; ".join(details))


__all__ = [
    "ConstraintViolation",
    "ReferentialViolation",
    "UniquenessViolation",
    "ValidationError",
    "from_pydantic",
    "translate_integrity_error",
]

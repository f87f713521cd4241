"""Shared helpers for the write paths: input coercion and commit handling."""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from typing import Any, Iterator, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.errors import PersistenceError

logger = logging.getLogger(__name__)

# Range of the INTEGER columns (fine amounts, ticket ids) on every supported backend.
INTEGER_MAX = 2**31 - 1
INTEGER_MIN = -(2**31)


def parse_whole_number(value: str | None) -> int | None:
    """Parse a form value as an integer, accepting ``"40"``, ``"40.0"`` or ``"4e1"``.

    Returns ``None`` for blanks, non-numbers, NaN/infinity and values with a
    fractional part, and for anything outside the INTEGER column range.
    """

    if value is None:
        return None
    try:
        number = Decimal(value.strip())
    except (InvalidOperation, AttributeError):
        return None
    if not number.is_finite():
        return None
    # Bound the magnitude from the exponent before any integer conversion.
    if number and number.adjusted() >= len(str(INTEGER_MAX)):
        return None
    if number != number.to_integral_value():
        return None
    result = int(number)
    if not INTEGER_MIN <= result <= INTEGER_MAX:
        return None
    return result


def parse_uuid(value: str | uuid.UUID | None) -> uuid.UUID | None:
    if value is None or isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(value.strip())
    except (ValueError, AttributeError):
        return None


@contextmanager
def persisting(db: Session, message: str, *, echo: Mapping[str, Any] | None = None) -> Iterator[Session]:
    """Run a unit of work and commit it, turning storage errors into ``PersistenceError``."""

    try:
        yield db
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(message)
        raise PersistenceError(message, echo=echo) from exc


def not_found(message: str, entity: str, identifier: object, *, echo: Mapping[str, Any] | None = None) -> PersistenceError:
    logger.warning("%s: %s %s does not exist", message, entity, identifier)
    return PersistenceError(message, echo=echo)

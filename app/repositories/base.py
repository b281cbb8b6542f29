"""Shared commit handling for the repositories.

Constraint violations raised by the database are turned into domain errors so
that a request the input layer let through still ends in a 400/409 instead of
a 500.
"""
import logging
from typing import Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import Conflict, ValidationError

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
CHECK_VIOLATION = "23514"
NOT_NULL_VIOLATION = "23502"

# SQLite reports constraint failures only through the message text
_SQLITE_MARKERS = {
    "UNIQUE constraint failed": UNIQUE_VIOLATION,
    "FOREIGN KEY constraint failed": FOREIGN_KEY_VIOLATION,
    "CHECK constraint failed": CHECK_VIOLATION,
    "NOT NULL constraint failed": NOT_NULL_VIOLATION,
}


def violation_code(exc: IntegrityError) -> Optional[str]:
    code = getattr(exc.orig, "pgcode", None)
    if code:
        return code
    text = str(exc.orig)
    for marker, sqlstate in _SQLITE_MARKERS.items():
        if marker in text:
            return sqlstate
    return None


def constraint_name(exc: IntegrityError) -> str:
    diag = getattr(exc.orig, "diag", None)
    name = getattr(diag, "constraint_name", None)
    # SQLite puts the constraint name (or the column list) in the message
    return name or str(exc.orig)


def commit(db: Session, messages: Optional[Dict[str, str]] = None) -> None:
    """Commit the session, translating integrity errors.

    ``messages`` maps an SQLSTATE code, or a constraint name fragment, to the
    message returned to the client. Unique violations raise ``Conflict``;
    every other integrity violation raises ``ValidationError``.
    """
    messages = messages or {}
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        code = violation_code(e)
        name = constraint_name(e)
        message = next((msg for key, msg in messages.items() if not key.isdigit() and key in name), None)
        if message is None:
            message = messages.get(code, f"Violación de restricción de datos: {e.orig}")
        logger.info("Integrity error %s on %s: %s", code, name, e.orig)
        if code == UNIQUE_VIOLATION:
            raise Conflict(message)
        raise ValidationError(message)

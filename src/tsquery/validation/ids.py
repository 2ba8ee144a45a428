"""Identifier grammar for filter set ids and other query component names."""

import logging

from tsquery.errors import InvalidIdError, MissingFieldError

logger = logging.getLogger(__name__)

# Letters and digits plus these separators. Dots are reserved for metric names.
ALLOWED_PUNCTUATION = frozenset("_-")


def is_valid_id_char(char: str) -> bool:
    """Return True if ``char`` may appear in an identifier."""
    return (char.isascii() and char.isalnum()) or char in ALLOWED_PUNCTUATION


def validate_id(id: str) -> None:
    """
    Check an identifier against the id grammar.

    Args:
        id: Identifier to check

    Raises:
        MissingFieldError: If id is None or empty
        InvalidIdError: If id contains a character outside [A-Za-z0-9_-]

    Examples:
        >>> validate_id("f1")
        >>> validate_id("bad.Id")
        Traceback (most recent call last):
        ...
        tsquery.errors.InvalidIdError: Invalid id ("bad.Id"): illegal character: .
    """
    if not id:
        raise MissingFieldError("id", "The id cannot be null or empty")

    for char in id:
        if not is_valid_id_char(char):
            logger.debug("Rejected id %r at character %r", id, char)
            raise InvalidIdError(f'Invalid id ("{id}"): illegal character: {char}')

"""
ScatterBrain Backend - Thought Identifiers
==========================================

What:  Generation, parsing and formatting of thought identifiers.
How:   Identifiers are plain `uuid.UUID` values (version 4). Conversion to and
       from text happens only through the functions below, never implicitly.

uuid4() draws from os.urandom, so generation cannot yield a nil identifier
and has no failure path for callers to handle.
"""

import uuid

from scatterbrain.exceptions import ValidationError

CANONICAL_LENGTH = 36


def new_thought_id() -> uuid.UUID:
    """Fresh random identifier for a new thought."""
    return uuid.uuid4()


def parse_thought_id(text: str) -> uuid.UUID:
    """
    Parse the textual form of a thought identifier.

    Raises:
        ValidationError: `text` is not the canonical 36-character
            hyphenated form. Hex-only, braced and `urn:uuid:` spellings
            are rejected so each thought has exactly one URL.
    """
    try:
        parsed = uuid.UUID(text)
        if len(text) != CANONICAL_LENGTH or str(parsed) != text.lower():
            raise ValueError(text)
        return parsed
    except (ValueError, AttributeError, TypeError):
        raise ValidationError(
            message="unable to parse the identifier.",
            field="id",
            context={"value": str(text)[:64]},
        ) from None


def format_thought_id(thought_id: uuid.UUID) -> str:
    """Canonical lowercase hyphenated form, e.g. 'c0a8...-...-4...'."""
    return str(thought_id)

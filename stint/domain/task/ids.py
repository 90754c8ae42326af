"""Task identifier generation."""

from uuid import uuid4


def generate_id() -> str:
    """Return a new opaque task identifier.

    Identifiers are random 128-bit values rendered as 32 hex characters.
    They are only ever compared for equality, never parsed.
    """
    return uuid4().hex

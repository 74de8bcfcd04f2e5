"""Identifier helpers."""

from uuid import uuid4


def generate_id() -> str:
    """Return a new random identifier for a catalog entity."""
    return uuid4().hex

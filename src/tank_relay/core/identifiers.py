"""Identifier generation for connections and rooms."""

import uuid

ID_LENGTH = 8


def new_id() -> str:
    """Return a short random token, unique in practice but not unguessable."""
    return uuid.uuid4().hex[:ID_LENGTH]

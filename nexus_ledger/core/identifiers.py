"""Identifier allocation."""

import uuid


def new_id(prefix: str) -> str:
    """Return a collision-free identifier such as ``MOV-3f2a...``."""
    return f"{prefix}-{uuid.uuid4().hex}"

"""Input validation helpers shared by services."""

from typing import Any
from uuid import UUID


def is_valid_id(value: Any) -> bool:
    """Check that a value is a well-formed record identifier (UUID string)."""
    if not isinstance(value, str) or not value:
        return False
    try:
        UUID(value)
    except ValueError:
        return False
    return True

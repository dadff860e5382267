"""Shared helpers for use cases."""

from uuid import UUID

from discuss.domain.error import ValidationError


def parse_id(value: str, field: str) -> UUID:
    """Parse an identifier received as a string.

    Raises:
        ValidationError: If value is not a UUID
    """
    try:
        return UUID(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}: {value!r}") from None


def parse_optional_id(value: str | None, field: str) -> UUID | None:
    """Like parse_id, passing None through."""
    return None if value is None else parse_id(value, field)

"""Shared pieces of the domain entities."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


def utcnow() -> datetime:
    """Timezone-aware now; every stored timestamp is UTC."""
    return datetime.now(timezone.utc)


class DomainModel(BaseModel):
    """Frozen entity base.

    A state change produces ``model_copy(update=...)`` mirroring the row
    that was written, never an in-place mutation.
    """

    model_config = ConfigDict(frozen=True, validate_default=True)

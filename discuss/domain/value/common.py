"""Shared base for immutable values."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Frozen pydantic model; two values with equal fields are equal.

    Assigning to a field raises ``ValidationError``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

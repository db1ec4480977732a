"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Base class for all value objects.

    Value objects are immutable, compared by value, and ignore unknown
    keys so provider payloads can be passed through without pre-filtering.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )

"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain models.

    Entities are immutable; changes go through ``revise()`` so that field
    validators run again on the new values (``model_copy`` skips them).
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )

    def revise(self, **changes):
        """Return a validated copy with ``changes`` applied.

        Raises:
            pydantic.ValidationError: If a changed field fails validation
        """
        return type(self).model_validate({**self.model_dump(), **changes})

"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain models.

    Entities are immutable; state changes produce a new instance through
    ``model_copy(update=...)``.
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=False,  # Content is stored exactly as written
    )

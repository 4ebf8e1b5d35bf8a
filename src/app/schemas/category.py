"""Category response schemas."""

from pydantic import BaseModel, ConfigDict


class CategoryResponse(BaseModel):
    """A category and how many times it has been used."""

    name: str
    frequency: int

    model_config = ConfigDict(from_attributes=True)

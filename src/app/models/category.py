"""Category model: a named spending bucket with a usage counter.

Names are unique case-insensitively through ``name_key``; ``name`` keeps the
spelling the category was first created with.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


def category_key(name: str) -> str:
    """Case-insensitive identity of a category name."""
    return (name or "").strip().lower()


class Category(BaseModel):
    """Spending category with a frequency counter used for ranking."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    name_key: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    frequency: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    def __repr__(self) -> str:
        return f"<Category(name={self.name}, frequency={self.frequency})>"

"""Category registry: the single authority on which categories exist."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidRequestError
from app.models.category import Category, category_key
from app.repositories.category import CategoryRepository


class CategoryRegistry:
    """Facade over the category store used by the categorization engine.

    Storage errors from the repository propagate unchanged.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.category_repo = CategoryRepository(db)

    async def get_all(self) -> list[Category]:
        """All categories, most used first."""
        return await self.category_repo.get_all()

    async def names(self) -> list[str]:
        """Known category names in frequency order."""
        return [category.name for category in await self.get_all()]

    async def get_most_frequent(self, limit: int = 10) -> list[Category]:
        return await self.category_repo.get_most_frequent(limit)

    async def increment_usage(self, name: str, commit: bool = True) -> Category:
        """Record one use of ``name``, creating the category if needed.

        Raises:
            InvalidRequestError: If the name is blank.
        """
        if not category_key(name):
            raise InvalidRequestError("VAL_001", {"field": "category"})
        return await self.category_repo.increment_usage(name, commit=commit)

"""Category repository: frequency-ranked vocabulary with atomic usage counts."""
from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import utcnow
from app.models.category import Category, category_key
from app.repositories.base import BaseRepository

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Category)

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        try:
            return _UPSERT_DIALECTS[dialect](Category)
        except KeyError:
            raise NotImplementedError(f"Category upsert not supported on {dialect}") from None

    async def get_all(self) -> list[Category]:
        """All categories by frequency (highest first), then name."""
        result = await self.db.execute(
            select(Category)
            .order_by(Category.frequency.desc(), Category.name_key.asc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_most_frequent(self, limit: int = 10) -> list[Category]:
        result = await self.db.execute(
            select(Category)
            .order_by(Category.frequency.desc(), Category.name_key.asc())
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> Category | None:
        """Case-insensitive lookup."""
        result = await self.db.execute(
            select(Category)
            .where(Category.name_key == category_key(name))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def increment_usage(self, name: str, commit: bool = True) -> Category:
        """Create the category at frequency 1 or bump its frequency by one.

        Runs as a single INSERT .. ON CONFLICT statement so concurrent
        increments of the same name cannot lose updates. With ``commit=False``
        the statement joins the caller's open transaction.
        """
        name = name.strip()
        stmt = self._insert().values(name=name, name_key=category_key(name), frequency=1)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Category.name_key],
            set_={"frequency": Category.frequency + 1, "updated_at": utcnow()},
        )
        await self.db.execute(stmt)
        if commit:
            await self.db.commit()
        return await self.get_by_name(name)

    async def seed(self, names: list[str]) -> int:
        """Insert missing categories at frequency 1; existing rows are untouched.

        Returns:
            Number of categories created
        """
        existing = {c.name_key for c in await self.get_all()}
        created = 0
        for name in names:
            key = category_key(name)
            if not key or key in existing:
                continue
            stmt = self._insert().values(name=name.strip(), name_key=key, frequency=1)
            await self.db.execute(stmt.on_conflict_do_nothing(index_elements=[Category.name_key]))
            existing.add(key)
            created += 1
        await self.db.commit()
        return created

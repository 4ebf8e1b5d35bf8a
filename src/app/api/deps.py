"""FastAPI dependency injection for services and the categorization engine."""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.categorization.registry import CategoryRegistry
from app.categorization.resolver import CategoryResolver
from app.categorization.semantic import SemanticClassifier
from app.db.session import get_db
from app.services.categorization import BatchCategorizer
from app.services.expense import ExpenseService

__all__ = [
    "get_batch_categorizer",
    "get_category_registry",
    "get_category_resolver",
    "get_db",
    "get_expense_service",
]


@lru_cache
def get_category_resolver() -> CategoryResolver:
    """Process-wide resolver; the OpenAI client keeps its own connection pool."""
    return CategoryResolver(semantic=SemanticClassifier.from_settings())


async def get_expense_service(db: AsyncSession = Depends(get_db)) -> ExpenseService:
    return ExpenseService(db)


async def get_category_registry(db: AsyncSession = Depends(get_db)) -> CategoryRegistry:
    return CategoryRegistry(db)


async def get_batch_categorizer(
    db: AsyncSession = Depends(get_db),
    resolver: CategoryResolver = Depends(get_category_resolver),
) -> BatchCategorizer:
    """
    Get batch categorizer instance.

    Args:
        db: Database session
        resolver: Shared category resolver

    Returns:
        BatchCategorizer bound to this request's session
    """
    return BatchCategorizer(db, resolver)

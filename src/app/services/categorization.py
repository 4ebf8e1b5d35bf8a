"""Batch expense categorization.

Expenses are processed one at a time, in request order. Each item ends in
its own success or error outcome so one bad expense never stops the rest;
only an empty request is rejected outright.
"""

import logging
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.categorization.registry import CategoryRegistry
from app.categorization.resolver import CategoryResolver
from app.config import settings
from app.core.exceptions import InvalidRequestError, NoCategoryAvailableError, PersistenceError
from app.models.expense import Expense
from app.repositories.expense import ExpenseRepository
from app.schemas.categorization import ClassificationOutcome

logger = logging.getLogger(__name__)

EXPENSE_NOT_FOUND = "Expense not found"
EXPENSE_LOAD_FAILED = "Failed to load expense"
CATEGORY_UNAVAILABLE = "Could not predict category"
CLASSIFIER_FAILED = "AI service error"
SAVE_FAILED = "Failed to save category"


class BatchCategorizer:
    """Assign categories to a batch of stored expenses."""

    def __init__(self, db: AsyncSession, resolver: CategoryResolver):
        """
        Args:
            db: Database session shared by the expense and category stores
            resolver: Category resolver (semantic with keyword fallback)
        """
        self.db = db
        self.resolver = resolver
        self.expense_repo = ExpenseRepository(db)
        self.registry = CategoryRegistry(db)

    async def categorize_batch(
        self, expense_ids: Sequence[UUID | str | int]
    ) -> list[ClassificationOutcome]:
        """Categorize each expense and report one outcome per id, in order.

        Raises:
            InvalidRequestError: If ``expense_ids`` is empty. Nothing is read
                or written in that case.
        """
        if not expense_ids:
            raise InvalidRequestError(details={"field": "expenseIds"})

        known_categories = await self.registry.names()
        logger.info(
            "Starting batch categorization",
            extra={"expense_count": len(expense_ids), "category_count": len(known_categories)},
        )

        results = []
        for expense_id in expense_ids:
            results.append(await self._categorize_one(str(expense_id), known_categories))

        succeeded = sum(1 for outcome in results if outcome.status == "success")
        logger.info(
            "Batch categorization complete",
            extra={"succeeded": succeeded, "failed": len(results) - succeeded},
        )
        return results

    async def _categorize_one(
        self, expense_id: str, known_categories: list[str]
    ) -> ClassificationOutcome:
        try:
            expense = await self._load(expense_id)
        except PersistenceError:
            return ClassificationOutcome.error(expense_id, EXPENSE_LOAD_FAILED)
        if expense is None:
            return ClassificationOutcome.error(expense_id, EXPENSE_NOT_FOUND)

        previous_category = expense.category

        try:
            category = await self.resolver.resolve(expense.description, known_categories)
        except NoCategoryAvailableError:
            logger.error("No categories available", extra={"expense_id": expense_id})
            return ClassificationOutcome.error(expense_id, CATEGORY_UNAVAILABLE)
        except Exception as e:
            self._log_failure("Categorization failed", expense_id, e)
            return ClassificationOutcome.error(expense_id, CLASSIFIER_FAILED)

        try:
            saved = await self._persist(expense_id, expense, category)
        except PersistenceError:
            return ClassificationOutcome.error(expense_id, SAVE_FAILED)
        if not saved:
            return ClassificationOutcome.error(expense_id, EXPENSE_NOT_FOUND)

        return ClassificationOutcome.success(expense_id, previous_category, category)

    async def _load(self, expense_id: str) -> Expense | None:
        try:
            key = UUID(expense_id)
        except ValueError:
            return None

        try:
            return await self.expense_repo.get_by_id(key)
        except SQLAlchemyError as e:
            await self.db.rollback()
            self._log_failure("Failed to load expense", expense_id, e)
            raise PersistenceError(details={"expense_id": expense_id}) from e

    async def _persist(self, expense_id: str, expense: Expense, category: str) -> bool:
        """Save the new category and count one use of it in one transaction.

        Returns:
            False if the expense was deleted after it was loaded.
        """
        # Rollback expires ``expense``; read everything needed up front.
        key = expense.id
        description = expense.description
        amount = expense.amount
        expense_date = expense.expense_date

        try:
            updated = await self.expense_repo.update_fields(
                key, description, amount, category, expense_date, commit=False
            )
            if updated is None:
                await self.db.rollback()
                return False
            await self.registry.increment_usage(category, commit=False)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            self._log_failure("Failed to save category", expense_id, e)
            raise PersistenceError(details={"expense_id": expense_id}) from e
        return True

    @staticmethod
    def _log_failure(message: str, expense_id: str, exc: Exception) -> None:
        # Exception text can echo the expense description; keep it out of non-debug logs.
        extra = {"expense_id": expense_id, "error_type": type(exc).__name__}
        if settings.debug:
            logger.exception(message, extra=extra)
        else:
            logger.error(message, extra=extra)

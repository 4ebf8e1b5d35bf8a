"""Expense service for CRUD and monthly reporting."""
import logging
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.categorization.registry import CategoryRegistry
from app.core.exceptions import NotFoundError
from app.models.expense import Expense
from app.repositories.expense import ExpenseRepository
from app.schemas.expense import ExpenseCreate, ExpenseUpdate

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service layer for expense operations.

    Choosing a category by hand counts as a use of that category, so the
    registry's ranking reflects both manual and automatic categorization.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.expense_repo = ExpenseRepository(db)
        self.registry = CategoryRegistry(db)

    async def list_expenses(self) -> list[Expense]:
        return await self.expense_repo.get_all()

    async def get_expense(self, expense_id: UUID) -> Expense:
        """
        Raises:
            NotFoundError: If the expense does not exist
        """
        expense = await self.expense_repo.get_by_id(expense_id)
        if expense is None:
            raise NotFoundError(details={"expense_id": str(expense_id)})
        return expense

    async def create_expense(self, payload: ExpenseCreate) -> Expense:
        category = (payload.category or "").strip() or None
        expense = await self.expense_repo.create(
            Expense(
                description=payload.description,
                amount=payload.amount,
                category=category,
                expense_date=payload.expense_date or date.today(),
            )
        )
        if category:
            await self.registry.increment_usage(category)

        logger.info("Expense created", extra={"expense_id": str(expense.id)})
        return expense

    async def update_expense(self, expense_id: UUID, payload: ExpenseUpdate) -> Expense:
        """Apply a partial update.

        Raises:
            NotFoundError: If the expense does not exist
        """
        existing = await self.get_expense(expense_id)
        previous_category = existing.category
        category = (payload.category or "").strip() or None

        updated = await self.expense_repo.update_fields(
            expense_id,
            payload.description or existing.description,
            payload.amount or existing.amount,
            category or existing.category,
            payload.expense_date or existing.expense_date,
        )
        if category and category != previous_category:
            await self.registry.increment_usage(category)

        logger.info("Expense updated", extra={"expense_id": str(expense_id)})
        return updated

    async def delete_expense(self, expense_id: UUID) -> Expense:
        """
        Raises:
            NotFoundError: If the expense does not exist
        """
        deleted = await self.expense_repo.delete(expense_id)
        if deleted is None:
            raise NotFoundError(details={"expense_id": str(expense_id)})
        logger.info("Expense deleted", extra={"expense_id": str(expense_id)})
        return deleted

    async def get_month(self, year: int, month: int) -> tuple[list[Expense], list[dict], Decimal]:
        """Expenses, per-category totals and grand total for one month."""
        expenses = await self.expense_repo.get_by_month(year, month)
        summary, total = await self.get_monthly_summary(year, month)
        return expenses, summary, total

    async def get_monthly_summary(self, year: int, month: int) -> tuple[list[dict], Decimal]:
        summary = await self.expense_repo.get_monthly_summary(year, month)
        total = sum((row["total_amount"] for row in summary), Decimal("0"))
        return summary, total

"""Expense repository with date filtering and monthly aggregation."""
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.expense import Expense
from app.repositories.base import BaseRepository


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return [start, end) dates for a calendar month."""
    start_date = date(year, month, 1)
    if month == 12:
        end_date = date(year + 1, 1, 1)
    else:
        end_date = date(year, month + 1, 1)
    return start_date, end_date


class ExpenseRepository(BaseRepository[Expense]):
    """Repository for Expense model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Expense)

    async def get_all(self) -> list[Expense]:
        """Get all expenses, newest first."""
        result = await self.db.execute(
            select(Expense).order_by(Expense.expense_date.desc(), Expense.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_by_month(self, year: int, month: int) -> list[Expense]:
        """Get expenses dated within a calendar month, newest first."""
        start_date, end_date = month_bounds(year, month)
        result = await self.db.execute(
            select(Expense)
            .where(Expense.expense_date >= start_date, Expense.expense_date < end_date)
            .order_by(Expense.expense_date.desc(), Expense.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_monthly_summary(self, year: int, month: int) -> list[dict]:
        """
        Totals per category for a calendar month.
        Returns rows of {category, total_amount, transaction_count}, largest total first.
        """
        start_date, end_date = month_bounds(year, month)
        total = func.sum(Expense.amount).label("total_amount")
        result = await self.db.execute(
            select(
                Expense.category,
                total,
                func.count(Expense.id).label("transaction_count"),
            )
            .where(Expense.expense_date >= start_date, Expense.expense_date < end_date)
            .group_by(Expense.category)
            .order_by(total.desc())
        )
        return [
            {
                "category": row.category or "Uncategorized",
                "total_amount": Decimal(str(row.total_amount or 0)),
                "transaction_count": int(row.transaction_count or 0),
            }
            for row in result
        ]

    async def update_fields(
        self,
        id: UUID,
        description: str,
        amount: Decimal,
        category: str | None,
        expense_date: date,
        commit: bool = True,
    ) -> Expense | None:
        """Overwrite the editable fields of an expense. None if it no longer exists."""
        return await self.update(
            id,
            {
                "description": description,
                "amount": amount,
                "category": category,
                "expense_date": expense_date,
            },
            commit=commit,
        )

"""Expense request/response schemas."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ExpenseCreate(BaseModel):
    """Request to record a new expense."""

    description: str = Field(min_length=1, max_length=255)
    amount: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    category: str | None = Field(None, max_length=100, description="Optional category name")
    expense_date: date | None = Field(None, description="Defaults to today when omitted")


class ExpenseUpdate(BaseModel):
    """Partial update; omitted fields keep their current values."""

    description: str | None = Field(None, min_length=1, max_length=255)
    amount: Decimal | None = Field(None, gt=0, max_digits=10, decimal_places=2)
    category: str | None = Field(None, max_length=100)
    expense_date: date | None = None


class ExpenseResponse(BaseModel):
    id: UUID
    description: str
    amount: Decimal
    category: str | None
    expense_date: date
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryTotal(BaseModel):
    """Spending for one category within a month."""

    category: str
    total_amount: Decimal
    transaction_count: int


class MonthlyExpensesResult(BaseModel):
    expenses: list[ExpenseResponse]
    summary: list[CategoryTotal]
    total_amount: Decimal


class MonthlySummaryResult(BaseModel):
    summary: list[CategoryTotal]
    total_amount: Decimal
    month: int
    year: int


class ExpenseDeleteResult(BaseModel):
    message: str = "Expense deleted successfully"
    expense: ExpenseResponse

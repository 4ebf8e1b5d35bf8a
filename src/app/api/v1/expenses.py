"""Expense endpoints, including AI batch categorization."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status

from app.api.deps import get_batch_categorizer, get_expense_service
from app.schemas.categorization import CategorizeBatchRequest, CategorizeBatchResponse
from app.schemas.expense import (
    CategoryTotal,
    ExpenseCreate,
    ExpenseDeleteResult,
    ExpenseResponse,
    ExpenseUpdate,
    MonthlyExpensesResult,
    MonthlySummaryResult,
)
from app.services.categorization import BatchCategorizer
from app.services.expense import ExpenseService

router = APIRouter(prefix="/expenses", tags=["expenses"])

Year = Annotated[int, Path(ge=1900, le=9999, description="Calendar year")]
Month = Annotated[int, Path(ge=1, le=12, description="Calendar month (1-12)")]


@router.get("", response_model=list[ExpenseResponse], summary="List expenses")
async def list_expenses(
    service: ExpenseService = Depends(get_expense_service),
) -> list[ExpenseResponse]:
    """All expenses, newest first."""
    expenses = await service.list_expenses()
    return [ExpenseResponse.model_validate(e) for e in expenses]


@router.get(
    "/month/{year}/{month}",
    response_model=MonthlyExpensesResult,
    summary="Expenses and category totals for a month",
)
async def get_expenses_by_month(
    year: Year,
    month: Month,
    service: ExpenseService = Depends(get_expense_service),
) -> MonthlyExpensesResult:
    expenses, summary, total = await service.get_month(year, month)
    return MonthlyExpensesResult(
        expenses=[ExpenseResponse.model_validate(e) for e in expenses],
        summary=[CategoryTotal(**row) for row in summary],
        total_amount=total,
    )


@router.get(
    "/summary/{year}/{month}",
    response_model=MonthlySummaryResult,
    summary="Category totals for a month",
)
async def get_monthly_summary(
    year: Year,
    month: Month,
    service: ExpenseService = Depends(get_expense_service),
) -> MonthlySummaryResult:
    summary, total = await service.get_monthly_summary(year, month)
    return MonthlySummaryResult(
        summary=[CategoryTotal(**row) for row in summary],
        total_amount=total,
        month=month,
        year=year,
    )


@router.post(
    "/categorize",
    response_model=CategorizeBatchResponse,
    response_model_exclude_none=True,
    summary="Categorize expenses with AI",
    description="""
    Assign a category to each listed expense.

    - A language model picks from the known categories when an API key is configured
    - Keyword rules are used when the model is unavailable or answers off-list
    - Every expense gets its own outcome; one failure does not stop the batch
    - Results are returned in request order
    """,
    responses={
        200: {"description": "Per-expense outcomes"},
        400: {"description": "Missing or empty expenseIds"},
    },
)
async def categorize_expenses(
    payload: CategorizeBatchRequest,
    categorizer: BatchCategorizer = Depends(get_batch_categorizer),
) -> CategorizeBatchResponse:
    results = await categorizer.categorize_batch(payload.expense_ids)
    return CategorizeBatchResponse(results=results)


@router.get(
    "/{expense_id}",
    response_model=ExpenseResponse,
    summary="Get an expense",
    responses={404: {"description": "Expense not found"}},
)
async def get_expense(
    expense_id: UUID,
    service: ExpenseService = Depends(get_expense_service),
) -> ExpenseResponse:
    return ExpenseResponse.model_validate(await service.get_expense(expense_id))


@router.post(
    "",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record an expense",
)
async def create_expense(
    payload: ExpenseCreate,
    service: ExpenseService = Depends(get_expense_service),
) -> ExpenseResponse:
    return ExpenseResponse.model_validate(await service.create_expense(payload))


@router.put(
    "/{expense_id}",
    response_model=ExpenseResponse,
    summary="Update an expense",
    responses={404: {"description": "Expense not found"}},
)
async def update_expense(
    expense_id: UUID,
    payload: ExpenseUpdate,
    service: ExpenseService = Depends(get_expense_service),
) -> ExpenseResponse:
    return ExpenseResponse.model_validate(await service.update_expense(expense_id, payload))


@router.delete(
    "/{expense_id}",
    response_model=ExpenseDeleteResult,
    summary="Delete an expense",
    responses={404: {"description": "Expense not found"}},
)
async def delete_expense(
    expense_id: UUID,
    service: ExpenseService = Depends(get_expense_service),
) -> ExpenseDeleteResult:
    deleted = await service.delete_expense(expense_id)
    return ExpenseDeleteResult(expense=ExpenseResponse.model_validate(deleted))

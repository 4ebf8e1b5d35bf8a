"""Batch categorization request/response schemas.

Field names are camelCase on the wire (``expenseIds``, ``newCategory``)
and snake_case in Python.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CategorizeBatchRequest(CamelModel):
    """Expenses to categorize, processed in the given order."""

    expense_ids: list[str | int] = Field(
        default_factory=list, description="Expense IDs (must not be empty)"
    )


class ClassificationOutcome(CamelModel):
    """Result for one expense of a batch."""

    id: str
    status: Literal["success", "error"]
    previous_category: str | None = Field(
        None, description="Category before categorization, 'None' if unset (success only)"
    )
    new_category: str | None = Field(None, description="Assigned category (success only)")
    message: str | None = Field(None, description="Failure reason (error only)")

    @classmethod
    def success(cls, id: str, previous_category: str | None, new_category: str) -> "ClassificationOutcome":
        return cls(
            id=id,
            status="success",
            previous_category=previous_category or "None",
            new_category=new_category,
        )

    @classmethod
    def error(cls, id: str, message: str) -> "ClassificationOutcome":
        return cls(id=id, status="error", message=message)


class CategorizeBatchResponse(CamelModel):
    results: list[ClassificationOutcome]

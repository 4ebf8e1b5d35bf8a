"""Database models."""
from app.models.category import Category
from app.models.expense import Expense

__all__ = ["Category", "Expense"]

"""API version 1 routes."""

from fastapi import APIRouter

from app.api.v1 import categories, expenses

router = APIRouter(prefix="/api/v1")

router.include_router(expenses.router)
router.include_router(categories.router)

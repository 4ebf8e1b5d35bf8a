from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_category_resolver
from app.categorization.resolver import CategoryResolver
from app.db.session import get_db
from app.models.category import Category

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(resolver: CategoryResolver = Depends(get_category_resolver)):
    """Basic health check, reporting which categorization tier is active."""
    return {
        "status": "ok",
        "categorization": "semantic" if resolver.semantic_enabled else "keyword",
    }


@router.get("/health/ready")
async def health_ready(db: AsyncSession = Depends(get_db)):
    """Readiness check with database connection and category count."""
    try:
        await db.execute(text("SELECT 1"))
        categories = (await db.execute(select(func.count(Category.id)))).scalar_one()
        return {"status": "ready", "database": "connected", "categories": categories}
    except Exception as e:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not ready",
                "database": "disconnected",
                "error": type(e).__name__,
            },
        )

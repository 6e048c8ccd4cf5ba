from fastapi import APIRouter
from sqlalchemy import text

from app.database import get_session

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Basic health check"""
    return {"status": "healthy", "service": "Jewelry Storefront API"}


@router.get("/health/db")
async def database_health():
    """Check database connectivity and count stored documents per collection"""
    try:
        async with get_session() as session:
            result = await session.execute(
                text("SELECT collection, COUNT(*) FROM documents GROUP BY collection ORDER BY collection")
            )
            collections = {row[0]: row[1] for row in result}
    except Exception as e:
        return {
            "status": "unhealthy",
            "database": "error",
            "error": str(e)
        }

    return {
        "status": "healthy",
        "database": "connected",
        "documents_count": sum(collections.values()),
        "collections": collections,
    }

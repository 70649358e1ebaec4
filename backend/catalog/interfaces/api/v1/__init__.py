from fastapi import APIRouter
from sqlalchemy import text

from ...dependencies import DbSession

router = APIRouter(prefix="/v1")


@router.get(
    "/health",
    summary="API Health Check",
    description="Health check endpoint for monitoring and container orchestration.",
    responses={
        200: {"description": "API is healthy and the database answers"},
    },
)
async def health_check(db: DbSession):
    """Health check endpoint that also pings the database."""
    await db.execute(text("SELECT 1"))
    return {"status": "healthy", "message": "Local Library is running"}

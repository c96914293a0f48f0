# routes/dashboard.py
from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError
import logging

from database import get_db
from errors import StorageError
from services.aggregation import dashboard_stats, list_courses_with_students

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["dashboard"])

@router.get("/dashboard")
async def get_dashboard(db=Depends(get_db)):
    courses = await list_courses_with_students(db)
    return dashboard_stats(courses)

@router.get("/health")
async def health(db=Depends(get_db)):
    try:
        await db.command("ping")
    except PyMongoError as e:
        logger.error(f"Database ping failed: {e}")
        raise StorageError(f"Database unavailable: {e}")
    return {"status": "ok"}

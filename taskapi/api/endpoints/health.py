# api/endpoints/health.py
from fastapi import APIRouter, Depends

from taskapi.api.deps import get_database
from taskapi.api.responses import success
from taskapi.db import Database
from taskapi.errors import StoreUnavailable

router = APIRouter()


@router.get("")
async def health(db: Database = Depends(get_database)):
    """Checks that a pooled connection can answer ``SELECT 1``."""
    if not await db.ping():
        raise StoreUnavailable("Database did not answer the health check")
    return success({"database": "ok"})

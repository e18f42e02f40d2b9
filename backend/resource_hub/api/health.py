"""Liveness endpoint."""

import logging

from fastapi import APIRouter, Depends
from pymongo.database import Database
from pymongo.errors import PyMongoError

from resource_hub.config import settings
from resource_hub.database.mongo import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
def health(db: Database = Depends(get_db)):
    """Report whether the API is up and the database answers a ping."""
    try:
        db.command("ping")
        database = "ok"
    except PyMongoError as e:
        logger.warning("Database ping failed: %s", e)
        database = "unavailable"
    return {
        "success": database == "ok",
        "data": {"api": "ok", "database": database, "version": settings.APP_VERSION},
    }

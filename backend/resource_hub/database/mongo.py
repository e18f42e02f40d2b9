"""
MongoDB connection helpers.
"""

from functools import lru_cache
from typing import Iterator

from pymongo import MongoClient
from pymongo.database import Database

from resource_hub.config import settings


@lru_cache(maxsize=1)
def get_client() -> MongoClient:
    """Process-wide client. Stored datetimes are read back as aware UTC values."""
    return MongoClient(settings.MONGODB_URI, tz_aware=True)


def get_database() -> Database:
    return get_client()[settings.MONGODB_DB_NAME]


def get_db() -> Iterator[Database]:
    yield get_database()

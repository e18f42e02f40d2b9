"""Database index management for MongoDB collections."""

import logging

from pymongo.database import Database
from pymongo.errors import OperationFailure

logger = logging.getLogger(__name__)


def ensure_indexes(db: Database) -> None:
    """
    Ensure all required indexes exist.

    Called on application startup. The unique email index is what makes
    concurrent registrations with the same address fail instead of creating
    two accounts.
    """
    _ensure_users_indexes(db)
    _ensure_resources_indexes(db)
    logger.info("Database indexes ensured successfully")


def _create_index(collection, keys, name: str, **options) -> None:
    try:
        collection.create_index(keys, background=True, name=name, **options)
        logger.debug("Created index: %s", name)
    except OperationFailure as e:
        # Index may already exist with different options
        if "already exists" not in str(e):
            logger.warning("Failed to create %s index: %s", name, e)


def _ensure_users_indexes(db: Database) -> None:
    """Create indexes for users collection."""
    _create_index(db.users, [("email", 1)], "email_unique", unique=True)
    _create_index(db.users, [("created_at", -1)], "users_created_at_idx")


def _ensure_resources_indexes(db: Database) -> None:
    """Create indexes for resources collection."""
    collection = db.resources

    # Default listing (newest first) and the creator dashboard
    _create_index(collection, [("created_at", -1)], "created_at_idx")
    _create_index(
        collection, [("created_by", 1), ("created_at", -1)], "created_by_created_at_idx"
    )

    # Category filter combined with the default sort
    _create_index(
        collection, [("category", 1), ("created_at", -1)], "category_created_at_idx"
    )

    # "rating" and "likes" sorts, each with the creation-time tiebreaker
    _create_index(
        collection,
        [("average_rating", -1), ("created_at", -1)],
        "average_rating_created_at_idx",
    )
    _create_index(
        collection,
        [("likes_count", -1), ("created_at", -1)],
        "likes_count_created_at_idx",
    )

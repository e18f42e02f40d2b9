from __future__ import annotations

"""Base repository pattern for MongoDB operations"""

from abc import ABC
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database

from resource_hub.core.exceptions import InternalError

T = TypeVar("T", bound=BaseModel)


class BaseRepository(ABC, Generic[T]):
    """Base repository providing common CRUD operations for MongoDB collections"""

    # Rounds of the add/remove pair in toggle_member before giving up
    TOGGLE_ATTEMPTS = 5

    def __init__(self, db: Database, collection_name: str, model_class: Type[T]):
        self.db = db
        self.collection: Collection = db[collection_name]
        self.model_class = model_class

    def find_by_id(
        self, entity_id: str | ObjectId, projection: Optional[Dict[str, Any]] = None
    ) -> Optional[T]:
        """Find a document by its ID"""
        identifier = self._to_object_id(entity_id)
        if identifier is None:
            return None
        doc = self.collection.find_one({"_id": identifier}, projection)
        return self._to_model(doc)

    def find_one(self, query: Dict[str, Any]) -> Optional[T]:
        """Find a single document matching the query"""
        doc = self.collection.find_one(query)
        return self._to_model(doc)

    def find_many(
        self,
        query: Dict[str, Any],
        sort: Optional[List[tuple]] = None,
        skip: int = 0,
        limit: int = 0,
        projection: Optional[Dict[str, Any]] = None,
    ) -> List[T]:
        """Find multiple documents matching the query"""
        cursor = self.collection.find(query, projection)
        if sort:
            cursor = cursor.sort(sort)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return [self._to_model(doc) for doc in cursor if doc]

    def paginate(
        self,
        query: Dict[str, Any],
        sort: Optional[List[tuple]] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> tuple[List[T], int]:
        """Return paginated results plus total count for the query."""
        items = self.find_many(query, sort=sort, skip=skip, limit=limit)
        total = self.count(query)
        return items, total

    def insert_one(self, document: T | Dict[str, Any]) -> T:
        """Insert a single document"""
        if isinstance(document, BaseModel):
            doc_dict = document.model_dump(by_alias=True, exclude_none=True)
        else:
            doc_dict = document

        result = self.collection.insert_one(doc_dict)
        doc_dict["_id"] = result.inserted_id
        return self._to_model(doc_dict)

    def delete_one(self, entity_id: str | ObjectId) -> bool:
        """Delete a document by ID"""
        identifier = self._to_object_id(entity_id)
        if identifier is None:
            return False
        result = self.collection.delete_one({"_id": identifier})
        return result.deleted_count > 0

    def count(self, query: Dict[str, Any] = None) -> int:
        """Count documents matching the query"""
        if query is None:
            query = {}
        return self.collection.count_documents(query)

    def exists(self, entity_id: str | ObjectId) -> bool:
        identifier = self._to_object_id(entity_id)
        if identifier is None:
            return False
        return self.collection.find_one({"_id": identifier}, {"_id": 1}) is not None

    def find_one_and_update(
        self,
        query: Dict[str, Any],
        update: Dict[str, Any],
        projection: Optional[Dict[str, Any]] = None,
    ) -> Optional[T]:
        """
        Atomically find and update a document.

        Args:
            query: Filter to find the document
            update: Update operations (e.g., {"$set": {...}})
            projection: Fields to include/exclude in the returned document

        Returns:
            The updated document, or None when nothing matched the filter
        """
        doc = self.collection.find_one_and_update(
            query,
            update,
            projection=projection,
            return_document=ReturnDocument.AFTER,
        )
        return self._to_model(doc)

    def toggle_member(
        self,
        entity_id: str | ObjectId,
        field: str,
        value: Any,
        counter_field: Optional[str] = None,
        projection: Optional[Dict[str, Any]] = None,
    ) -> Tuple[Optional[T], bool]:
        """
        Flip ``value``'s membership in the array ``field`` of one document.

        Each step is a single conditional update guarded on the current
        membership, so two concurrent toggles cannot both add or both remove.
        ``counter_field`` (if given) is kept equal to the array length in the
        same write.

        Returns:
            (document after the write, True if added / False if removed);
            (None, False) if the document does not exist.
        """
        identifier = self._to_object_id(entity_id)
        if identifier is None:
            return None, False

        for _ in range(self.TOGGLE_ATTEMPTS):
            now = datetime.now(timezone.utc)

            add: Dict[str, Any] = {"$addToSet": {field: value}, "$set": {"updated_at": now}}
            if counter_field:
                add["$inc"] = {counter_field: 1}
            doc = self.find_one_and_update(
                {"_id": identifier, field: {"$ne": value}}, add, projection
            )
            if doc is not None:
                return doc, True

            remove: Dict[str, Any] = {"$pull": {field: value}, "$set": {"updated_at": now}}
            if counter_field:
                remove["$inc"] = {counter_field: -1}
            doc = self.find_one_and_update({"_id": identifier, field: value}, remove, projection)
            if doc is not None:
                return doc, False

            # Neither guard matched: the document is gone, or another caller
            # flipped the membership between our two attempts
            if not self.exists(identifier):
                return None, False

        raise InternalError(
            f"Could not update {field}: too many concurrent modifications",
        )

    def _to_model(self, doc: Optional[Dict[str, Any]]) -> Optional[T]:
        """Convert a dictionary to a model instance"""
        if not doc:
            return None
        return self.model_class.model_validate(doc)

    @staticmethod
    def _to_object_id(value: str | ObjectId | None) -> ObjectId | None:
        """Convert a string ID to ObjectId"""
        if value is None:
            return None
        if isinstance(value, ObjectId):
            return value
        if isinstance(value, str):
            try:
                return ObjectId(value)
            except (InvalidId, TypeError):
                return None
        return None

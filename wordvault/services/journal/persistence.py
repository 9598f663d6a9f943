from __future__ import annotations

import logging
from typing import Any

from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ...errors import PersistenceError
from ...serializers import COLLECTIONS, PHRASES, WORDS

logger = logging.getLogger(__name__)


class MongoPersistence:
    """Write-through backend for the entity store, one Mongo collection per kind."""

    def __init__(self, database: Database) -> None:
        self._db = database

    def upsert(self, collection: str, doc: dict[str, Any]) -> None:
        try:
            self._db[collection].replace_one({"_id": doc["_id"]}, doc, upsert=True)
        except PyMongoError as exc:
            raise PersistenceError(f"Could not save to {collection}: {exc}") from exc

    def delete(self, collection: str, doc_id: str) -> None:
        try:
            self._db[collection].delete_one({"_id": doc_id})
        except PyMongoError as exc:
            raise PersistenceError(f"Could not delete from {collection}: {exc}") from exc

    def load(self, collection: str) -> list[dict[str, Any]]:
        try:
            return list(self._db[collection].find({}).sort("created_at", ASCENDING))
        except PyMongoError as exc:
            raise PersistenceError(f"Could not load {collection}: {exc}") from exc

    def ensure_indexes(self) -> None:
        try:
            for collection in (WORDS, PHRASES):
                self._db[collection].create_index([("created_at", DESCENDING)])
                self._db[collection].create_index("text_key")
                self._db[collection].create_index("collection_names")
            self._db[COLLECTIONS].create_index("name_key")
        except PyMongoError as exc:
            logger.warning("Index creation skipped: %s", exc)


__all__ = ["MongoPersistence"]

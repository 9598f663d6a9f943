from __future__ import annotations

from ..config import MONGODB_DB, MONGODB_URI
from ..db import get_database
from ..services.journal.persistence import MongoPersistence
from ..services.journal.store import EntityStore


def open_store(uri: str = MONGODB_URI, db_name: str = MONGODB_DB) -> EntityStore:
    persistence = MongoPersistence(get_database(uri, db_name))
    persistence.ensure_indexes()
    store = EntityStore(persistence)
    store.load()
    return store

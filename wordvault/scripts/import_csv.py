from __future__ import annotations

import argparse
import logging
from pathlib import Path

from ..config import LOG_LEVEL, MONGODB_DB, MONGODB_URI
from ..errors import ImportFileError
from ..services.journal.csv_transfer import import_csv
from ..services.journal.item_service import ItemService
from .common import open_store


def import_file(csv_path: str, uri: str, db_name: str) -> int:
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(f"CSV not found: {path.as_posix()}")

    store = open_store(uri, db_name)
    # Enrichment needs the API's event loop; imported rows get it on refresh.
    service = ItemService(store)
    try:
        summary = import_csv(path.read_bytes(), service, enrich=False)
    except ImportFileError as exc:
        print(f"Import failed: {exc}")
        return 1

    print(f"CSV: {path.as_posix()}")
    print(summary.message)
    print(f"Skipped (invalid): {summary.skipped_invalid}")
    return 0


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import words and phrases from a CSV file into WordVault.")
    parser.add_argument("csv", help="CSV path; first column is the item, optional second column is notes.")
    parser.add_argument("--mongo-uri", default=MONGODB_URI, help="MongoDB connection string.")
    parser.add_argument("--db", default=MONGODB_DB, help="MongoDB database name.")
    return parser.parse_args()


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL)
    args = parse_args()
    raise SystemExit(import_file(args.csv, args.mongo_uri, args.db))

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from ..config import LOG_LEVEL, MONGODB_DB, MONGODB_URI
from ..services.journal.csv_transfer import export_csv
from .common import open_store

DEFAULT_OUTPUT = "wordvault_export.csv"


def export_file(
    output: str,
    uri: str,
    db_name: str,
    collection: str | None,
    include_words: bool,
    include_phrases: bool,
    include_notes: bool,
) -> None:
    store = open_store(uri, db_name)
    content = export_csv(
        store,
        collection=collection,
        include_words=include_words,
        include_phrases=include_phrases,
        include_notes=include_notes,
    )
    out_path = Path(output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(content, encoding="utf-8")
    print(f"Exported {max(len(content.splitlines()) - 1, 0)} rows")
    print(f"Written: {out_path.as_posix()}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export WordVault words and phrases to CSV.")
    parser.add_argument("--out", default=DEFAULT_OUTPUT, help="Output CSV path.")
    parser.add_argument("--collection", default=None, help="Only export members of this collection.")
    parser.add_argument("--no-words", action="store_true", help="Leave words out.")
    parser.add_argument("--no-phrases", action="store_true", help="Leave phrases out.")
    parser.add_argument("--notes", action="store_true", help="Add a Notes column.")
    parser.add_argument("--mongo-uri", default=MONGODB_URI, help="MongoDB connection string.")
    parser.add_argument("--db", default=MONGODB_DB, help="MongoDB database name.")
    return parser.parse_args()


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL)
    args = parse_args()
    export_file(
        output=args.out,
        uri=args.mongo_uri,
        db_name=args.db,
        collection=args.collection,
        include_words=not args.no_words,
        include_phrases=not args.no_phrases,
        include_notes=args.notes,
    )

from __future__ import annotations

import csv
import io
import logging
from dataclasses import asdict, dataclass

from ...errors import EmptyTextError, ImportFileError, PersistenceError
from ...models.item_models import SortOption
from ...serializers import PHRASES, WORDS
from .duplicate_guard import text_key
from .item_service import ItemService
from .store import EntityStore

logger = logging.getLogger(__name__)

HEADER = "Item"
NOTES_HEADER = "Notes"


@dataclass
class ImportSummary:
    added: int = 0
    skipped_duplicates: int = 0
    skipped_invalid: int = 0
    skipped_failed: int = 0

    @property
    def message(self) -> str:
        message = (
            "Import Complete!\n"
            f"Added: {self.added}\n"
            f"Skipped (duplicates): {self.skipped_duplicates}"
        )
        if self.skipped_failed:
            message += f"\nFailed to save: {self.skipped_failed}"
        return message

    def to_dict(self) -> dict:
        return {**asdict(self), "message": self.message}


def export_csv(
    store: EntityStore,
    collection: str | None = None,
    include_words: bool = True,
    include_phrases: bool = True,
    include_notes: bool = False,
) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([HEADER, NOTES_HEADER] if include_notes else [HEADER])

    kinds = [kind for kind, wanted in ((WORDS, include_words), (PHRASES, include_phrases)) if wanted]
    for kind in kinds:
        if collection:
            items = store.fetch_in_collection(kind, collection, SortOption.alphabetical())
        else:
            items = store.fetch_all(kind, SortOption.alphabetical())
        for item in items:
            writer.writerow([item.text, item.notes] if include_notes else [item.text])
    return buffer.getvalue()


def _read_rows(content: str | bytes) -> list[list[str]]:
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ImportFileError("CSV file is not valid UTF-8") from exc
    try:
        rows = list(csv.reader(io.StringIO(content)))
    except csv.Error as exc:
        raise ImportFileError(f"Error processing CSV file: {exc}") from exc
    return [row for row in rows if any(cell.strip() for cell in row)]


def import_csv(content: str | bytes, service: ItemService, enrich: bool = True) -> ImportSummary:
    """Add every new row as a word or phrase; the first row is the header."""
    rows = _read_rows(content)
    if len(rows) <= 1:
        raise ImportFileError("CSV file is empty or contains only a header.")

    summary = ImportSummary()
    seen = {text_key(item.text) for item in service.store.all_words()}
    seen.update(text_key(item.text) for item in service.store.all_phrases())

    for row in rows[1:]:
        text = row[0].strip() if row else ""
        notes = row[1].strip() if len(row) > 1 else ""
        if not text:
            summary.skipped_invalid += 1
            continue
        key = text_key(text)
        if key in seen:
            summary.skipped_duplicates += 1
            continue
        try:
            service.create_item(text, notes=notes, enrich=enrich)
        except EmptyTextError:
            summary.skipped_invalid += 1
            continue
        except PersistenceError as exc:
            logger.warning("CSV import could not save %r: %s", text, exc)
            summary.skipped_failed += 1
            continue
        seen.add(key)
        summary.added += 1

    logger.info(
        "CSV import: %d added, %d duplicates, %d invalid, %d failed",
        summary.added,
        summary.skipped_duplicates,
        summary.skipped_invalid,
        summary.skipped_failed,
    )
    return summary


__all__ = ["HEADER", "ImportSummary", "export_csv", "import_csv"]

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from ..errors import WordVaultError
from ..models.request_models import ImportRequest, ImportResponse
from ..services.journal.csv_transfer import export_csv, import_csv
from ..state import AppState, get_state
from .common import http_error

router = APIRouter(prefix="/transfer", tags=["transfer"])


@router.get("/export", response_class=PlainTextResponse)
async def export_items(
    collection: str | None = None,
    words: bool = True,
    phrases: bool = True,
    notes: bool = False,
    state: AppState = Depends(get_state),
):
    content = export_csv(
        state.store,
        collection=collection or None,
        include_words=words,
        include_phrases=phrases,
        include_notes=notes,
    )
    return PlainTextResponse(
        content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="wordvault.csv"'},
    )


@router.post("/import", response_model=ImportResponse)
async def import_items(payload: ImportRequest, state: AppState = Depends(get_state)):
    try:
        summary = import_csv(payload.content, state.service)
    except WordVaultError as exc:
        raise http_error(exc) from exc
    return summary.to_dict()

from fastapi import APIRouter, Depends, HTTPException, status

from ..errors import WordVaultError
from ..models.item_models import ItemKind
from ..models.request_models import EnrichmentStatusResponse, ItemResponse, PhraseUpdate
from ..serializers import serialize_phrase
from ..state import AppState, get_state
from .common import http_error

router = APIRouter(prefix="/phrases", tags=["phrases"])


@router.get("/{phrase_id}", response_model=ItemResponse)
async def get_phrase(phrase_id: str, state: AppState = Depends(get_state)):
    try:
        return serialize_phrase(state.service.get_item(ItemKind.PHRASE, phrase_id))
    except WordVaultError as exc:
        raise http_error(exc) from exc


@router.patch("/{phrase_id}", response_model=ItemResponse)
async def update_phrase(phrase_id: str, payload: PhraseUpdate, state: AppState = Depends(get_state)):
    raw_data = payload.model_dump(exclude_unset=True)
    update_data = {key: value for key, value in raw_data.items() if value is not None}
    if not update_data:
        raise HTTPException(status_code=400, detail="No fields provided")
    try:
        phrase = state.service.update_phrase(phrase_id, update_data)
    except WordVaultError as exc:
        raise http_error(exc) from exc
    return serialize_phrase(phrase)


@router.delete("/{phrase_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_phrase(phrase_id: str, state: AppState = Depends(get_state)):
    try:
        state.service.delete_item(ItemKind.PHRASE, phrase_id)
    except WordVaultError as exc:
        raise http_error(exc) from exc
    return None


@router.post("/{phrase_id}/refresh", response_model=ItemResponse, status_code=status.HTTP_202_ACCEPTED)
async def refresh_phrase(phrase_id: str, state: AppState = Depends(get_state)):
    try:
        phrase = state.service.refresh_item(ItemKind.PHRASE, phrase_id)
    except WordVaultError as exc:
        raise http_error(exc) from exc
    return serialize_phrase(phrase)


@router.get("/{phrase_id}/enrichment", response_model=EnrichmentStatusResponse)
async def phrase_enrichment(phrase_id: str, state: AppState = Depends(get_state)):
    try:
        phrase = state.service.get_item(ItemKind.PHRASE, phrase_id)
    except WordVaultError as exc:
        raise http_error(exc) from exc
    return {
        "id": phrase.id,
        "kind": "phrase",
        "pending": state.enrichment.is_pending(phrase),
        "fields": {field: value.value for field, value in state.enrichment.states(phrase).items()},
    }

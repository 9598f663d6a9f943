import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..errors import ProviderError, WordVaultError
from ..models.item_models import ItemKind
from ..models.request_models import (
    EnrichmentStatusResponse,
    ItemResponse,
    PracticeRequest,
    PracticeResponse,
    WordUpdate,
)
from ..serializers import serialize_word
from ..services.providers.text_generation import PracticeMode
from ..state import AppState, get_state
from .common import http_error

router = APIRouter(prefix="/words", tags=["words"])
logger = logging.getLogger(__name__)


def _changes(payload: WordUpdate) -> dict:
    raw_data = payload.model_dump(exclude_unset=True)
    update_data = {key: value for key, value in raw_data.items() if value is not None}
    if not update_data:
        raise HTTPException(status_code=400, detail="No fields provided")
    return update_data


@router.get("/{word_id}", response_model=ItemResponse)
async def get_word(word_id: str, state: AppState = Depends(get_state)):
    try:
        return serialize_word(state.service.get_item(ItemKind.WORD, word_id))
    except WordVaultError as exc:
        raise http_error(exc) from exc


@router.patch("/{word_id}", response_model=ItemResponse)
async def update_word(word_id: str, payload: WordUpdate, state: AppState = Depends(get_state)):
    try:
        word = state.service.update_word(word_id, _changes(payload))
    except WordVaultError as exc:
        raise http_error(exc) from exc
    return serialize_word(word)


@router.delete("/{word_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_word(word_id: str, state: AppState = Depends(get_state)):
    try:
        state.service.delete_item(ItemKind.WORD, word_id)
    except WordVaultError as exc:
        raise http_error(exc) from exc
    return None


@router.post("/{word_id}/refresh", response_model=ItemResponse, status_code=status.HTTP_202_ACCEPTED)
async def refresh_word(word_id: str, state: AppState = Depends(get_state)):
    try:
        word = state.service.refresh_item(ItemKind.WORD, word_id)
    except WordVaultError as exc:
        raise http_error(exc) from exc
    return serialize_word(word)


@router.get("/{word_id}/enrichment", response_model=EnrichmentStatusResponse)
async def word_enrichment(word_id: str, state: AppState = Depends(get_state)):
    try:
        word = state.service.get_item(ItemKind.WORD, word_id)
    except WordVaultError as exc:
        raise http_error(exc) from exc
    return {
        "id": word.id,
        "kind": "word",
        "pending": state.enrichment.is_pending(word),
        "fields": {field: value.value for field, value in state.enrichment.states(word).items()},
    }


@router.get("/{word_id}/audio")
async def word_audio(word_id: str, state: AppState = Depends(get_state)):
    try:
        word = state.service.get_item(ItemKind.WORD, word_id)
    except WordVaultError as exc:
        raise http_error(exc) from exc
    if not word.audio_url:
        raise HTTPException(status_code=404, detail="No pronunciation audio for this word")
    try:
        data = await asyncio.to_thread(state.audio.get, word.audio_url)
    except ProviderError as exc:
        logger.warning("Audio download failed for %r: %s", word.text, exc)
        raise HTTPException(status_code=502, detail="Could not fetch pronunciation audio") from exc
    return Response(content=data, media_type="audio/mpeg")


@router.get("/{word_id}/links", response_model=list[ItemResponse])
async def list_links(word_id: str, state: AppState = Depends(get_state)):
    try:
        return [serialize_word(other) for other in state.service.linked_words(word_id)]
    except WordVaultError as exc:
        raise http_error(exc) from exc


@router.post("/{word_id}/links/{other_id}", response_model=ItemResponse)
async def link_word(word_id: str, other_id: str, state: AppState = Depends(get_state)):
    try:
        word = state.service.link_words(word_id, other_id)
    except WordVaultError as exc:
        raise http_error(exc) from exc
    return serialize_word(word)


@router.delete("/{word_id}/links/{other_id}", response_model=ItemResponse)
async def unlink_word(word_id: str, other_id: str, state: AppState = Depends(get_state)):
    try:
        word = state.service.unlink_words(word_id, other_id)
    except WordVaultError as exc:
        raise http_error(exc) from exc
    return serialize_word(word)


@router.post("/{word_id}/practice/{mode}", response_model=PracticeResponse)
async def practice_word(
    word_id: str,
    mode: PracticeMode,
    payload: PracticeRequest,
    state: AppState = Depends(get_state),
):
    try:
        word = state.practice.word_for(word_id)
        result = await asyncio.to_thread(state.practice.evaluate, word, mode, payload.answer)
    except ProviderError as exc:
        logger.warning("Practice feedback for %s failed: %s", word_id, exc)
        raise HTTPException(status_code=502, detail="Could not evaluate the answer") from exc
    except WordVaultError as exc:
        raise http_error(exc) from exc
    return {
        "word_id": word.id,
        "mode": mode.value,
        "category": result.category.value,
        "stars": result.category.stars,
        "feedback": result.feedback,
    }

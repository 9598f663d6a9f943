from fastapi import APIRouter, Depends, status

from ..errors import WordVaultError
from ..models.request_models import CollectionCreate, CollectionOverview, CollectionResponse
from ..serializers import serialize_collection
from ..services.journal.membership import collection_overview
from ..state import AppState, get_state
from .common import http_error

router = APIRouter(prefix="/collections", tags=["collections"])


@router.get("", response_model=list[CollectionResponse])
async def list_collections(state: AppState = Depends(get_state)):
    return [serialize_collection(collection) for collection in state.service.list_collections()]


@router.get("/overview", response_model=list[CollectionOverview])
async def overview(state: AppState = Depends(get_state)):
    store = state.store
    return collection_overview(store.all_collections(), store.all_words(), store.all_phrases())


@router.post("", response_model=CollectionResponse, status_code=status.HTTP_201_CREATED)
async def create_collection(payload: CollectionCreate, state: AppState = Depends(get_state)):
    try:
        collection = state.service.create_collection(payload.name)
    except WordVaultError as exc:
        raise http_error(exc) from exc
    return serialize_collection(collection)


@router.patch("/{collection_id}", response_model=CollectionResponse)
async def rename_collection(
    collection_id: str,
    payload: CollectionCreate,
    state: AppState = Depends(get_state),
):
    try:
        collection = state.service.rename_collection(collection_id, payload.name)
    except WordVaultError as exc:
        raise http_error(exc) from exc
    return serialize_collection(collection)


@router.delete("/{collection_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_collection(collection_id: str, cascade: bool = False, state: AppState = Depends(get_state)):
    try:
        state.service.delete_collection(collection_id, cascade=cascade)
    except WordVaultError as exc:
        raise http_error(exc) from exc
    return None

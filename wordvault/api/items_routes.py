from typing import Literal

from fastapi import APIRouter, Depends, status

from ..errors import WordVaultError
from ..models.item_models import SortOption, TypeFilter, ViewParams
from ..models.request_models import DisplayItemResponse, ItemCreate, ItemResponse
from ..serializers import serialize_display_item, serialize_item
from ..state import AppState, get_state
from .common import http_error

router = APIRouter(prefix="/items", tags=["items"])


@router.get("", response_model=list[DisplayItemResponse])
async def list_items(
    collection: str | None = None,
    search: str = "",
    type: TypeFilter = TypeFilter.ALL,
    confident: bool | None = None,
    sort: Literal["date_added", "alphabetical"] = "date_added",
    ascending: bool = False,
    state: AppState = Depends(get_state),
):
    params = ViewParams(
        selected_collection=collection or None,
        search_text=search,
        type_filter=type,
        confidence_filter=confident,
        sort=SortOption(field=sort, ascending=ascending),
    )
    return [serialize_display_item(entry) for entry in state.service.display_list(params)]


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(payload: ItemCreate, state: AppState = Depends(get_state)):
    try:
        item = state.service.create_item(
            payload.text,
            notes=payload.notes,
            is_favorite=payload.is_favorite,
            is_confident=payload.is_confident,
            collection_names=payload.collection_names,
        )
    except WordVaultError as exc:
        raise http_error(exc) from exc
    return serialize_item(item)

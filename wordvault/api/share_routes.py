from fastapi import APIRouter, Depends

from ..models.request_models import ShareRequest, ShareResponse
from ..serializers import serialize_item
from ..state import AppState, get_state

router = APIRouter(prefix="/share", tags=["share"])


@router.post("", response_model=ShareResponse)
async def share_text(payload: ShareRequest, state: AppState = Depends(get_state)):
    result = await state.intake.accept(payload.text)
    return {
        "status": result.status,
        "text": result.text,
        "item": serialize_item(result.item) if result.item is not None else None,
    }


@router.get("/inbox", response_model=list[str])
async def inbox(state: AppState = Depends(get_state)):
    return state.inbox.pending()


@router.post("/inbox", response_model=list[str], status_code=202)
async def queue_shared_text(payload: ShareRequest, state: AppState = Depends(get_state)):
    state.inbox.push(payload.text)
    return state.inbox.pending()


@router.post("/inbox/flush", response_model=list[ShareResponse])
async def flush_inbox(state: AppState = Depends(get_state)):
    results = await state.inbox.flush(state.intake)
    return [
        {
            "status": result.status,
            "text": result.text,
            "item": serialize_item(result.item) if result.item is not None else None,
        }
        for result in results
    ]

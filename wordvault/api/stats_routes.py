from fastapi import APIRouter, Depends

from ..services.journal.stats import compute_stats
from ..state import AppState, get_state

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("")
async def get_stats(state: AppState = Depends(get_state)):
    return compute_stats(state.store.all_words(), state.store.all_phrases())

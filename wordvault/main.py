import asyncio
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.collections_routes import router as collections_router
from .api.items_routes import router as items_router
from .api.phrases_routes import router as phrases_router
from .api.share_routes import router as share_router
from .api.stats_routes import router as stats_router
from .api.transfer_routes import router as transfer_router
from .api.words_routes import router as words_router
from .config import CORS_ORIGINS, LOG_LEVEL
from .state import current_state, get_state

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(title="WordVault API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(items_router)
app.include_router(words_router)
app.include_router(phrases_router)
app.include_router(collections_router)
app.include_router(transfer_router)
app.include_router(share_router)
app.include_router(stats_router)


async def _load_state_background() -> None:
    try:
        await asyncio.to_thread(get_state)
    except Exception as exc:  # pragma: no cover
        logger.warning("Journal load deferred until first request: %s", exc)


@app.on_event("startup")
async def startup_state():
    # Loading from MongoDB can be slow; keep the port binding fast.
    if current_state() is None:
        asyncio.create_task(_load_state_background())


@app.on_event("shutdown")
async def shutdown_enrichment():
    state = current_state()
    if state is not None and not await state.enrichment.drain(timeout=5):
        logger.warning("Shutting down with enrichment jobs still running")


@app.get("/health")
async def health_check():
    return {"status": "ok"}

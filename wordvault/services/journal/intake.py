from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Literal

from ...config import SHARE_INTAKE_TIMEOUT
from ...errors import DuplicateItemError, EmptyTextError
from ...models.item_models import Item
from .enrichment import EnrichmentOrchestrator
from .item_service import ItemService

logger = logging.getLogger(__name__)

IntakeStatus = Literal["added", "duplicate", "invalid", "timed_out"]


@dataclass
class IntakeResult:
    status: IntakeStatus
    text: str
    item: Item | None = None


class ShareIntake:
    """Entry point for text handed over by another app.

    Follows the interactive creation path, then waits for the new item's
    enrichment (bounded by ``timeout``) before telling the host it is done.
    """

    def __init__(
        self,
        service: ItemService,
        enrichment: EnrichmentOrchestrator | None = None,
        timeout: float = SHARE_INTAKE_TIMEOUT,
    ) -> None:
        self.service = service
        self.enrichment = enrichment
        self.timeout = timeout

    async def accept(self, text: str | None) -> IntakeResult:
        raw = text or ""
        try:
            item = self.service.create_item(raw)
        except EmptyTextError:
            logger.info("Ignoring empty shared text")
            return IntakeResult(status="invalid", text=raw)
        except DuplicateItemError:
            logger.info("Shared text %r already exists", raw.strip())
            return IntakeResult(status="duplicate", text=raw.strip())

        if self.enrichment is not None:
            finished = await self.enrichment.wait_for(item, timeout=self.timeout)
            if not finished:
                logger.warning("Enrichment for shared %r still running after %.1fs", item.text, self.timeout)
                return IntakeResult(status="timed_out", text=item.text, item=item)
        return IntakeResult(status="added", text=item.text, item=item)


class SharedInbox:
    """Texts shared while nobody was around to process them, drained in arrival order."""

    def __init__(self) -> None:
        self._pending: deque[str] = deque()

    def push(self, text: str) -> None:
        self._pending.append(text)

    def pending(self) -> list[str]:
        return list(self._pending)

    def __len__(self) -> int:
        return len(self._pending)

    async def flush(self, intake: ShareIntake) -> list[IntakeResult]:
        results: list[IntakeResult] = []
        while self._pending:
            results.append(await intake.accept(self._pending.popleft()))
        return results


__all__ = ["IntakeResult", "ShareIntake", "SharedInbox"]

from __future__ import annotations

import logging

from ...errors import ValidationError
from ...models.item_models import ItemKind, Word
from ..providers.text_generation import EVALUATORS, PracticeFeedback, PracticeMode, TextGenerator
from .item_service import ItemService

logger = logging.getLogger(__name__)


class PracticeCoach:
    """Grades a learner's definition or example sentence for a stored word."""

    def __init__(self, service: ItemService, text_generator: TextGenerator) -> None:
        self._service = service
        self._text = text_generator

    def word_for(self, word_id: str) -> Word:
        return self._service.get_item(ItemKind.WORD, word_id)

    def evaluate(self, word: Word, mode: PracticeMode, answer: str) -> PracticeFeedback:
        cleaned = (answer or "").strip()
        if not cleaned:
            raise ValidationError("Answer must not be empty")
        result = EVALUATORS[mode](self._text, word.text, cleaned)
        logger.info("Practice %s for %r graded %s", mode.value, word.text, result.category.value)
        return result


__all__ = ["PracticeCoach"]

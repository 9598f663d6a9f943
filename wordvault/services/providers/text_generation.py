from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

import requests

from ...config import GEMINI_API_BASE, GEMINI_API_KEY, GEMINI_MODEL, GEMINI_TIMEOUT
from ...errors import ProviderError

logger = logging.getLogger(__name__)

NO_RESPONSE = "No response received"
NO_EXAMPLE = "No example available"

_WRAPPING_QUOTES = re.compile(r'^["“](.*)["”]$', re.DOTALL)

GENERATION_CONFIG = {
    "temperature": 1,
    "topP": 0.95,
    "topK": 40,
    "maxOutputTokens": 8192,
    "responseMimeType": "text/plain",
}


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str: ...


def _extract_text(payload: Any) -> str:
    """Join the text parts of the first candidate; an empty reply is ``""``."""
    if not isinstance(payload, dict):
        raise ProviderError("Text generation returned an unexpected payload")
    candidates = payload.get("candidates") or []
    if not candidates:
        return ""
    if not isinstance(candidates, list) or not isinstance(candidates[0], dict):
        raise ProviderError("Text generation returned a malformed candidate")
    content = candidates[0].get("content") or {}
    if not isinstance(content, dict):
        raise ProviderError("Text generation returned malformed content")
    parts = content.get("parts") or []
    if not isinstance(parts, list):
        raise ProviderError("Text generation returned malformed parts")
    return "".join(
        part["text"] for part in parts if isinstance(part, dict) and isinstance(part.get("text"), str)
    )


class GeminiTextGenerator:
    def __init__(
        self,
        api_key: str = GEMINI_API_KEY,
        model: str = GEMINI_MODEL,
        base_url: str = GEMINI_API_BASE,
        timeout: float = GEMINI_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise ProviderError("GEMINI_API_KEY is not configured")
        try:
            response = self._session.post(
                f"{self.base_url}/models/{self.model}:generateContent",
                params={"key": self.api_key},
                json={
                    "contents": [{"role": "user", "parts": [{"text": prompt}]}],
                    "generationConfig": GENERATION_CONFIG,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.debug("Text generation request failed: %s", exc)
            raise ProviderError(f"Text generation request failed: {exc}") from exc
        if response.status_code != 200:
            raise ProviderError(f"Text generation returned HTTP {response.status_code}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError("Text generation returned malformed JSON") from exc
        return _extract_text(payload)


def clean_response(text: str | None, placeholder: str) -> str:
    cleaned = (text or "").strip()
    match = _WRAPPING_QUOTES.match(cleaned)
    if match:
        cleaned = match.group(1).strip()
    return cleaned or placeholder


def fetch_fun_fact(generator: TextGenerator, word: str) -> str:
    prompt = f"Can you provide a fun bit of information about {word}?"
    return clean_response(generator.generate(prompt), NO_RESPONSE)


def fetch_fun_opinion(generator: TextGenerator, phrase: str) -> str:
    prompt = (
        f'Share a short, playful opinion about the phrase "{phrase}". '
        "Mention what it means or where it comes from if you know, "
        "and keep it to two or three sentences."
    )
    return clean_response(generator.generate(prompt), NO_RESPONSE)


def generate_example(generator: TextGenerator, word: str, part_of_speech: str, definition: str) -> str:
    prompt = (
        f'Create a natural and conversational example sentence that illustrates the usage of the word "{word}" '
        f'as a {part_of_speech} with this definition: "{definition}".\n\n'
        "Guidelines:\n"
        "- Use contemporary, everyday language that feels natural\n"
        "- Create a sentence that clearly demonstrates the meaning\n"
        f'- Be sure to use "{word}" in the sentence\n'
        "- Keep it concise (ideally 10-15 words)\n"
        "- Make it memorable and relatable\n"
        "- Respond with ONLY the example sentence and nothing else\n"
        "- If you cant think of example, just state Could not come up with an example\n\n"
        "Example sentence:"
    )
    return clean_response(generator.generate(prompt), NO_EXAMPLE)


class FeedbackCategory(str, Enum):
    EXCEPTIONAL = "Exceptional"
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    NEEDS_IMPROVEMENT = "Needs Improvement"

    @property
    def stars(self) -> int:
        return _STARS[self]


_STARS = {
    FeedbackCategory.EXCEPTIONAL: 5,
    FeedbackCategory.EXCELLENT: 4,
    FeedbackCategory.GOOD: 3,
    FeedbackCategory.FAIR: 2,
    FeedbackCategory.NEEDS_IMPROVEMENT: 1,
}
_CATEGORY_TAGS = {category: f"CATEGORY: {category.name}" for category in FeedbackCategory}
_CATEGORY_LINE = re.compile(r"CATEGORY: (EXCEPTIONAL|EXCELLENT|GOOD|FAIR|NEEDS_IMPROVEMENT)")


class PracticeMode(str, Enum):
    DEFINITION = "definition"
    USAGE = "usage"


@dataclass
class PracticeFeedback:
    category: FeedbackCategory
    feedback: str


def parse_feedback(text: str | None, default: FeedbackCategory, placeholder: str) -> PracticeFeedback:
    """Pull the ``CATEGORY:`` tag out of a graded reply.

    Tags are checked strongest first; a reply without one gets ``default``.
    """
    text = text or ""
    category = next((c for c, tag in _CATEGORY_TAGS.items() if tag in text), default)
    feedback = _CATEGORY_LINE.sub("", text).strip()
    return PracticeFeedback(category=category, feedback=feedback or placeholder)


def evaluate_definition(generator: TextGenerator, word: str, definition: str) -> PracticeFeedback:
    prompt = (
        f'As a language expert, evaluate if this definition for the word "{word}" is accurate:\n'
        f'"{definition}"\n\n'
        "Evaluate the definition based on these criteria:\n"
        "1. Accuracy: Is the definition correct and precise?\n"
        "2. Completeness: Does it cover the essential aspects of the word's meaning?\n"
        "3. Clarity: Is the explanation clear and well-structured?\n"
        "4. Depth: Does it show understanding of the word's nuances and usage?\n"
        "5. Originality: Does it demonstrate personal understanding rather than just memorization?\n\n"
        "Provide a detailed explanation of the strengths and areas for improvement in the definition.\n\n"
        "At the end of your response, categorize the definition into exactly ONE of these categories:\n"
        "- EXCEPTIONAL: Perfect definition showing deep understanding and mastery\n"
        "- EXCELLENT: Strong definition with minor room for improvement\n"
        "- GOOD: Correct definition with some room for enhancement\n"
        "- FAIR: Basic understanding with significant room for improvement\n"
        "- NEEDS_IMPROVEMENT: Incorrect or incomplete understanding\n\n"
        "Format your category as: CATEGORY: [category_name]"
    )
    return parse_feedback(
        generator.generate(prompt), FeedbackCategory.GOOD, "Could not evaluate the definition."
    )


def evaluate_usage(generator: TextGenerator, word: str, sentence: str) -> PracticeFeedback:
    prompt = (
        f'As a language expert, evaluate if the word "{word}" is used correctly in this sentence:\n'
        f'"{sentence}"\n\n'
        "BE VERY CONCISE in your feedback. Provide no more than 2-3 short sentences focusing only on "
        "the most important points. Any tenses or derivations of the word are acceptable.\n\n"
        "First, quickly determine if the usage is:\n"
        "1. Correct and appropriate\n"
        "2. Somewhat correct but could be improved\n"
        "3. Incorrect or inappropriate or word was not used at all in any form.\n\n"
        "But don't include this determination in your response.\n\n"
        "Then provide your brief feedback focusing on the most important issue.\n\n"
        "At the end, categorize the usage as: EXCEPTIONAL, EXCELLENT, GOOD, FAIR, or NEEDS_IMPROVEMENT\n\n"
        "Format your category as: CATEGORY: [category_name]"
    )
    return parse_feedback(
        generator.generate(prompt), FeedbackCategory.NEEDS_IMPROVEMENT, "Could not evaluate the sentence."
    )


EVALUATORS = {PracticeMode.DEFINITION: evaluate_definition, PracticeMode.USAGE: evaluate_usage}


__all__ = [
    "EVALUATORS",
    "FeedbackCategory",
    "GeminiTextGenerator",
    "NO_EXAMPLE",
    "NO_RESPONSE",
    "PracticeFeedback",
    "PracticeMode",
    "TextGenerator",
    "clean_response",
    "evaluate_definition",
    "evaluate_usage",
    "fetch_fun_fact",
    "fetch_fun_opinion",
    "generate_example",
    "parse_feedback",
]

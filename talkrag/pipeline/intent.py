"""
Pipeline Stage 1: Rule-based intent classification.

No API call, < 1 ms.  Rules are evaluated top-down and the first
match wins, so the order of INTENT_RULES is part of the contract:
"recommend a summary talk" is a recommendation, not a summary.
"""

from __future__ import annotations

import re
from typing import Callable

from talkrag.schemas.intent import QueryIntent
from talkrag.utils.logging import get_logger

logger = get_logger("talkrag.pipeline.intent")

RECOMMEND_KEYWORDS = ("recommend", "suggest")
SUMMARY_KEYWORDS = ("summary", "summarize", "key idea", "main idea")
LIST_KEYWORDS = ("list", "multiple")

# Explicit small counts ("3 talks", "two speakers"); list answers are capped at 3
_SMALL_COUNT_RE = re.compile(r"\b(?:2|3|two|three)\b")


def _contains_any(keywords: tuple[str, ...]) -> Callable[[str], bool]:
    return lambda q: any(kw in q for kw in keywords)


def _asks_for_list(q: str) -> bool:
    return any(kw in q for kw in LIST_KEYWORDS) or _SMALL_COUNT_RE.search(q) is not None


# Ordered (intent, predicate) pairs over the lowercased question.
INTENT_RULES: tuple[tuple[QueryIntent, Callable[[str], bool]], ...] = (
    (QueryIntent.RECOMMEND, _contains_any(RECOMMEND_KEYWORDS)),
    (QueryIntent.SUMMARY, _contains_any(SUMMARY_KEYWORDS)),
    (QueryIntent.LIST, _asks_for_list),
)

DEFAULT_INTENT = QueryIntent.FACT


def classify_intent(question: str) -> QueryIntent:
    """
    Classify a question into one of the closed QueryIntent values.

    Pure except for logging.
    """
    q = (question or "").lower()
    intent = next(
        (intent for intent, matches in INTENT_RULES if matches(q)),
        DEFAULT_INTENT,
    )
    logger.info("[INTENT] Classified: intent=%s | question=%s", intent.value, q[:80])
    return intent

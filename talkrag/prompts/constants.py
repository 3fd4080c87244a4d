"""
Centralized prompt constants: the fallback sentence, the grounding
system prompt, and the per-intent behavioral directives.

FALLBACK_SENTENCE is the one and only refusal text.  The empty-retrieval
short-circuit returns it verbatim and every directive instructs the model
to reply with it verbatim, so callers can detect a refusal by equality.
"""

from __future__ import annotations

from talkrag.schemas.intent import QueryIntent


# ── Fallback ────────────────────────────────────────────────────────
FALLBACK_SENTENCE = "I don’t know based on the provided TED data."

FALLBACK_INSTRUCTION = (
    "If the answer cannot be determined from the provided context, respond exactly with:\n"
    f'"{FALLBACK_SENTENCE}"'
)


# ── System prompt (identical for every intent) ──────────────────────
SYSTEM_PROMPT = (
    "You are a TED Talk assistant that answers questions strictly and only based on "
    "the TED dataset context provided to you (metadata and transcript passages).\n"
    "You must not use any external knowledge, the open internet, or information that "
    "is not explicitly contained in the retrieved context.\n"
    f"If the answer cannot be determined from the provided context, respond: \"{FALLBACK_SENTENCE}\"\n"
    "Always explain your answer using the given context, quoting or paraphrasing the "
    "relevant transcript or metadata when helpful."
)


# ── Behavioral directives ───────────────────────────────────────────
_DIRECTIVE_BODIES: dict[QueryIntent, str] = {
    QueryIntent.FACT: (
        "Answer the user’s question strictly and only using the provided TED dataset context.\n"
        "Locate the single concrete fact or entity the question asks for "
        "(for example a title, a speaker, or a detail from a transcript).\n"
        "Return only what was asked.\n"
        "Do not invent talks or details."
    ),
    QueryIntent.LIST: (
        "Answer the user’s question strictly and only using the provided TED dataset context.\n"
        "Return up to 3 distinct talks that match the request, one per line, each with its title.\n"
        "If the question asks for a smaller number, return exactly that many (never more than 3).\n"
        "If the context contains fewer matching talks, return only those.\n"
        "Do not invent talks or details."
    ),
    QueryIntent.SUMMARY: (
        "Answer the user’s question strictly and only using the provided TED dataset context.\n"
        "Identify the single talk most relevant to the question and give its title.\n"
        "Write a short summary of its key idea using only the provided transcript passages.\n"
        "Do not invent talks or details."
    ),
    QueryIntent.RECOMMEND: (
        "Answer the user’s question strictly and only using the provided TED dataset context.\n"
        "Choose the single talk that best matches the request and give its title.\n"
        "Justify the choice using only evidence found in the context.\n"
        "Do not use external knowledge, and do not invent talks or details."
    ),
}

INTENT_DIRECTIVES: dict[QueryIntent, str] = {
    intent: f"{body}\n{FALLBACK_INSTRUCTION}"
    for intent, body in _DIRECTIVE_BODIES.items()
}


def build_behavioral_directives(intent: QueryIntent) -> str:
    """Directive block for one intent; always ends with FALLBACK_INSTRUCTION."""
    return INTENT_DIRECTIVES[QueryIntent(intent)]


def is_fallback_answer(text: str | None) -> bool:
    """
    True when a generated answer is the fallback sentence.

    Surrounding quotes and whitespace are ignored, and a plain ASCII
    apostrophe counts as the typographic one.
    """
    if not text:
        return False
    normalized = text.strip().strip('"“”').strip().replace("'", "’")
    return normalized == FALLBACK_SENTENCE

"""
Unit tests for the query pipeline orchestrator.

Tests cover:
- Full RAG path (embed → query → generate) and response shape
- Empty-retrieval short-circuit (generator never called)
- Input validation before any collaborator call
- Collaborator failures propagating unchanged
"""

from unittest.mock import MagicMock

import pytest

from conftest import FakeGenerator, FakeIndex, make_match

from talkrag.core.errors import InvalidQuestionError
from talkrag.pipeline.orchestrator import pipeline_response_to_ask_response, run_pipeline
from talkrag.prompts.constants import FALLBACK_SENTENCE, SYSTEM_PROMPT
from talkrag.schemas.intent import QueryIntent
from talkrag.schemas.retrieval import Match
from talkrag.services.container import Services


@pytest.mark.asyncio
async def test_full_pipeline(services, embedder, index, generator, settings):
    final = await run_pipeline("  who is the speaker in talk A  ", services, settings)

    assert embedder.calls == ["who is the speaker in talk A"]
    assert index.query_calls[0][1] == settings.top_k
    assert len(generator.calls) == 1

    assert final.answer == "The speaker is Jane Doe."
    assert final.intent == QueryIntent.FACT
    assert final.is_fallback is False
    assert [c.record_id for c in final.context] == ["A", "B", "A", "C"]
    assert [t.record_id for t in final.talks] == ["A", "B", "C"]
    assert final.context[0].chunk == "Passage 0 of talk A."
    assert set(final.stage_timings) == {"stage_1", "stage_2", "stage_3"}


@pytest.mark.asyncio
async def test_short_circuit_times_only_the_stages_that_ran(embedder, settings):
    services = Services(embedder=embedder, index=FakeIndex(results=[]), generator=FakeGenerator())
    final = await run_pipeline("who spoke?", services, settings)
    assert set(final.stage_timings) == {"stage_1", "stage_2"}


@pytest.mark.asyncio
async def test_prompts_sent_are_exposed(services, generator, settings):
    final = await run_pipeline("suggest a talk about trust", services, settings)

    system, user = generator.calls[0]
    assert final.augmented_prompt.system == system == SYSTEM_PROMPT
    assert final.augmented_prompt.user == user
    assert '[Talk B] "Talk B"' in user
    assert final.intent == QueryIntent.RECOMMEND


@pytest.mark.asyncio
async def test_empty_retrieval_short_circuits(embedder, settings):
    generator = FakeGenerator()
    services = Services(embedder=embedder, index=FakeIndex(results=[]), generator=generator)

    final = await run_pipeline("list 3 talks about AI", services, settings)

    assert final.answer == FALLBACK_SENTENCE
    assert final.context == []
    assert final.talks == []
    assert final.is_fallback is True
    assert generator.calls == []


@pytest.mark.asyncio
async def test_only_malformed_matches_short_circuits(embedder, settings):
    generator = FakeGenerator()
    bad = [Match(vector_id="x", score=0.9, metadata={"title": "missing id"})]
    services = Services(embedder=embedder, index=FakeIndex(results=bad), generator=generator)

    final = await run_pipeline("who spoke?", services, settings)

    assert final.answer == FALLBACK_SENTENCE
    assert final.raw_match_count == 1
    assert generator.calls == []


@pytest.mark.asyncio
async def test_generator_refusal_uses_the_same_sentence(embedder, index, settings):
    services = Services(embedder=embedder, index=index, generator=FakeGenerator(FALLBACK_SENTENCE))

    final = await run_pipeline("who spoke about mars?", services, settings)

    assert final.answer == FALLBACK_SENTENCE
    assert final.is_fallback is True
    assert final.context  # context still exposed


@pytest.mark.asyncio
async def test_empty_completion_becomes_fallback(embedder, index, settings):
    services = Services(embedder=embedder, index=index, generator=FakeGenerator(""))
    final = await run_pipeline("who spoke about mars?", services, settings)
    assert final.answer == FALLBACK_SENTENCE


@pytest.mark.asyncio
@pytest.mark.parametrize("question", [None, "", "   \n"])
async def test_missing_question_makes_no_calls(question, services, embedder, index, generator, settings):
    with pytest.raises(InvalidQuestionError):
        await run_pipeline(question, services, settings)

    assert embedder.calls == []
    assert index.query_calls == []
    assert generator.calls == []


@pytest.mark.asyncio
async def test_embedding_failure_propagates(index, generator, settings):
    embedder = MagicMock()
    embedder.embed.side_effect = ConnectionError("embedding service down")
    services = Services(embedder=embedder, index=index, generator=generator)

    with pytest.raises(ConnectionError, match="embedding service down"):
        await run_pipeline("who spoke?", services, settings)
    assert generator.calls == []


@pytest.mark.asyncio
async def test_generation_failure_propagates(embedder, index, settings):
    generator = MagicMock()
    generator.complete.side_effect = TimeoutError("llm timed out")
    services = Services(embedder=embedder, index=index, generator=generator)

    with pytest.raises(TimeoutError):
        await run_pipeline("who spoke?", services, settings)


@pytest.mark.asyncio
async def test_retrieval_inputs_are_not_mutated(embedder, settings):
    matches = [make_match("A", 0.9), make_match("B", 0.5)]
    index = FakeIndex(results=matches)
    services = Services(embedder=embedder, index=index, generator=FakeGenerator())

    await run_pipeline("who spoke?", services, settings)

    assert [m.score for m in matches] == [0.9, 0.5]
    assert matches[0].metadata["chunk_text"] == "Passage 0 of talk A."


@pytest.mark.asyncio
async def test_ask_response_conversion(services, settings):
    final = await run_pipeline("summarize the main idea", services, settings)
    payload = pipeline_response_to_ask_response(final).model_dump(mode="json")

    assert payload["response"] == final.answer
    assert payload["intent"] == "summary"
    assert set(payload["context"][0]) == {"record_id", "title", "chunk", "score"}
    assert set(payload["augmented_prompt"]) == {"system", "user"}

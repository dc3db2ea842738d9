"""Tests for the Gemini gateway: parsing, title matching and failure fallbacks."""

import logging
import uuid

import pytest

from knowledge_hub.domains.ai import gateway as gateway_module
from knowledge_hub.domains.ai.gateway import (
    ANSWER_FALLBACK, INSIGHTS_FALLBACK, SUMMARY_FALLBACK,
    GeminiGateway, create_gateway, match_titles, split_list
)
from knowledge_hub.domains.documents.entities import Document, MAX_TAG_LENGTH
from knowledge_hub.domains.identity.entities import UserRef
from tests.fakes import FakeGenaiClient

AUTHOR = UserRef(id=uuid.uuid4(), name="Alice")


def _docs(*titles):
    return [Document.create_document(title, f"{title} body", AUTHOR) for title in titles]


def test_split_list_drops_blank_items():
    assert split_list(" planning, , Q3 roadmap ,") == ["planning", "Q3 roadmap"]
    assert split_list("") == []


def test_match_titles_is_case_insensitive_substring_in_corpus_order():
    docs = _docs("Onboarding Guide", "Q3 Plan", "Q3 Planning Notes", "Budget")

    matched = match_titles(["q3 plan", "BUDGET"], docs)

    # "Q3 Plan" also hits "Q3 Planning Notes": the heuristic is kept as is
    assert [d.title for d in matched] == ["Q3 Plan", "Q3 Planning Notes", "Budget"]


def test_match_titles_without_titles_matches_nothing():
    assert match_titles([], _docs("Budget")) == []


@pytest.mark.asyncio
async def test_generate_summary_strips_reply():
    client = FakeGenaiClient({"summary": "  Plan for Q3.\n"})
    gateway = GeminiGateway(client, model="gemini-test")

    assert await gateway.generate_summary("content") == "Plan for Q3."
    assert client.calls[0]["model"] == "gemini-test"
    assert client.calls[0]["prompt"].endswith("content")


@pytest.mark.asyncio
async def test_generate_tags_drops_tags_too_long_for_storage(caplog):
    prose = "this document describes the quarterly plan " * 3
    client = FakeGenaiClient({"tags": f"{prose}, Q3, {'x' * MAX_TAG_LENGTH}"})
    gateway = GeminiGateway(client, model="gemini-test")

    with caplog.at_level(logging.WARNING, logger="knowledge_hub.domains.ai.gateway"):
        tags = await gateway.generate_tags("content")

    assert len(prose.strip()) > MAX_TAG_LENGTH
    assert tags == ["Q3", "x" * MAX_TAG_LENGTH]
    assert "Dropping 1 generated tag(s)" in caplog.text


@pytest.mark.asyncio
async def test_provider_error_falls_back_and_logs(caplog):
    client = FakeGenaiClient()
    client.fail_all(RuntimeError("quota exceeded"))
    gateway = GeminiGateway(client, model="gemini-test")

    with caplog.at_level(logging.WARNING, logger="knowledge_hub.domains.ai.gateway"):
        assert await gateway.generate_summary("content") == SUMMARY_FALLBACK
        assert await gateway.generate_tags("content") == []

    assert "quota exceeded" in caplog.text


@pytest.mark.asyncio
async def test_slow_provider_times_out_to_fallback():
    gateway = GeminiGateway(FakeGenaiClient(delay=0.5), model="gemini-test", timeout=0.01)

    assert await gateway.generate_summary("content") == SUMMARY_FALLBACK


@pytest.mark.asyncio
async def test_blank_reply_counts_as_failure():
    gateway = GeminiGateway(FakeGenaiClient({"summary": "   "}), model="gemini-test")

    assert await gateway.generate_summary("content") == SUMMARY_FALLBACK


@pytest.mark.asyncio
async def test_gateway_without_client_returns_every_fallback():
    gateway = GeminiGateway(None, model="gemini-test")
    docs = _docs("A", "B", "C", "D", "E", "F")

    assert await gateway.generate_summary("x") == SUMMARY_FALLBACK
    assert await gateway.generate_tags("x") == []
    assert await gateway.semantic_rank("x", docs) == docs
    assert await gateway.answer_question("x", docs) == ANSWER_FALLBACK
    assert await gateway.summarize_corpus_insights(docs) == INSIGHTS_FALLBACK
    assert await gateway.find_related("x", docs) == docs[:5]


@pytest.mark.asyncio
async def test_semantic_rank_matches_returned_titles():
    client = FakeGenaiClient({"semantic": "Budget, Unknown Title"})
    gateway = GeminiGateway(client, model="gemini-test")
    docs = _docs("Onboarding Guide", "Budget 2026")

    ranked = await gateway.semantic_rank("money", docs)

    assert [d.title for d in ranked] == ["Budget 2026"]
    assert "Title: Onboarding Guide" in client.calls[0]["prompt"]


@pytest.mark.asyncio
async def test_semantic_rank_on_empty_corpus_skips_provider():
    client = FakeGenaiClient()
    gateway = GeminiGateway(client, model="gemini-test")

    assert await gateway.semantic_rank("anything", []) == []
    assert client.calls == []


@pytest.mark.asyncio
async def test_find_related_sends_titles_only():
    client = FakeGenaiClient({"related": "Budget"})
    gateway = GeminiGateway(client, model="gemini-test")
    docs = _docs("Onboarding Guide", "Budget")

    related = await gateway.find_related("my notes about money", docs)

    assert [d.title for d in related] == ["Budget"]
    assert "Budget body" not in client.calls[0]["prompt"]


def test_create_gateway_without_key(caplog):
    with caplog.at_level(logging.WARNING):
        gateway = create_gateway("", model="gemini-test", timeout=5.0)

    assert gateway.client is None
    assert gateway.timeout == 5.0
    assert "GEMINI_API_KEY" in caplog.text


def test_create_gateway_with_key(monkeypatch):
    created = {}

    def fake_client(api_key):
        created["api_key"] = api_key
        return FakeGenaiClient()

    monkeypatch.setattr(gateway_module.genai, "Client", fake_client)

    gateway = create_gateway("secret", model="gemini-test", timeout=5.0)

    assert created == {"api_key": "secret"}
    assert gateway.client is not None
    assert gateway.model == "gemini-test"

"""Tests for knowledge base seeding and embedding backfill."""

import pytest

from app.core.schemas_knowledge import KnowledgePassage, Monument
from app.core.seeding import backfill_embeddings, seed_knowledge_base
from app.data.muro_lucano import MONUMENTS, PASSAGES
from tests.fakes.fake_clients import FAKE_EMBEDDING_MODEL, FakeEmbedder
from tests.fakes.fake_db import FakeKnowledgeStore, FakeMonumentStore


def _passage(title, location=None):
    return KnowledgePassage(title=title, content=f"{title} testo.", category="monument", location=location)


def test_seed_links_passages_to_monuments():
    monument_store = FakeMonumentStore()
    knowledge_store = FakeKnowledgeStore()
    embedder = FakeEmbedder()

    summary = seed_knowledge_base(
        monument_store,
        knowledge_store,
        embedder,
        [Monument(name_it="Castello", category="monument")],
        [_passage("Castello - Storia", "Castello"), _passage("Sagra", "Muro Lucano")],
    )

    assert summary.monuments_inserted == 1
    assert summary.passages_inserted == 2
    by_title = {p.title: p for p in knowledge_store.passages.values()}
    castle_id = monument_store.get_monument_by_slug("castello").id
    assert by_title["Castello - Storia"].monument_id == castle_id
    assert by_title["Sagra"].monument_id is None
    assert by_title["Castello - Storia"].embedding_model == FAKE_EMBEDDING_MODEL


def test_seed_embeds_title_and_content():
    embedder = FakeEmbedder()

    seed_knowledge_base(
        FakeMonumentStore(), FakeKnowledgeStore(), embedder, [], [_passage("Ripe")]
    )

    assert embedder.calls == ["Ripe\n\nRipe testo."]


def test_seed_skips_passages_that_fail_to_embed():
    knowledge_store = FakeKnowledgeStore()

    summary = seed_knowledge_base(
        FakeMonumentStore(),
        knowledge_store,
        FakeEmbedder(fail_on_calls={2}),
        [],
        [_passage("A"), _passage("B"), _passage("C")],
    )

    assert summary.passages_inserted == 2
    assert summary.passages_failed == 1
    assert sorted(p.title for p in knowledge_store.passages.values()) == ["A", "C"]


def test_seed_without_embeddings():
    knowledge_store = FakeKnowledgeStore()

    summary = seed_knowledge_base(
        FakeMonumentStore(), knowledge_store, None, [], [_passage("A")], with_embeddings=False
    )

    assert summary.passages_inserted == 1
    stored = next(iter(knowledge_store.passages.values()))
    assert stored.embedding is None
    assert stored.embedding_model is None


def test_seed_with_embeddings_requires_embedder():
    with pytest.raises(ValueError):
        seed_knowledge_base(FakeMonumentStore(), FakeKnowledgeStore(), None, [], [_passage("A")])


def test_backfill_embeds_missing_and_stale_vectors():
    knowledge_store = FakeKnowledgeStore([
        _passage("Missing"),
        KnowledgePassage(
            title="Stale", content="x", category="monument", embedding=[0.0, 1.0, 0.0], embedding_model="old-model"
        ),
        KnowledgePassage(
            title="Current", content="y", category="monument", embedding=[0.0, 0.0, 1.0],
            embedding_model=FAKE_EMBEDDING_MODEL,
        ),
    ])
    embedder = FakeEmbedder()

    summary = backfill_embeddings(knowledge_store, embedder, "it")

    assert summary.updated == 2
    assert summary.failed == 0
    assert all(p.embedding_model == FAKE_EMBEDDING_MODEL for p in knowledge_store.passages.values())
    assert knowledge_store.has_embeddings("it", FAKE_EMBEDDING_MODEL)


def test_bundled_seed_data_resolves_monument_locations():
    monument_store = FakeMonumentStore()
    knowledge_store = FakeKnowledgeStore()

    seed_knowledge_base(monument_store, knowledge_store, None, MONUMENTS, PASSAGES, with_embeddings=False)

    castle = monument_store.get_monument_by_slug("castello")
    assert [p.title for p in knowledge_store.list_monument_passages(castle.id)] == [
        "Castello - Storia Medievale",
        "Castello - Epoca Orsina",
    ]
    gerardo = monument_store.get_monument_by_slug("casa-san-gerardo")
    assert knowledge_store.list_monument_passages(gerardo.id)

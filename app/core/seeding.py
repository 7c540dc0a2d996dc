"""Knowledge base seeding and embedding backfill.

Seeding inserts monuments first, links each passage to its monument through
the slug of its ``location`` and embeds ``"{title}\\n\\n{content}"``. A passage
that fails to embed is skipped and counted; the rest are inserted in one batch.
"""

from dataclasses import dataclass

from app.core.embeddings import EmbeddingClient
from app.core.logging import get_logger
from app.core.schemas_knowledge import KnowledgePassage, Monument, slugify
from app.db.knowledge_base import KnowledgeStore
from app.db.monuments import MonumentStore

logger = get_logger(__name__)


@dataclass
class SeedSummary:
    """Outcome of a seeding run."""

    monuments_inserted: int = 0
    passages_inserted: int = 0
    passages_failed: int = 0


@dataclass
class BackfillSummary:
    """Outcome of an embedding backfill run."""

    updated: int = 0
    failed: int = 0


def _monument_ids_by_slug(monuments: list[Monument], slug_to_id: dict[str, str]) -> dict[str, str]:
    """Index monument IDs by stored slug and by the slug of the Italian name."""
    index = dict(slug_to_id)
    for monument in monuments:
        monument_id = slug_to_id.get(monument.slug)
        if monument_id:
            index.setdefault(slugify(monument.name_it), monument_id)
    return index


def seed_knowledge_base(
    monument_store: MonumentStore,
    knowledge_store: KnowledgeStore,
    embedder: EmbeddingClient | None,
    monuments: list[Monument],
    passages: list[KnowledgePassage],
    with_embeddings: bool = True,
) -> SeedSummary:
    """
    Insert monuments and passages into an empty knowledge base.

    Args:
        monument_store: Monument persistence
        knowledge_store: Passage persistence
        embedder: Embedding client; unused when ``with_embeddings`` is False
        monuments: Monuments to insert
        passages: Passages to insert, linked to monuments by ``location``
        with_embeddings: Store passages without vectors when False; retrieval
            then falls back to keyword search until a backfill runs

    Returns:
        SeedSummary with insert and failure counts

    Raises:
        ValueError: If embeddings are requested without an embedder
    """
    if with_embeddings and embedder is None:
        raise ValueError("An embedding client is required to seed with embeddings")

    summary = SeedSummary()

    slug_to_id = monument_store.insert_monuments(monuments)
    summary.monuments_inserted = len(slug_to_id)
    monument_ids = _monument_ids_by_slug(monuments, slug_to_id)

    prepared: list[KnowledgePassage] = []
    for i, passage in enumerate(passages, 1):
        update: dict = {}
        if passage.location:
            update["monument_id"] = monument_ids.get(slugify(passage.location))

        if with_embeddings:
            try:
                update["embedding"] = embedder.embed_text(passage.embedding_text)
                update["embedding_model"] = embedder.model
            except Exception as e:
                logger.warning(f"Skipping passage '{passage.title}': {e}")
                summary.passages_failed += 1
                continue

        prepared.append(passage.model_copy(update=update))
        logger.debug(f"Prepared passage {i}/{len(passages)}: {passage.title}")

    if prepared:
        ids = knowledge_store.insert_passages(prepared)
        summary.passages_inserted = len(ids)

    logger.info(
        "Knowledge base seeded",
        extra={"extra_data": {
            "monuments": summary.monuments_inserted,
            "passages": summary.passages_inserted,
            "failed": summary.passages_failed,
            "embeddings": with_embeddings,
        }},
    )
    return summary


def backfill_embeddings(
    knowledge_store: KnowledgeStore,
    embedder: EmbeddingClient,
    language: str = "it",
) -> BackfillSummary:
    """
    Embed passages that have no vector or a vector from another model.

    Run after switching ``EMBEDDING_MODEL`` or after a seed without embeddings,
    so semantic search only ever compares vectors from one model.
    """
    summary = BackfillSummary()
    passages = knowledge_store.list_passages_needing_embedding(language, embedder.model)

    for passage in passages:
        try:
            embedding = embedder.embed_text(passage.embedding_text)
            knowledge_store.update_embedding(passage.id, embedding, embedder.model)
            summary.updated += 1
        except Exception as e:
            logger.warning(f"Failed to embed passage {passage.id}: {e}")
            summary.failed += 1

    logger.info(f"Backfilled {summary.updated} embeddings ({summary.failed} failed) with {embedder.model}")
    return summary

"""Knowledge retrieval for the guide: semantic search with keyword fallback.

Usage:
    service = RetrievalService(knowledge_store, embedder, corpus_language="it")
    results = await service.search("Tell me about the castle", limit=5)

Semantic search is used whenever the corpus language has passages embedded by
the same model as the query embedder; otherwise the query is matched as a
plain substring. Errors never propagate: a failed search returns no results
and the conversation goes on without injected context.
"""

import asyncio

from app.core.embeddings import EmbeddingClient
from app.core.logging import get_logger
from app.core.prompts import format_passage
from app.core.schemas_knowledge import MatchType, SearchFilters, SearchResult
from app.db.knowledge_base import KnowledgeStore

logger = get_logger(__name__)


class RetrievalService:
    """Produces a small ranked list of passages for a visitor's question."""

    def __init__(
        self,
        knowledge_store: KnowledgeStore,
        embedder: EmbeddingClient,
        corpus_language: str = "it",
        match_threshold: float = 0.5,
        default_limit: int = 5,
    ):
        self.knowledge_store = knowledge_store
        self.embedder = embedder
        self.corpus_language = corpus_language
        self.match_threshold = match_threshold
        self.default_limit = default_limit

    async def search(
        self,
        query: str,
        limit: int | None = None,
        category: str | None = None,
        monument_id: str | None = None,
        content_type: str | None = None,
        language: str | None = None,
    ) -> list[SearchResult]:
        """
        Search the knowledge base.

        Args:
            query: Raw visitor text
            limit: Max results (defaults to the service's default_limit)
            category: Optional category filter
            monument_id: Optional monument filter
            content_type: Optional content type filter
            language: Passage language; defaults to the corpus language, never
                the conversation's response language

        Returns:
            Results, best first for semantic matches; empty on blank query or error
        """
        if not query or not query.strip():
            return []

        if limit is None:
            limit = self.default_limit
        if limit <= 0:
            return []
        filters = SearchFilters(
            category=category,
            monument_id=monument_id,
            content_type=content_type,
            language=language or self.corpus_language,
        )

        try:
            semantic = await asyncio.to_thread(
                self.knowledge_store.has_embeddings,
                filters.language,
                self.embedder.model,
            )
            if semantic:
                results = await self._semantic_search(query, limit, filters)
            else:
                results = await self._keyword_search(query, limit, filters)
        except Exception as e:
            logger.warning(f"Knowledge search failed, continuing without context: {e}")
            return []

        logger.info(
            f"Knowledge search returned {len(results)} results",
            extra={
                "extra_data": {
                    "mode": "semantic" if semantic else "keyword",
                    "language": filters.language,
                    "limit": limit,
                }
            },
        )
        return results

    async def _semantic_search(
        self,
        query: str,
        limit: int,
        filters: SearchFilters,
    ) -> list[SearchResult]:
        query_embedding = await self.embedder.embed_text_async(query)

        matches = await asyncio.to_thread(
            self.knowledge_store.match_passages,
            query_embedding,
            self.match_threshold,
            limit,
            filters,
            self.embedder.model,
        )

        # sorted() is stable, so equal scores keep database order
        ranked = sorted(
            (m for m in matches if m[1] >= self.match_threshold),
            key=lambda m: m[1],
            reverse=True,
        )
        return [
            SearchResult(passage=passage, score=similarity, match_type=MatchType.SEMANTIC)
            for passage, similarity in ranked[:limit]
        ]

    async def _keyword_search(
        self,
        query: str,
        limit: int,
        filters: SearchFilters,
    ) -> list[SearchResult]:
        logger.debug("No compatible embeddings for corpus, using keyword search")
        passages = await asyncio.to_thread(
            self.knowledge_store.keyword_search,
            query.strip(),
            limit,
            filters,
        )
        return [
            SearchResult(passage=passage, score=None, match_type=MatchType.KEYWORD)
            for passage in passages[:limit]
        ]


def format_context(results: list[SearchResult]) -> list[str]:
    """Render search results as context snippets for the system prompt."""
    return [format_passage(result.passage) for result in results]

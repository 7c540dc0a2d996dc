"""Database operations for the knowledge_base table."""

from supabase import Client

from app.core.logging import get_logger
from app.core.schemas_knowledge import KnowledgePassage, SearchFilters

logger = get_logger(__name__)

TABLE = "knowledge_base"
SEMANTIC_SEARCH_RPC = "search_knowledge_semantic"

# Everything except the embedding vector, which is large and never needed by callers
PASSAGE_COLUMNS = (
    "id, monument_id, title, content, content_type, category, location, tags, language, "
    "embedding_model, word_count, source_document, source_page, chunk_index"
)


def _quote_filter_value(value: str) -> str:
    """Quote a value for a PostgREST ``or`` filter so commas and parentheses survive."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class KnowledgeStore:
    """Persisted collection of knowledge passages."""

    def __init__(self, supabase: Client):
        self._supabase = supabase

    def insert_passage(self, passage: KnowledgePassage) -> str:
        """
        Insert a single passage.

        Args:
            passage: Passage to store; an embedding must be tagged with its model

        Returns:
            ID of the new passage

        Raises:
            ValueError: If the embedding is untagged or nothing was inserted
        """
        ids = self.insert_passages([passage])
        return ids[0]

    def insert_passages(self, passages: list[KnowledgePassage]) -> list[str]:
        """
        Batch insert passages.

        Returns:
            IDs of the inserted passages, in input order

        Raises:
            ValueError: If an embedding is untagged or the insert returned no rows
        """
        if not passages:
            return []

        for passage in passages:
            if passage.embedding is not None and not passage.embedding_model:
                raise ValueError(f"Passage '{passage.title}' has an embedding without a model tag")

        records = [p.to_record() for p in passages]
        response = self._supabase.table(TABLE).insert(records).execute()

        if not response.data:
            raise ValueError("Failed to insert knowledge passages")

        logger.info(f"Inserted {len(response.data)} knowledge passages")
        return [row["id"] for row in response.data]

    def has_embeddings(self, language: str, embedding_model: str) -> bool:
        """Check whether any passage in ``language`` carries an embedding from ``embedding_model``."""
        response = (
            self._supabase.table(TABLE)
            .select("id")
            .eq("language", language)
            .eq("embedding_model", embedding_model)
            .not_.is_("embedding", "null")
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def match_passages(
        self,
        query_embedding: list[float],
        match_threshold: float,
        match_count: int,
        filters: SearchFilters,
        embedding_model: str,
    ) -> list[tuple[KnowledgePassage, float]]:
        """
        Vector-similarity search through the semantic search RPC.

        Returns:
            (passage, similarity) pairs in the order the database returned them
        """
        query = self._supabase.rpc(
            SEMANTIC_SEARCH_RPC,
            {
                "query_embedding": query_embedding,
                "match_threshold": match_threshold,
                "match_count": match_count,
            },
        )
        for column, value in filters.as_equality_filters().items():
            query = query.eq(column, value)
        query = query.eq("embedding_model", embedding_model)

        response = query.execute()

        matches = []
        for row in response.data or []:
            similarity = float(row.get("similarity") or 0.0)
            matches.append((KnowledgePassage.model_validate(row), similarity))
        return matches

    def keyword_search(
        self,
        query: str,
        limit: int,
        filters: SearchFilters,
    ) -> list[KnowledgePassage]:
        """
        Case-insensitive substring match on title and content.

        Returns:
            Up to ``limit`` passages in database order
        """
        pattern = _quote_filter_value(f"%{query}%")
        builder = self._supabase.table(TABLE).select(PASSAGE_COLUMNS)
        for column, value in filters.as_equality_filters().items():
            builder = builder.eq(column, value)

        response = (
            builder.or_(f"title.ilike.{pattern},content.ilike.{pattern}")
            .limit(limit)
            .execute()
        )
        return [KnowledgePassage.model_validate(row) for row in response.data or []]

    def list_passages_needing_embedding(
        self,
        language: str,
        embedding_model: str,
        limit: int = 500,
    ) -> list[KnowledgePassage]:
        """Passages with no embedding, or one produced by a different model."""
        response = (
            self._supabase.table(TABLE)
            .select(PASSAGE_COLUMNS)
            .eq("language", language)
            .or_(
                "embedding.is.null,embedding_model.is.null,"
                f"embedding_model.neq.{_quote_filter_value(embedding_model)}"
            )
            .order("created_at", desc=False)
            .limit(limit)
            .execute()
        )
        return [KnowledgePassage.model_validate(row) for row in response.data or []]

    def update_embedding(
        self,
        passage_id: str,
        embedding: list[float],
        embedding_model: str,
    ) -> None:
        """Replace a passage's embedding; the only mutation passages allow."""
        response = (
            self._supabase.table(TABLE)
            .update({"embedding": embedding, "embedding_model": embedding_model})
            .eq("id", passage_id)
            .execute()
        )
        if not response.data:
            raise ValueError(f"Knowledge passage {passage_id} not found")

    def list_monument_passages(self, monument_id: str) -> list[KnowledgePassage]:
        """All passages linked to a monument, ordered by chunk index."""
        response = (
            self._supabase.table(TABLE)
            .select(PASSAGE_COLUMNS)
            .eq("monument_id", monument_id)
            .order("chunk_index", desc=False)
            .execute()
        )
        return [KnowledgePassage.model_validate(row) for row in response.data or []]


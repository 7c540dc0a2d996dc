"""Document ingestion: chunk, embed and store uploaded text.

Chunks are processed strictly one after another (embed, then insert, then the
next chunk); the embedding provider is never hit with parallel requests.

Failure policy: a chunk that fails to embed or insert is logged and skipped.
The document ends ``completed`` when at least one chunk was stored (with
``chunks_created`` counting stored chunks) and ``failed`` otherwise.
"""

import asyncio
import logging

from app.core.chunking import chunk_text
from app.core.embeddings import EmbeddingClient
from app.core.logging import get_logger, log_with_context
from app.core.schemas_documents import ChunkResult, DocumentStatus, IngestionResult
from app.core.schemas_knowledge import ContentType, KnowledgePassage
from app.db.document_uploads import DocumentStore, InvalidStatusTransitionError
from app.db.knowledge_base import KnowledgeStore

logger = get_logger(__name__)

UPLOADED_DOCUMENT_CATEGORY = "uploaded_document"


class IngestionPipeline:
    """Turns raw document text into embedded knowledge passages."""

    def __init__(
        self,
        knowledge_store: KnowledgeStore,
        document_store: DocumentStore,
        embedder: EmbeddingClient,
        corpus_language: str = "it",
        default_max_chunk_size: int = 1000,
    ):
        self.knowledge_store = knowledge_store
        self.document_store = document_store
        self.embedder = embedder
        self.corpus_language = corpus_language
        self.default_max_chunk_size = default_max_chunk_size

    async def ingest(
        self,
        document_id: str,
        raw_text: str,
        filename: str,
        max_chunk_size: int | None = None,
    ) -> IngestionResult:
        """
        Ingest one uploaded document.

        Args:
            document_id: Upload record, expected to be pending
            raw_text: Extracted document text
            filename: Original filename, recorded as the passages' source
            max_chunk_size: Chunk size override

        Returns:
            IngestionResult with per-chunk outcomes

        Raises:
            InvalidStatusTransitionError: If the document is not pending
        """
        await asyncio.to_thread(self.document_store.mark_processing, document_id)

        try:
            chunks = chunk_text(raw_text, max_chunk_size or self.default_max_chunk_size)

            if not chunks:
                message = "Document contains no extractable text"
                await asyncio.to_thread(self.document_store.mark_failed, document_id, message)
                return IngestionResult(
                    document_id=document_id,
                    status=DocumentStatus.FAILED,
                    error_message=message,
                )

            log_with_context(
                logger,
                logging.INFO,
                f"Ingesting {len(chunks)} chunks from {filename}",
                document_id=document_id,
                model=self.embedder.model,
            )

            results = []
            for chunk in chunks:
                result = await self._ingest_chunk(
                    document_id, filename, chunk.chunk_index, chunk.content
                )
                results.append(result)

            succeeded = sum(1 for r in results if r.success)
            failed = len(results) - succeeded

            if succeeded == 0:
                message = f"All {failed} chunks failed to embed or store"
                await asyncio.to_thread(self.document_store.mark_failed, document_id, message)
                status = DocumentStatus.FAILED
            else:
                message = None
                await asyncio.to_thread(self.document_store.mark_completed, document_id, succeeded)
                status = DocumentStatus.COMPLETED

        except Exception as e:
            logger.error(
                f"Ingestion failed for document {document_id}: {e}",
                exc_info=True,
                extra={"document_id": document_id},
            )
            try:
                await asyncio.to_thread(self.document_store.mark_failed, document_id, str(e))
            except InvalidStatusTransitionError:
                logger.warning(
                    f"Document {document_id} already left processing; status not updated",
                    extra={"document_id": document_id},
                )
            raise

        logger.info(
            f"Ingestion finished: {succeeded} stored, {failed} failed",
            extra={"document_id": document_id},
        )
        return IngestionResult(
            document_id=document_id,
            status=status,
            chunks_created=succeeded,
            chunks_failed=failed,
            chunk_results=results,
            error_message=message,
        )

    async def _ingest_chunk(
        self,
        document_id: str,
        filename: str,
        chunk_index: int,
        content: str,
    ) -> ChunkResult:
        """Embed and insert one chunk; failures are reported, not raised."""
        try:
            embedding = await self.embedder.embed_text_async(content)
            passage = KnowledgePassage(
                title=f"{filename} - Chunk {chunk_index + 1}",
                content=content,
                content_type=ContentType.DESCRIPTION,
                category=UPLOADED_DOCUMENT_CATEGORY,
                language=self.corpus_language,
                source_document=filename,
                chunk_index=chunk_index,
                embedding=embedding,
                embedding_model=self.embedder.model,
            )
            passage_id = await asyncio.to_thread(self.knowledge_store.insert_passage, passage)
        except Exception as e:
            logger.warning(
                f"Skipping chunk {chunk_index} of {filename}: {e}",
                extra={"document_id": document_id},
            )
            return ChunkResult(chunk_index=chunk_index, success=False, error=str(e))

        return ChunkResult(chunk_index=chunk_index, success=True, passage_id=passage_id)

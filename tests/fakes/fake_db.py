"""Fake in-memory stores for service-level tests.

Each fake mirrors the public methods of its Supabase-backed store, so services
can be exercised without a database.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List
from uuid import uuid4

from app.core.schemas_conversations import (
    DEFAULT_CONVERSATION_TITLE,
    Conversation,
    Message,
    MessageRole,
    Persona,
)
from app.core.schemas_documents import STATUS_TRANSITIONS, DocumentStatus, UploadedDocument
from app.core.schemas_knowledge import KnowledgePassage, Monument, SearchFilters
from app.db.document_uploads import InvalidStatusTransitionError

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


def cosine_similarity(a: List[float], b: List[float]) -> float:
    """Cosine similarity of two equal-length vectors."""
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


class _Clock:
    """Strictly increasing timestamps so ordering by time is deterministic."""

    def __init__(self):
        self._ticks = 0

    def now(self) -> datetime:
        self._ticks += 1
        return _EPOCH + timedelta(seconds=self._ticks)


class FakeKnowledgeStore:
    """In-memory knowledge_base table."""

    def __init__(self, passages: List[KnowledgePassage] | None = None):
        self.passages: Dict[str, KnowledgePassage] = {}
        self.fail_on_insert: set[int] = set()
        self.insert_calls = 0
        for passage in passages or []:
            self.insert_passage(passage)

    def insert_passage(self, passage: KnowledgePassage) -> str:
        return self.insert_passages([passage])[0]

    def insert_passages(self, passages: List[KnowledgePassage]) -> List[str]:
        ids = []
        for passage in passages:
            self.insert_calls += 1
            if self.insert_calls in self.fail_on_insert:
                raise RuntimeError("insert failed")
            if passage.embedding is not None and not passage.embedding_model:
                raise ValueError(f"Passage '{passage.title}' has an embedding without a model tag")
            passage_id = passage.id or str(uuid4())
            self.passages[passage_id] = passage.model_copy(update={"id": passage_id})
            ids.append(passage_id)
        return ids

    def _matches_filters(self, passage: KnowledgePassage, filters: SearchFilters) -> bool:
        record = passage.model_dump(mode="json")
        return all(record.get(k) == v for k, v in filters.as_equality_filters().items())

    def has_embeddings(self, language: str, embedding_model: str) -> bool:
        return any(
            p.language == language and p.embedding is not None and p.embedding_model == embedding_model
            for p in self.passages.values()
        )

    def match_passages(
        self,
        query_embedding: List[float],
        match_threshold: float,
        match_count: int,
        filters: SearchFilters,
        embedding_model: str,
    ) -> List[tuple]:
        matches = []
        for passage in self.passages.values():
            if passage.embedding is None or passage.embedding_model != embedding_model:
                continue
            if not self._matches_filters(passage, filters):
                continue
            similarity = cosine_similarity(query_embedding, passage.embedding)
            if similarity >= match_threshold:
                matches.append((passage, similarity))
        matches.sort(key=lambda m: m[1], reverse=True)
        return matches[:match_count]

    def keyword_search(self, query: str, limit: int, filters: SearchFilters) -> List[KnowledgePassage]:
        needle = query.lower()
        results = [
            p
            for p in self.passages.values()
            if self._matches_filters(p, filters)
            and (needle in p.title.lower() or needle in p.content.lower())
        ]
        return results[:limit]

    def list_passages_needing_embedding(
        self, language: str, embedding_model: str, limit: int = 500
    ) -> List[KnowledgePassage]:
        return [
            p
            for p in self.passages.values()
            if p.language == language and (p.embedding is None or p.embedding_model != embedding_model)
        ][:limit]

    def update_embedding(self, passage_id: str, embedding: List[float], embedding_model: str) -> None:
        if passage_id not in self.passages:
            raise ValueError(f"Knowledge passage {passage_id} not found")
        self.passages[passage_id] = self.passages[passage_id].model_copy(
            update={"embedding": embedding, "embedding_model": embedding_model}
        )

    def list_monument_passages(self, monument_id: str) -> List[KnowledgePassage]:
        passages = [p for p in self.passages.values() if p.monument_id == monument_id]
        return sorted(passages, key=lambda p: p.chunk_index or 0)


class FakeMonumentStore:
    """In-memory monuments table."""

    def __init__(self):
        self.monuments: Dict[str, Monument] = {}

    def insert_monuments(self, monuments: List[Monument]) -> Dict[str, str]:
        ids = {}
        for monument in monuments:
            monument_id = str(uuid4())
            self.monuments[monument_id] = monument.model_copy(update={"id": monument_id})
            ids[monument.slug] = monument_id
        return ids

    def get_monument_by_slug(self, slug: str) -> Monument | None:
        return next((m for m in self.monuments.values() if m.slug == slug), None)

    def list_monuments(self, featured_only: bool = False) -> List[Monument]:
        monuments = [m for m in self.monuments.values() if m.is_featured or not featured_only]
        return sorted(monuments, key=lambda m: m.name_it)


class FakeConversationStore:
    """In-memory conversations and messages tables."""

    def __init__(self):
        self.conversations: Dict[str, Conversation] = {}
        self.messages: List[Message] = []
        self.fail_on_role: MessageRole | None = None
        self._clock = _Clock()

    def create_conversation(
        self,
        language: str = "en",
        persona_id: str | None = None,
        user_id: str | None = None,
    ) -> Conversation:
        now = self._clock.now()
        conversation = Conversation(
            id=str(uuid4()),
            user_id=user_id,
            persona_id=persona_id,
            language=language,
            title=DEFAULT_CONVERSATION_TITLE,
            created_at=now,
            updated_at=now,
        )
        self.conversations[conversation.id] = conversation
        return conversation

    def get_conversation(self, conversation_id: str) -> Conversation | None:
        return self.conversations.get(conversation_id)

    def list_user_conversations(self, user_id: str) -> List[Conversation]:
        with_messages = {m.conversation_id for m in self.messages}
        conversations = [
            c for c in self.conversations.values() if c.user_id == user_id and c.id in with_messages
        ]
        return sorted(conversations, key=lambda c: c.updated_at, reverse=True)

    def update_conversation(
        self,
        conversation_id: str,
        title: str | None = None,
        persona_id: str | None = None,
    ) -> None:
        update: Dict[str, Any] = {"updated_at": self._clock.now()}
        if title is not None:
            update["title"] = title
        if persona_id is not None:
            update["persona_id"] = persona_id
        self.conversations[conversation_id] = self.conversations[conversation_id].model_copy(update=update)

    def delete_conversation(self, conversation_id: str) -> None:
        self.conversations.pop(conversation_id, None)
        self.messages = [m for m in self.messages if m.conversation_id != conversation_id]

    def add_message(self, conversation_id: str, role: MessageRole, content: str) -> Message:
        if self.fail_on_role == role:
            raise ValueError(f"Failed to save {role.value} message")
        message = Message(
            id=str(uuid4()),
            conversation_id=conversation_id,
            role=role,
            content=content,
            created_at=self._clock.now(),
        )
        self.messages.append(message)
        self.update_conversation(conversation_id)
        return message

    def list_messages(self, conversation_id: str) -> List[Message]:
        messages = [m for m in self.messages if m.conversation_id == conversation_id]
        return sorted(messages, key=lambda m: m.created_at)


class FakePersonaStore:
    """In-memory personas table."""

    def __init__(self, personas: List[Persona] | None = None):
        self.personas: Dict[str, Persona] = {p.id: p for p in personas or []}

    def list_personas(self) -> List[Persona]:
        return sorted(self.personas.values(), key=lambda p: p.name)

    def get_persona(self, persona_id: str) -> Persona | None:
        return self.personas.get(persona_id)


class FakeDocumentStore:
    """In-memory uploaded_documents table enforcing the status lifecycle."""

    def __init__(self):
        self.documents: Dict[str, UploadedDocument] = {}
        self.history: List[tuple] = []

    def create_document_upload(
        self,
        filename: str,
        file_type: str,
        file_size: int,
        user_id: str | None = None,
    ) -> UploadedDocument:
        doc = UploadedDocument(
            id=str(uuid4()),
            user_id=user_id,
            filename=filename,
            file_type=file_type,
            file_size=file_size,
        )
        self.documents[doc.id] = doc
        return doc

    def get_document_upload(self, document_id: str) -> UploadedDocument | None:
        return self.documents.get(document_id)

    def list_documents(self, limit: int = 100) -> List[UploadedDocument]:
        return list(self.documents.values())[:limit]

    def mark_processing(self, document_id: str) -> UploadedDocument:
        return self._transition(document_id, DocumentStatus.PENDING, DocumentStatus.PROCESSING, {})

    def mark_completed(self, document_id: str, chunks_created: int) -> UploadedDocument:
        return self._transition(
            document_id,
            DocumentStatus.PROCESSING,
            DocumentStatus.COMPLETED,
            {"chunks_created": chunks_created},
        )

    def mark_failed(self, document_id: str, error_message: str, chunks_created: int = 0) -> UploadedDocument:
        return self._transition(
            document_id,
            DocumentStatus.PROCESSING,
            DocumentStatus.FAILED,
            {"error_message": error_message, "chunks_created": chunks_created},
        )

    def _transition(
        self,
        document_id: str,
        from_status: DocumentStatus,
        to_status: DocumentStatus,
        update: Dict[str, Any],
    ) -> UploadedDocument:
        doc = self.documents[document_id]
        if doc.status != from_status or to_status not in STATUS_TRANSITIONS[from_status]:
            raise InvalidStatusTransitionError(
                f"Document {document_id} cannot move from {doc.status.value} to {to_status.value}"
            )
        doc = doc.model_copy(update={"status": to_status, **update})
        self.documents[document_id] = doc
        self.history.append((from_status, to_status))
        return doc

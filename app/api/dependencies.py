"""FastAPI dependencies that build stores, provider clients and services.

This is the only place the cached Supabase client and settings are read;
everything below receives its collaborators explicitly. Tests replace these
through ``app.dependency_overrides``.
"""

from fastapi import Depends
from supabase import Client

from app.core.config import Settings, get_settings
from app.core.embeddings import EmbeddingClient
from app.core.ingestion import IngestionPipeline
from app.core.llm import LLMGateway
from app.core.retrieval import RetrievalService
from app.core.speech import SpeechClient
from app.db.conversations import ConversationStore
from app.db.document_uploads import DocumentStore
from app.db.knowledge_base import KnowledgeStore
from app.db.monuments import MonumentStore
from app.db.personas import PersonaStore
from app.db.supabase_client import get_supabase


def get_conversation_store(supabase: Client = Depends(get_supabase)) -> ConversationStore:
    return ConversationStore(supabase)


def get_persona_store(supabase: Client = Depends(get_supabase)) -> PersonaStore:
    return PersonaStore(supabase)


def get_knowledge_store(supabase: Client = Depends(get_supabase)) -> KnowledgeStore:
    return KnowledgeStore(supabase)


def get_monument_store(supabase: Client = Depends(get_supabase)) -> MonumentStore:
    return MonumentStore(supabase)


def get_document_store(supabase: Client = Depends(get_supabase)) -> DocumentStore:
    return DocumentStore(supabase)


def get_embedder(settings: Settings = Depends(get_settings)) -> EmbeddingClient:
    return EmbeddingClient.from_settings(settings)


def get_llm(settings: Settings = Depends(get_settings)) -> LLMGateway:
    return LLMGateway.from_settings(settings)


def get_speech_client(settings: Settings = Depends(get_settings)) -> SpeechClient:
    return SpeechClient.from_settings(settings)


def get_retrieval(
    knowledge_store: KnowledgeStore = Depends(get_knowledge_store),
    embedder: EmbeddingClient = Depends(get_embedder),
    settings: Settings = Depends(get_settings),
) -> RetrievalService:
    return RetrievalService(
        knowledge_store,
        embedder,
        corpus_language=settings.CORPUS_LANGUAGE,
        match_threshold=settings.SEARCH_MATCH_THRESHOLD,
        default_limit=settings.SEARCH_LIMIT,
    )


def get_ingestion_pipeline(
    knowledge_store: KnowledgeStore = Depends(get_knowledge_store),
    document_store: DocumentStore = Depends(get_document_store),
    embedder: EmbeddingClient = Depends(get_embedder),
    settings: Settings = Depends(get_settings),
) -> IngestionPipeline:
    return IngestionPipeline(
        knowledge_store,
        document_store,
        embedder,
        corpus_language=settings.CORPUS_LANGUAGE,
        default_max_chunk_size=settings.MAX_CHUNK_SIZE,
    )

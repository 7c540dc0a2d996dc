"""Pydantic models for uploaded documents and ingestion results."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DocumentStatus(str, Enum):
    """Processing status of an uploaded document."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


# Allowed status transitions; terminal states have none
STATUS_TRANSITIONS: dict[DocumentStatus, set[DocumentStatus]] = {
    DocumentStatus.PENDING: {DocumentStatus.PROCESSING},
    DocumentStatus.PROCESSING: {DocumentStatus.COMPLETED, DocumentStatus.FAILED},
    DocumentStatus.COMPLETED: set(),
    DocumentStatus.FAILED: set(),
}


class UploadedDocument(BaseModel):
    """A document uploaded for ingestion into the knowledge base."""

    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str | None = None
    filename: str
    file_type: str
    file_size: int = 0
    status: DocumentStatus = DocumentStatus.PENDING
    chunks_created: int = 0
    error_message: str | None = None
    uploaded_at: datetime | None = None
    processed_at: datetime | None = None


class ChunkResult(BaseModel):
    """Outcome of embedding and storing one chunk."""

    chunk_index: int
    success: bool
    passage_id: str | None = None
    error: str | None = None


class IngestionResult(BaseModel):
    """Summary of one ingestion run."""

    document_id: str
    status: DocumentStatus
    chunks_created: int = 0
    chunks_failed: int = 0
    chunk_results: list[ChunkResult] = Field(default_factory=list)
    error_message: str | None = None

"""Database operations for document uploads."""

from datetime import datetime, timezone
from typing import Any

from supabase import Client

from app.core.logging import get_logger
from app.core.schemas_documents import STATUS_TRANSITIONS, DocumentStatus, UploadedDocument

logger = get_logger(__name__)

TABLE = "uploaded_documents"


class InvalidStatusTransitionError(ValueError):
    """Raised when a document status change is not allowed from its current state."""


class DocumentStore:
    """Uploaded documents and their processing status."""

    def __init__(self, supabase: Client):
        self._supabase = supabase

    def create_document_upload(
        self,
        filename: str,
        file_type: str,
        file_size: int,
        user_id: str | None = None,
    ) -> UploadedDocument:
        """Create a new document upload record.

        Args:
            filename: Original filename
            file_type: MIME type
            file_size: File size in bytes
            user_id: Uploading user

        Returns:
            Created document upload record, status pending
        """
        record: dict[str, Any] = {
            "filename": filename,
            "file_type": file_type,
            "file_size": file_size,
            "status": DocumentStatus.PENDING.value,
            "chunks_created": 0,
        }
        if user_id:
            record["user_id"] = user_id

        response = self._supabase.table(TABLE).insert(record).execute()

        if not response.data:
            raise ValueError("Failed to create document upload record")

        doc = UploadedDocument.model_validate(response.data[0])
        logger.info(f"Created document upload {doc.id}: {filename}", extra={"document_id": doc.id})
        return doc

    def get_document_upload(self, document_id: str) -> UploadedDocument | None:
        """Get a document upload by ID, or None."""
        response = (
            self._supabase.table(TABLE)
            .select("*")
            .eq("id", document_id)
            .execute()
        )
        return UploadedDocument.model_validate(response.data[0]) if response.data else None

    def list_documents(self, limit: int = 100) -> list[UploadedDocument]:
        """List uploads, most recent first."""
        response = (
            self._supabase.table(TABLE)
            .select("*")
            .order("uploaded_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [UploadedDocument.model_validate(row) for row in response.data or []]

    def mark_processing(self, document_id: str) -> UploadedDocument:
        """pending → processing."""
        return self._transition(document_id, DocumentStatus.PENDING, DocumentStatus.PROCESSING, {})

    def mark_completed(self, document_id: str, chunks_created: int) -> UploadedDocument:
        """processing → completed, recording how many chunks were stored."""
        return self._transition(
            document_id,
            DocumentStatus.PROCESSING,
            DocumentStatus.COMPLETED,
            {
                "chunks_created": chunks_created,
                "processed_at": datetime.now(timezone.utc).isoformat(),
            },
        )

    def mark_failed(self, document_id: str, error_message: str, chunks_created: int = 0) -> UploadedDocument:
        """processing → failed, recording the error."""
        return self._transition(
            document_id,
            DocumentStatus.PROCESSING,
            DocumentStatus.FAILED,
            {
                "error_message": error_message,
                "chunks_created": chunks_created,
                "processed_at": datetime.now(timezone.utc).isoformat(),
            },
        )

    def _transition(
        self,
        document_id: str,
        from_status: DocumentStatus,
        to_status: DocumentStatus,
        fields: dict[str, Any],
    ) -> UploadedDocument:
        """
        Conditionally move a document between statuses.

        The update only matches rows still in ``from_status``, so a document that
        already reached a terminal state is never overwritten.

        Raises:
            InvalidStatusTransitionError: If the transition is not allowed or the
                document is not in ``from_status``
        """
        if to_status not in STATUS_TRANSITIONS[from_status]:
            raise InvalidStatusTransitionError(
                f"Cannot move document from {from_status.value} to {to_status.value}"
            )

        response = (
            self._supabase.table(TABLE)
            .update({"status": to_status.value, **fields})
            .eq("id", document_id)
            .eq("status", from_status.value)
            .execute()
        )

        if not response.data:
            raise InvalidStatusTransitionError(
                f"Document {document_id} is not {from_status.value}; cannot mark {to_status.value}"
            )

        logger.info(
            f"Document {document_id}: {from_status.value} -> {to_status.value}",
            extra={"document_id": document_id},
        )
        return UploadedDocument.model_validate(response.data[0])

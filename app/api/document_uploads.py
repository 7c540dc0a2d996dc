"""API endpoints for document uploads."""

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from pydantic import BaseModel

from app.api.dependencies import get_document_store, get_ingestion_pipeline
from app.core.auth_middleware import AuthContext, require_admin
from app.core.config import Settings, get_settings
from app.core.file_text import extract_text_from_upload, is_supported_upload
from app.core.ingestion import IngestionPipeline
from app.core.logging import get_logger
from app.core.schemas_documents import IngestionResult, UploadedDocument
from app.db.document_uploads import DocumentStore

logger = get_logger(__name__)

router = APIRouter()


class DocumentListResponse(BaseModel):
    """Response for document list."""

    documents: list[UploadedDocument]
    total: int


@router.post("/documents")
async def upload_document(
    file: UploadFile = File(...),
    max_chunk_size: int = Form(default=1000, gt=0),
    auth: AuthContext = Depends(require_admin),
    document_store: DocumentStore = Depends(get_document_store),
    pipeline: IngestionPipeline = Depends(get_ingestion_pipeline),
    settings: Settings = Depends(get_settings),
) -> IngestionResult:
    """Upload a document and ingest it into the knowledge base.

    Accepts PDF, TXT and DOCX. The body is decoded as text, split into
    sentence-aligned chunks, embedded and stored one chunk at a time.

    Args:
        file: File to upload
        max_chunk_size: Max characters per chunk

    Returns:
        IngestionResult with the final document status and per-chunk outcomes

    Raises:
        HTTPException 400: If the file is empty or of an unsupported type
        HTTPException 413: If the file is too large
    """
    filename = file.filename or "unnamed"

    if not is_supported_upload(filename, file.content_type):
        raise HTTPException(status_code=400, detail="Only PDF, TXT and DOCX files are supported")

    file_bytes = await file.read()

    if not file_bytes:
        raise HTTPException(status_code=400, detail="Empty file")
    if len(file_bytes) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds the {settings.MAX_UPLOAD_BYTES} byte limit",
        )

    try:
        extracted = extract_text_from_upload(filename, file.content_type, file_bytes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        doc = document_store.create_document_upload(
            filename=filename,
            file_type=extracted.file_type,
            file_size=len(file_bytes),
            user_id=auth.user_id,
        )
    except Exception as e:
        logger.error(f"Failed to create document record: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create document record")

    logger.info(
        f"Document uploaded: {filename} ({extracted.detected_encoding})",
        extra={"document_id": doc.id},
    )

    try:
        return await pipeline.ingest(doc.id, extracted.text, filename, max_chunk_size=max_chunk_size)
    except Exception as e:
        logger.error(f"Document processing failed: {e}", exc_info=True, extra={"document_id": doc.id})
        raise HTTPException(status_code=500, detail="Document processing failed")


@router.get("/documents")
async def list_documents(
    limit: int = Query(default=50, ge=1, le=100),
    auth: AuthContext = Depends(require_admin),
    document_store: DocumentStore = Depends(get_document_store),
) -> DocumentListResponse:
    """List uploaded documents, newest first."""
    try:
        documents = document_store.list_documents(limit=limit)
    except Exception as e:
        logger.error(f"Failed to list documents: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list documents")

    return DocumentListResponse(documents=documents, total=len(documents))


@router.get("/documents/{document_id}")
async def get_document(
    document_id: str,
    auth: AuthContext = Depends(require_admin),
    document_store: DocumentStore = Depends(get_document_store),
) -> UploadedDocument:
    """
    Get an uploaded document's processing status.

    Raises:
        HTTPException 404: If the document does not exist
    """
    doc = document_store.get_document_upload(document_id)
    if not doc:
        raise HTTPException(status_code=404, detail="Document not found")
    return doc

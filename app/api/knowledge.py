"""API endpoints for knowledge search and monuments."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from app.api.dependencies import get_knowledge_store, get_monument_store, get_retrieval
from app.core.logging import get_logger
from app.core.retrieval import RetrievalService
from app.core.schemas_knowledge import ContentType, MonumentDetail
from app.db.knowledge_base import KnowledgeStore
from app.db.monuments import MonumentStore

logger = get_logger(__name__)

router = APIRouter()


class KnowledgeSearchRequest(BaseModel):
    """Request body for knowledge search."""

    query: str = Field(..., min_length=1)
    limit: int | None = Field(default=None, ge=1, le=50)
    category: str | None = None
    monument_id: str | None = None
    content_type: ContentType | None = None
    language: str | None = None


@router.post("/knowledge/search")
async def search_knowledge(
    request: KnowledgeSearchRequest,
    retrieval: RetrievalService = Depends(get_retrieval),
) -> Dict[str, Any]:
    """
    Search the knowledge base.

    Semantic when the corpus has embeddings from the configured model, keyword
    otherwise; ``match_type`` on each result says which.
    """
    results = await retrieval.search(
        request.query,
        limit=request.limit,
        category=request.category,
        monument_id=request.monument_id,
        content_type=request.content_type.value if request.content_type else None,
        language=request.language,
    )
    return {"results": results, "total": len(results)}


@router.get("/monuments")
async def list_monuments(
    featured: bool = Query(default=False, description="Only featured monuments"),
    monument_store: MonumentStore = Depends(get_monument_store),
) -> Dict[str, Any]:
    """List monuments by Italian name."""
    try:
        monuments = monument_store.list_monuments(featured_only=featured)
    except Exception as e:
        logger.error(f"Error listing monuments: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list monuments")

    return {"monuments": monuments, "total": len(monuments)}


@router.get("/monuments/{slug}")
async def get_monument(
    slug: str,
    monument_store: MonumentStore = Depends(get_monument_store),
    knowledge_store: KnowledgeStore = Depends(get_knowledge_store),
) -> MonumentDetail:
    """
    Get a monument with its knowledge passages.

    Raises:
        HTTPException 404: If no monument has this slug
    """
    monument = monument_store.get_monument_by_slug(slug)
    if not monument:
        raise HTTPException(status_code=404, detail="Monument not found")

    try:
        passages = knowledge_store.list_monument_passages(monument.id)
    except Exception as e:
        logger.error(f"Error loading passages for {slug}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to load monument passages")

    return MonumentDetail(monument=monument, passages=passages)

"""API router for v1 endpoints."""

from fastapi import APIRouter

from app.api import chat, document_uploads, knowledge, llm_gateway, speech

router = APIRouter()

# Conversations, messages and personas
router.include_router(chat.router, tags=["chat"])

# Knowledge search and monuments
router.include_router(knowledge.router, tags=["knowledge"])

# Admin document ingestion
router.include_router(document_uploads.router, tags=["documents"])

# Provider gateways used by the front end
router.include_router(llm_gateway.router, tags=["llm"])
router.include_router(speech.router, tags=["speech"])

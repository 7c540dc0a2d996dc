"""API endpoints for guide conversations and personas."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from app.api.dependencies import (
    get_conversation_store,
    get_llm,
    get_persona_store,
    get_retrieval,
)
from app.core.agent import (
    EmptyMessageError,
    build_agent,
    create_conversation,
    get_personas,
    load_conversation,
)
from app.core.auth_middleware import AuthContext, optional_auth, require_auth
from app.core.config import Settings, get_settings
from app.core.llm import LLMGateway
from app.core.logging import get_logger
from app.core.retrieval import RetrievalService
from app.core.schemas_conversations import (
    AgentResponse,
    Conversation,
    Message,
    Persona,
    ResponseLanguage,
)
from app.db.conversations import ConversationStore
from app.db.personas import PersonaStore

logger = get_logger(__name__)

router = APIRouter()


class CreateConversationRequest(BaseModel):
    """Request body for starting a conversation."""

    language: ResponseLanguage = ResponseLanguage.EN
    persona_id: str | None = None


class SendMessageRequest(BaseModel):
    """Request body for a visitor message."""

    message: str = Field(..., min_length=1, max_length=4000)


class SetPersonaRequest(BaseModel):
    """Request body for selecting a persona."""

    persona_id: str


def _get_accessible_conversation(
    conversation_store: ConversationStore,
    conversation_id: str,
    auth: Optional[AuthContext],
) -> Conversation:
    """Load a conversation; owned conversations are visible to their owner and admins only."""
    conversation = conversation_store.get_conversation(conversation_id)
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")

    if conversation.user_id:
        is_owner = auth is not None and auth.user_id == conversation.user_id
        if not is_owner and not (auth and auth.is_admin):
            raise HTTPException(status_code=403, detail="Access to this conversation denied")

    return conversation


@router.post("/conversations", status_code=status.HTTP_201_CREATED)
async def start_conversation(
    request: CreateConversationRequest,
    auth: Optional[AuthContext] = Depends(optional_auth),
    conversation_store: ConversationStore = Depends(get_conversation_store),
    persona_store: PersonaStore = Depends(get_persona_store),
) -> Conversation:
    """
    Start a new conversation.

    Anonymous visitors may chat; signed-in visitors get the conversation
    attached to their account so it shows up in their history.

    Raises:
        HTTPException 404: If the persona does not exist
    """
    if request.persona_id and not persona_store.get_persona(request.persona_id):
        raise HTTPException(status_code=404, detail="Persona not found")

    try:
        conversation_id = create_conversation(
            conversation_store,
            language=request.language.value,
            persona_id=request.persona_id,
            user_id=auth.user_id if auth else None,
        )
        conversation = conversation_store.get_conversation(conversation_id)
    except Exception as e:
        logger.error(f"Error creating conversation: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create conversation")

    logger.info(
        f"Conversation started in {request.language.value}",
        extra={"conversation_id": conversation_id},
    )
    return conversation


@router.get("/conversations")
async def list_conversations(
    auth: AuthContext = Depends(require_auth),
    conversation_store: ConversationStore = Depends(get_conversation_store),
) -> Dict[str, Any]:
    """
    List the signed-in user's conversations that have at least one message.

    Returns:
        Conversations, most recently updated first
    """
    if not auth.user_id:
        raise HTTPException(status_code=400, detail="A user session is required")

    try:
        conversations = conversation_store.list_user_conversations(auth.user_id)
    except Exception as e:
        logger.error(f"Error listing conversations: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list conversations")

    return {"conversations": conversations, "total": len(conversations)}


@router.get("/conversations/{conversation_id}/messages")
async def get_conversation_messages(
    conversation_id: str,
    auth: Optional[AuthContext] = Depends(optional_auth),
    conversation_store: ConversationStore = Depends(get_conversation_store),
) -> Dict[str, Any]:
    """
    Get the full history of a conversation, oldest first.

    Raises:
        HTTPException 404: If the conversation does not exist
    """
    _get_accessible_conversation(conversation_store, conversation_id, auth)

    try:
        messages: list[Message] = load_conversation(conversation_store, conversation_id)
    except Exception as e:
        logger.error(f"Error getting messages: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to load messages")

    return {"messages": messages, "total": len(messages)}


@router.put("/conversations/{conversation_id}/persona")
async def set_conversation_persona(
    conversation_id: str,
    request: SetPersonaRequest,
    auth: Optional[AuthContext] = Depends(optional_auth),
    conversation_store: ConversationStore = Depends(get_conversation_store),
    persona_store: PersonaStore = Depends(get_persona_store),
    retrieval: RetrievalService = Depends(get_retrieval),
    llm: LLMGateway = Depends(get_llm),
    settings: Settings = Depends(get_settings),
) -> Persona:
    """
    Select the persona for subsequent replies.

    Raises:
        HTTPException 404: If the conversation or persona does not exist
    """
    conversation = _get_accessible_conversation(conversation_store, conversation_id, auth)
    agent = build_agent(
        conversation,
        conversation_store,
        persona_store,
        retrieval,
        llm,
        corpus_language=settings.CORPUS_LANGUAGE,
    )

    try:
        return await agent.set_persona(request.persona_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(
            f"Error setting persona: {e}",
            exc_info=True,
            extra={"conversation_id": conversation_id},
        )
        raise HTTPException(status_code=500, detail="Failed to set persona")


@router.post("/conversations/{conversation_id}/messages")
async def send_message(
    conversation_id: str,
    request: SendMessageRequest,
    auth: Optional[AuthContext] = Depends(optional_auth),
    conversation_store: ConversationStore = Depends(get_conversation_store),
    persona_store: PersonaStore = Depends(get_persona_store),
    retrieval: RetrievalService = Depends(get_retrieval),
    llm: LLMGateway = Depends(get_llm),
    settings: Settings = Depends(get_settings),
) -> AgentResponse:
    """
    Send a visitor message and get the guide's reply.

    Provider outages produce a fallback reply (``is_fallback``), not an error.

    Raises:
        HTTPException 400: If the message is blank
        HTTPException 404: If the conversation does not exist
        HTTPException 500: If the message could not be stored
    """
    conversation = _get_accessible_conversation(conversation_store, conversation_id, auth)
    agent = build_agent(
        conversation,
        conversation_store,
        persona_store,
        retrieval,
        llm,
        corpus_language=settings.CORPUS_LANGUAGE,
        history_window=settings.HISTORY_WINDOW,
        title_max_chars=settings.TITLE_MAX_CHARS,
        search_limit=settings.SEARCH_LIMIT,
    )

    try:
        return await agent.generate_response(request.message)
    except EmptyMessageError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(
            f"Error generating response: {e}",
            exc_info=True,
            extra={"conversation_id": conversation_id},
        )
        raise HTTPException(status_code=500, detail="Failed to process message")


@router.delete("/conversations/{conversation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_conversation(
    conversation_id: str,
    auth: AuthContext = Depends(require_auth),
    conversation_store: ConversationStore = Depends(get_conversation_store),
) -> None:
    """
    Delete a conversation and its messages. Owner only.

    Raises:
        HTTPException 403: If the caller does not own the conversation
        HTTPException 404: If the conversation does not exist
    """
    conversation = conversation_store.get_conversation(conversation_id)
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")
    if conversation.user_id != auth.user_id:
        raise HTTPException(status_code=403, detail="Only the owner can delete a conversation")

    try:
        conversation_store.delete_conversation(conversation_id)
    except Exception as e:
        logger.error(f"Error deleting conversation: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete conversation")

    logger.info("Conversation deleted", extra={"conversation_id": conversation_id})


@router.get("/personas")
async def list_personas(
    persona_store: PersonaStore = Depends(get_persona_store),
) -> Dict[str, Any]:
    """List the available guide personas by name."""
    try:
        personas = get_personas(persona_store)
    except Exception as e:
        logger.error(f"Error listing personas: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list personas")

    return {"personas": personas}

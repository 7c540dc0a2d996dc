"""API endpoint proxying chat completions to the hosted model."""

from typing import Literal

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from app.api.dependencies import get_llm
from app.core.llm import LLMGateway, LLMGatewayError
from app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class LLMChatRequest(BaseModel):
    """Request body for a proxied chat completion."""

    messages: list[ChatMessage] = Field(..., min_length=1)
    language: str = "en"


class LLMChatResponse(BaseModel):
    content: str
    sources: list[str] = Field(default_factory=list)


@router.post("/llm/chat", response_model=LLMChatResponse)
async def llm_chat(
    request: LLMChatRequest,
    llm: LLMGateway = Depends(get_llm),
):
    """
    Run one chat completion with the server-side credential.

    Returns:
        LLMChatResponse, or 502 with ``{"error": ...}`` when the provider fails
    """
    try:
        reply = await llm.complete(
            [m.model_dump() for m in request.messages],
            language=request.language,
        )
    except LLMGatewayError as e:
        logger.warning(f"LLM gateway request failed: {e}")
        return JSONResponse(status_code=502, content={"error": str(e)})

    return LLMChatResponse(content=reply.content, sources=reply.sources)

"""Pydantic models for conversations, messages and personas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CONVERSATION_TITLE = "New Conversation"


class MessageRole(str, Enum):
    """Author of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


class ResponseLanguage(str, Enum):
    """Languages the guide can answer in."""

    EN = "en"
    IT = "it"
    ES = "es"


class Persona(BaseModel):
    """A named tone profile applied to the guide's replies."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    description: str = ""
    tone_instructions: str = ""


class Conversation(BaseModel):
    """A chat session between a visitor and the guide."""

    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str | None = None
    persona_id: str | None = None
    language: str = ResponseLanguage.EN.value
    title: str = DEFAULT_CONVERSATION_TITLE
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Message(BaseModel):
    """A single persisted turn."""

    model_config = ConfigDict(extra="ignore")

    id: str
    conversation_id: str
    role: MessageRole
    content: str
    created_at: datetime | None = None


class AgentResponse(BaseModel):
    """Reply produced by the conversation agent."""

    content: str
    sources: list[str] = Field(default_factory=list)
    is_fallback: bool = False

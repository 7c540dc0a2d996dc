"""LLM gateway: the only place that talks to the hosted chat-completion API."""

from dataclasses import dataclass, field
from typing import Any

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from app.core.config import Settings
from app.core.embeddings import ConfigurationError
from app.core.logging import get_logger
from app.core.prompts import build_language_directive

logger = get_logger(__name__)

_MESSAGE_TYPES: dict[str, type[BaseMessage]] = {
    "system": SystemMessage,
    "user": HumanMessage,
    "assistant": AIMessage,
}


class LLMGatewayError(Exception):
    """Raised when the provider call fails or returns an unusable reply."""


@dataclass
class LLMReply:
    """Reply from the chat-completion provider."""

    content: str
    sources: list[str] = field(default_factory=list)


def to_langchain_messages(messages: list[dict[str, Any]]) -> list[BaseMessage]:
    """
    Convert ``{role, content}`` dicts to LangChain messages.

    Raises:
        ValueError: If a role is not system, user or assistant
    """
    converted = []
    for message in messages:
        role = message.get("role")
        message_cls = _MESSAGE_TYPES.get(role)
        if message_cls is None:
            raise ValueError(f"Unsupported message role: {role!r}")
        converted.append(message_cls(content=message.get("content") or ""))
    return converted


class LLMGateway:
    """
    Thin proxy to the hosted chat model that keeps the credential server-side.

    Callers hand over ``{role, content}`` messages and a response language and
    get back an ``LLMReply``; every provider problem surfaces as
    ``LLMGatewayError`` so callers can recover with a single except clause.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_tokens: int = 800,
        chat_model: BaseChatModel | None = None,
    ):
        if not api_key and chat_model is None:
            raise ConfigurationError("OpenAI API key not configured")
        self.model = model
        self._chat_model = chat_model or ChatOpenAI(
            api_key=api_key,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "LLMGateway":
        return cls(
            api_key=settings.OPENAI_API_KEY,
            model=settings.CHAT_MODEL,
            temperature=settings.CHAT_TEMPERATURE,
            max_tokens=settings.CHAT_MAX_TOKENS,
        )

    async def complete(self, messages: list[dict[str, Any]], language: str = "en") -> LLMReply:
        """
        Run one chat completion.

        When the caller sends no system message, a language directive is
        prepended so the reply still comes back in ``language``.

        Args:
            messages: Ordered ``{role, content}`` dicts
            language: Response language code

        Returns:
            LLMReply with the assistant text

        Raises:
            LLMGatewayError: On provider failure or an empty/malformed reply
        """
        if not messages:
            raise LLMGatewayError("No messages to send")

        try:
            lc_messages = to_langchain_messages(messages)
        except ValueError as e:
            raise LLMGatewayError(str(e)) from e

        if not any(isinstance(m, SystemMessage) for m in lc_messages):
            lc_messages.insert(0, SystemMessage(content=build_language_directive(language)))

        try:
            result = await self._chat_model.ainvoke(lc_messages)
        except Exception as e:
            logger.error(f"Chat completion failed: {e}", extra={"extra_data": {"model": self.model}})
            raise LLMGatewayError(f"Chat completion failed: {e}") from e

        content = getattr(result, "content", None)
        if not isinstance(content, str) or not content.strip():
            raise LLMGatewayError("Chat completion returned no content")

        logger.info(
            f"Chat completion returned {len(content)} chars",
            extra={"extra_data": {"model": self.model, "language": language}},
        )
        return LLMReply(content=content.strip())

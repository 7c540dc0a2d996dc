"""The village guide agent: one conversation, many turns.

Each call to ``generate_response`` runs the conversation turn graph: the user
turn is stored first, relevant passages are retrieved, the persona-conditioned
system prompt is composed, the LLM gateway is called and the reply (or a
canned fallback when the provider is unreachable) is stored and returned.
"""

import asyncio

from app.core.llm import LLMGateway
from app.core.logging import get_logger
from app.core.retrieval import RetrievalService
from app.core.schemas_conversations import (
    AgentResponse,
    Conversation,
    Message,
    MessageRole,
    Persona,
)
from app.db.conversations import ConversationStore
from app.db.personas import PersonaStore
from app.graphs.conversation_turn_graph import ConversationTurnState, build_conversation_turn_graph

logger = get_logger(__name__)


class EmptyMessageError(ValueError):
    """Raised when a visitor message is blank."""


class ConversationAgent:
    """Orchestrates retrieval, prompting and persistence for one conversation."""

    def __init__(
        self,
        conversation_id: str,
        conversation_store: ConversationStore,
        persona_store: PersonaStore,
        retrieval: RetrievalService,
        llm: LLMGateway,
        language: str = "en",
        corpus_language: str = "it",
        persona: Persona | None = None,
        history_window: int = 6,
        title_max_chars: int = 50,
        search_limit: int = 5,
    ):
        self.conversation_id = conversation_id
        self.conversation_store = conversation_store
        self.persona_store = persona_store
        self.retrieval = retrieval
        self.llm = llm
        self.language = language
        self.corpus_language = corpus_language
        self.persona = persona
        self.history_window = history_window
        self.title_max_chars = title_max_chars
        self.search_limit = search_limit
        self._graph = build_conversation_turn_graph(self)

    async def set_persona(self, persona_id: str) -> Persona:
        """
        Select the persona for this conversation and persist the choice.

        Raises:
            LookupError: If the persona does not exist
        """
        persona = await asyncio.to_thread(self.persona_store.get_persona, persona_id)
        if persona is None:
            raise LookupError(f"Persona {persona_id} not found")

        self.persona = persona
        await asyncio.to_thread(
            self.conversation_store.update_conversation,
            self.conversation_id,
            persona_id=persona_id,
        )
        return persona

    async def get_conversation_history(self) -> list[Message]:
        """All turns of the conversation, oldest first."""
        return await asyncio.to_thread(self.conversation_store.list_messages, self.conversation_id)

    async def save_message(self, role: MessageRole, content: str) -> Message:
        return await asyncio.to_thread(
            self.conversation_store.add_message, self.conversation_id, role, content
        )

    async def update_title(self, title: str) -> None:
        await asyncio.to_thread(
            self.conversation_store.update_conversation, self.conversation_id, title=title
        )

    async def generate_response(self, user_message: str) -> AgentResponse:
        """
        Answer a visitor message.

        Provider failures never raise: the visitor gets a fallback reply in the
        conversation language. Only a failure to store the user turn (or to
        load history) propagates.

        Args:
            user_message: Raw visitor text

        Returns:
            AgentResponse with the reply text and the titles of the passages used

        Raises:
            EmptyMessageError: If the message is empty
        """
        if not user_message or not user_message.strip():
            raise EmptyMessageError("Message cannot be empty")

        initial_state = ConversationTurnState(
            conversation_id=self.conversation_id,
            user_message=user_message,
        )
        final_state = await self._graph.ainvoke(initial_state)

        response = final_state["response"]
        logger.info(
            f"Turn finished at stage {final_state['stage']}",
            extra={"conversation_id": self.conversation_id},
        )
        return response


def create_conversation(
    conversation_store: ConversationStore,
    language: str = "en",
    persona_id: str | None = None,
    user_id: str | None = None,
) -> str:
    """Start a conversation and return its ID."""
    conversation = conversation_store.create_conversation(
        language=language,
        persona_id=persona_id,
        user_id=user_id,
    )
    return conversation.id


def load_conversation(conversation_store: ConversationStore, conversation_id: str) -> list[Message]:
    """Full message history of a conversation, oldest first."""
    return conversation_store.list_messages(conversation_id)


def get_personas(persona_store: PersonaStore) -> list[Persona]:
    """All personas by name."""
    return persona_store.list_personas()


def build_agent(
    conversation: Conversation,
    conversation_store: ConversationStore,
    persona_store: PersonaStore,
    retrieval: RetrievalService,
    llm: LLMGateway,
    corpus_language: str = "it",
    history_window: int = 6,
    title_max_chars: int = 50,
    search_limit: int = 5,
) -> ConversationAgent:
    """Agent for an existing conversation, with its stored persona preloaded."""
    persona = None
    if conversation.persona_id:
        persona = persona_store.get_persona(conversation.persona_id)
        if persona is None:
            logger.warning(
                f"Persona {conversation.persona_id} not found, using default voice",
                extra={"conversation_id": conversation.id},
            )

    return ConversationAgent(
        conversation_id=conversation.id,
        conversation_store=conversation_store,
        persona_store=persona_store,
        retrieval=retrieval,
        llm=llm,
        language=conversation.language,
        corpus_language=corpus_language,
        persona=persona,
        history_window=history_window,
        title_max_chars=title_max_chars,
        search_limit=search_limit,
    )

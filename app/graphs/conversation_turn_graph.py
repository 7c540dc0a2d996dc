"""LangGraph state machine for one guide conversation turn.

received → context_retrieved → prompt_composed → llm_called →
{persisted_success | fallback_returned} → title_checked
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from langgraph.graph import END, StateGraph

from app.core.llm import LLMReply
from app.core.logging import get_logger
from app.core.prompts import (
    build_system_prompt,
    compose_system_message,
    fallback_message,
)
from app.core.retrieval import format_context
from app.core.schemas_conversations import AgentResponse, Message, MessageRole

if TYPE_CHECKING:
    from app.core.agent import ConversationAgent

logger = get_logger(__name__)

MAX_STEPS = 8


@dataclass
class ConversationTurnState:
    """State for the conversation turn graph."""

    # Input fields
    conversation_id: str
    user_message: str

    # Processing state
    step_count: int = 0
    stage: str = "received"
    history: list[Message] = field(default_factory=list)
    snippets: list[str] = field(default_factory=list)
    source_titles: list[str] = field(default_factory=list)
    llm_messages: list[dict[str, str]] = field(default_factory=list)
    reply: LLMReply | None = None
    error: str | None = None

    # Output
    response: AgentResponse | None = None


def _check_max_steps(state: ConversationTurnState) -> int:
    """Increment step count, raise if exceeded."""
    step_count = state.step_count + 1
    if step_count > MAX_STEPS:
        raise RuntimeError(f"Graph exceeded max steps ({MAX_STEPS})")
    return step_count


def truncate_title(message: str, max_chars: int) -> str:
    """First-message title, cut to ``max_chars`` with an ellipsis when truncated."""
    message = message.strip()
    if len(message) > max_chars:
        return message[:max_chars] + "..."
    return message


def build_conversation_turn_graph(agent: "ConversationAgent"):
    """Build and compile the turn graph bound to one agent's stores and clients."""

    async def persist_user_turn(state: ConversationTurnState) -> dict[str, Any]:
        """Store the user turn before anything else, then load history."""
        step_count = _check_max_steps(state)

        await agent.save_message(MessageRole.USER, state.user_message)
        history = await agent.get_conversation_history()

        return {"history": history, "stage": "received", "step_count": step_count}

    async def retrieve_context(state: ConversationTurnState) -> dict[str, Any]:
        """Search the knowledge base with the raw user text."""
        step_count = _check_max_steps(state)

        results = await agent.retrieval.search(
            state.user_message,
            limit=agent.search_limit,
            language=agent.corpus_language,
        )

        return {
            "snippets": format_context(results),
            "source_titles": [r.passage.title for r in results],
            "stage": "context_retrieved",
            "step_count": step_count,
        }

    async def compose_prompt(state: ConversationTurnState) -> dict[str, Any]:
        """System message plus the most recent turns; older turns are dropped."""
        step_count = _check_max_steps(state)

        system_prompt = build_system_prompt(agent.persona, agent.language, agent.corpus_language)
        system_message = compose_system_message(system_prompt, state.snippets)

        trimmed = state.history[-agent.history_window:] if agent.history_window > 0 else []
        llm_messages = [{"role": "system", "content": system_message}] + [
            {"role": m.role.value, "content": m.content} for m in trimmed
        ]

        return {"llm_messages": llm_messages, "stage": "prompt_composed", "step_count": step_count}

    async def call_llm(state: ConversationTurnState) -> dict[str, Any]:
        """Call the gateway once; any failure is recorded, not raised."""
        step_count = _check_max_steps(state)

        try:
            reply = await agent.llm.complete(state.llm_messages, language=agent.language)
        except Exception as e:
            logger.warning(
                f"LLM call failed, using fallback reply: {e}",
                extra={"conversation_id": state.conversation_id},
            )
            return {"reply": None, "error": str(e), "stage": "llm_called", "step_count": step_count}

        return {"reply": reply, "stage": "llm_called", "step_count": step_count}

    def route_after_llm(state: ConversationTurnState) -> str:
        return "persist_reply" if state.reply is not None else "fallback"

    async def persist_reply(state: ConversationTurnState) -> dict[str, Any]:
        step_count = _check_max_steps(state)

        try:
            await agent.save_message(MessageRole.ASSISTANT, state.reply.content)
        except Exception as e:
            logger.error(
                f"Failed to store assistant reply: {e}",
                extra={"conversation_id": state.conversation_id},
            )

        response = AgentResponse(
            content=state.reply.content,
            sources=state.reply.sources or state.source_titles,
        )
        return {"response": response, "stage": "persisted_success", "step_count": step_count}

    async def fallback(state: ConversationTurnState) -> dict[str, Any]:
        """Canned reply in the conversation language; stored so the transcript matches."""
        step_count = _check_max_steps(state)

        content = fallback_message(agent.language)
        try:
            await agent.save_message(MessageRole.ASSISTANT, content)
        except Exception as e:
            logger.error(
                f"Failed to store fallback reply: {e}",
                extra={"conversation_id": state.conversation_id},
            )

        response = AgentResponse(content=content, is_fallback=True)
        return {"response": response, "stage": "fallback_returned", "step_count": step_count}

    async def maybe_set_title(state: ConversationTurnState) -> dict[str, Any]:
        """Title the conversation from its first user message, once."""
        step_count = _check_max_steps(state)

        if len(state.history) == 1:
            title = truncate_title(state.user_message, agent.title_max_chars)
            try:
                await agent.update_title(title)
            except Exception as e:
                logger.warning(
                    f"Failed to set conversation title: {e}",
                    extra={"conversation_id": state.conversation_id},
                )

        return {"step_count": step_count}

    graph = StateGraph(ConversationTurnState)

    graph.add_node("persist_user_turn", persist_user_turn)
    graph.add_node("retrieve_context", retrieve_context)
    graph.add_node("compose_prompt", compose_prompt)
    graph.add_node("call_llm", call_llm)
    graph.add_node("persist_reply", persist_reply)
    graph.add_node("fallback", fallback)
    graph.add_node("maybe_set_title", maybe_set_title)

    graph.set_entry_point("persist_user_turn")
    graph.add_edge("persist_user_turn", "retrieve_context")
    graph.add_edge("retrieve_context", "compose_prompt")
    graph.add_edge("compose_prompt", "call_llm")
    graph.add_conditional_edges(
        "call_llm",
        route_after_llm,
        {"persist_reply": "persist_reply", "fallback": "fallback"},
    )
    graph.add_edge("persist_reply", "maybe_set_title")
    graph.add_edge("fallback", "maybe_set_title")
    graph.add_edge("maybe_set_title", END)

    return graph.compile()

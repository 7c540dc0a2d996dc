"""Database operations for conversations and messages tables."""

from datetime import datetime, timezone

from supabase import Client

from app.core.logging import get_logger
from app.core.schemas_conversations import (
    DEFAULT_CONVERSATION_TITLE,
    Conversation,
    Message,
    MessageRole,
)

logger = get_logger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ConversationStore:
    """Conversations and their append-only message log."""

    def __init__(self, supabase: Client):
        self._supabase = supabase

    # ------------------------------------------------------------------
    # Conversations
    # ------------------------------------------------------------------

    def create_conversation(
        self,
        language: str = "en",
        persona_id: str | None = None,
        user_id: str | None = None,
    ) -> Conversation:
        """
        Create a conversation.

        Args:
            language: Response language code
            persona_id: Optional persona
            user_id: Owner; None for anonymous visitors

        Returns:
            Created conversation

        Raises:
            ValueError: If the insert returned no rows
        """
        record = {
            "language": language,
            "persona_id": persona_id,
            "user_id": user_id,
            "title": DEFAULT_CONVERSATION_TITLE,
        }
        response = self._supabase.table("conversations").insert(record).execute()

        if not response.data:
            raise ValueError("Failed to create conversation")

        conversation = Conversation.model_validate(response.data[0])
        logger.info(
            f"Created conversation {conversation.id}",
            extra={"conversation_id": conversation.id},
        )
        return conversation

    def get_conversation(self, conversation_id: str) -> Conversation | None:
        """Get a conversation by ID, or None."""
        response = (
            self._supabase.table("conversations")
            .select("*")
            .eq("id", conversation_id)
            .limit(1)
            .execute()
        )
        return Conversation.model_validate(response.data[0]) if response.data else None

    def list_user_conversations(self, user_id: str) -> list[Conversation]:
        """
        List a user's conversations that contain at least one message.

        Ordered by most recent activity first.
        """
        response = (
            self._supabase.table("conversations")
            .select("*, messages(id)")
            .eq("user_id", user_id)
            .order("updated_at", desc=True)
            .execute()
        )
        return [
            Conversation.model_validate(row)
            for row in response.data or []
            if row.get("messages")
        ]

    def update_conversation(
        self,
        conversation_id: str,
        title: str | None = None,
        persona_id: str | None = None,
    ) -> None:
        """Update title and/or persona; always advances updated_at."""
        payload: dict[str, str] = {"updated_at": _now()}
        if title is not None:
            payload["title"] = title
        if persona_id is not None:
            payload["persona_id"] = persona_id

        self._supabase.table("conversations").update(payload).eq("id", conversation_id).execute()

    def delete_conversation(self, conversation_id: str) -> None:
        """Delete a conversation; messages go with it through the foreign-key cascade."""
        self._supabase.table("conversations").delete().eq("id", conversation_id).execute()
        logger.info(
            f"Deleted conversation {conversation_id}",
            extra={"conversation_id": conversation_id},
        )

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def add_message(self, conversation_id: str, role: MessageRole, content: str) -> Message:
        """
        Append a message and advance the conversation's updated_at.

        Raises:
            ValueError: If the insert returned no rows
        """
        record = {
            "conversation_id": conversation_id,
            "role": role.value,
            "content": content,
        }
        response = self._supabase.table("messages").insert(record).execute()

        if not response.data:
            raise ValueError(f"Failed to save {role.value} message")

        self.update_conversation(conversation_id)
        return Message.model_validate(response.data[0])

    def list_messages(self, conversation_id: str) -> list[Message]:
        """All messages of a conversation, oldest first."""
        response = (
            self._supabase.table("messages")
            .select("*")
            .eq("conversation_id", conversation_id)
            .order("created_at", desc=False)
            .execute()
        )
        return [Message.model_validate(row) for row in response.data or []]

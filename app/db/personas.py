"""Database operations for personas table."""

from supabase import Client

from app.core.logging import get_logger
from app.core.schemas_conversations import Persona

logger = get_logger(__name__)


class PersonaStore:
    """Read-only access to guide personas."""

    def __init__(self, supabase: Client):
        self._supabase = supabase

    def list_personas(self) -> list[Persona]:
        """
        List all personas.

        Returns:
            Personas ordered by name
        """
        response = self._supabase.table("personas").select("*").order("name").execute()
        return [Persona.model_validate(row) for row in response.data or []]

    def get_persona(self, persona_id: str) -> Persona | None:
        """
        Get a single persona by ID.

        Args:
            persona_id: Persona ID

        Returns:
            Persona or None if not found
        """
        response = (
            self._supabase.table("personas")
            .select("*")
            .eq("id", persona_id)
            .maybe_single()
            .execute()
        )
        # maybe_single() returns None instead of a response when no row matches
        if response is None or not response.data:
            return None
        return Persona.model_validate(response.data)

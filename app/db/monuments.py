"""Database operations for monuments table."""

from supabase import Client

from app.core.logging import get_logger
from app.core.schemas_knowledge import Monument

logger = get_logger(__name__)

TABLE = "monuments"


class MonumentStore:
    """Monuments referenced by knowledge passages."""

    def __init__(self, supabase: Client):
        self._supabase = supabase

    def insert_monuments(self, monuments: list[Monument]) -> dict[str, str]:
        """
        Batch insert monuments.

        Args:
            monuments: Monuments to insert

        Returns:
            Mapping of slug to the new monument ID

        Raises:
            ValueError: If the insert returned no rows
        """
        if not monuments:
            return {}

        records = [m.model_dump(mode="json", exclude={"id"}, exclude_none=True) for m in monuments]
        response = self._supabase.table(TABLE).insert(records).execute()

        if not response.data:
            raise ValueError("Failed to insert monuments")

        logger.info(f"Inserted {len(response.data)} monuments")
        return {row["slug"]: row["id"] for row in response.data}

    def get_monument_by_slug(self, slug: str) -> Monument | None:
        """
        Get a monument by its slug.

        Returns:
            Monument or None if not found
        """
        response = (
            self._supabase.table(TABLE)
            .select("*")
            .eq("slug", slug)
            .limit(1)
            .execute()
        )
        return Monument.model_validate(response.data[0]) if response.data else None

    def list_monuments(self, featured_only: bool = False) -> list[Monument]:
        """List monuments by Italian name, optionally only the featured ones."""
        query = self._supabase.table(TABLE).select("*")
        if featured_only:
            query = query.eq("is_featured", True)

        response = query.order("name_it", desc=False).execute()
        return [Monument.model_validate(row) for row in response.data or []]

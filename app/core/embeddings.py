"""OpenAI embeddings generation with validation."""

import asyncio

from openai import OpenAI

from app.core.config import Settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when a provider credential or setting is missing."""


class EmbeddingClient:
    """
    Converts text to fixed-length vectors with a hosted embedding model.

    The model name is exposed so stored vectors can be tagged with it; vectors
    from different models are never compared.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        dimensions: int,
        client: OpenAI | None = None,
    ):
        if not api_key:
            raise ConfigurationError("OpenAI API key not configured")
        self._client = client or OpenAI(api_key=api_key)
        self.model = model
        self.dimensions = dimensions

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmbeddingClient":
        return cls(
            api_key=settings.OPENAI_API_KEY,
            model=settings.EMBEDDING_MODEL,
            dimensions=settings.EMBEDDING_DIM,
        )

    def embed_text(self, text: str) -> list[float]:
        """
        Generate the embedding for a single text.

        Args:
            text: Text to embed

        Returns:
            Embedding vector

        Raises:
            ValueError: If the text is empty or the dimension doesn't match
            Exception: If the OpenAI API call fails
        """
        if not text or not text.strip():
            raise ValueError("Cannot embed empty text")

        try:
            response = self._client.embeddings.create(
                model=self.model,
                input=text,
                encoding_format="float",
            )
        except Exception as e:
            logger.error(f"Failed to generate embedding: {e}")
            raise

        if not response.data:
            raise ValueError("Embedding response contained no data")

        embedding = list(response.data[0].embedding)
        if len(embedding) != self.dimensions:
            raise ValueError(
                f"Embedding dimension mismatch: expected {self.dimensions}, got {len(embedding)}"
            )

        logger.debug(
            f"Generated embedding using {self.model}",
            extra={"extra_data": {"model": self.model, "chars": len(text)}},
        )
        return embedding

    async def embed_text_async(self, text: str) -> list[float]:
        """Async wrapper around embed_text using thread pool."""
        return await asyncio.to_thread(self.embed_text, text)

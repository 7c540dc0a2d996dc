"""Configuration management for the Muro Lucano guide engine."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    # Environment variables should be set directly
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Supabase configuration (required)
    SUPABASE_URL: str = Field(..., description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: str = Field(..., description="Supabase service role key")

    # OpenAI configuration (required)
    OPENAI_API_KEY: str = Field(..., description="OpenAI API key")

    # Environment
    GUIDE_ENV: str = Field(default="dev", description="Environment: dev, staging, prod, test")

    # Embedding configuration
    EMBEDDING_MODEL: str = Field(
        default="text-embedding-3-small", description="OpenAI embedding model"
    )
    EMBEDDING_DIM: int = Field(default=1536, description="Embedding vector dimension")

    # Chat completion configuration
    CHAT_MODEL: str = Field(default="gpt-4o-mini", description="Model for guide replies")
    CHAT_TEMPERATURE: float = Field(default=0.7, description="Sampling temperature for replies")
    CHAT_MAX_TOKENS: int = Field(default=800, description="Max tokens per guide reply")

    # Text-to-speech configuration
    TTS_MODEL: str = Field(default="tts-1-hd", description="OpenAI speech model")

    # Knowledge corpus and retrieval
    CORPUS_LANGUAGE: str = Field(
        default="it", description="Language the knowledge base is authored in"
    )
    SEARCH_MATCH_THRESHOLD: float = Field(
        default=0.5, description="Minimum cosine similarity for semantic matches"
    )
    SEARCH_LIMIT: int = Field(default=5, description="Passages injected per turn")

    # Conversation handling
    HISTORY_WINDOW: int = Field(default=6, description="Most recent turns sent to the LLM")
    TITLE_MAX_CHARS: int = Field(
        default=50, description="Max characters of a derived conversation title"
    )

    # Document ingestion
    MAX_CHUNK_SIZE: int = Field(default=1000, description="Default max characters per chunk")
    MAX_UPLOAD_BYTES: int = Field(default=2_000_000, description="Max file upload size in bytes")

    # Admin access for internal tools
    ADMIN_API_KEY: str | None = Field(default=None, description="Key granting admin access")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If required environment variables are missing
    """
    return Settings()

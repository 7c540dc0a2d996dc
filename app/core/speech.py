"""Text-to-speech gateway for the voice front end."""

import asyncio

from openai import OpenAI

from app.core.config import Settings
from app.core.embeddings import ConfigurationError
from app.core.logging import get_logger

logger = get_logger(__name__)

# Fixed per-language voice mapping
VOICE_MAP = {
    "it": "alloy",
    "it-IT": "alloy",
    "en": "nova",
    "en-US": "nova",
    "es": "shimmer",
    "es-ES": "shimmer",
}

DEFAULT_VOICE = "alloy"


def voice_for_language(language: str) -> str:
    """Voice used for a language code; unknown codes get the default voice."""
    return VOICE_MAP.get(language, DEFAULT_VOICE)


class SpeechClient:
    """Synthesizes guide replies to MP3 audio."""

    def __init__(
        self,
        api_key: str,
        model: str = "tts-1-hd",
        speed: float = 1.0,
        client: OpenAI | None = None,
    ):
        if not api_key:
            raise ConfigurationError("OpenAI API key not configured")
        self._client = client or OpenAI(api_key=api_key)
        self.model = model
        self.speed = speed

    @classmethod
    def from_settings(cls, settings: Settings) -> "SpeechClient":
        return cls(api_key=settings.OPENAI_API_KEY, model=settings.TTS_MODEL)

    def synthesize(self, text: str, language: str = "it") -> bytes:
        """
        Convert text to MP3 bytes.

        Raises:
            ValueError: If text is empty
            Exception: If the OpenAI API call fails
        """
        if not text or not text.strip():
            raise ValueError("Text is required")

        voice = voice_for_language(language)
        response = self._client.audio.speech.create(
            model=self.model,
            input=text,
            voice=voice,
            speed=self.speed,
        )
        audio = response.content

        logger.info(
            f"Synthesized {len(audio)} bytes of audio",
            extra={"extra_data": {"voice": voice, "language": language}},
        )
        return audio

    async def synthesize_async(self, text: str, language: str = "it") -> bytes:
        """Async wrapper around synthesize using thread pool."""
        return await asyncio.to_thread(self.synthesize, text, language)

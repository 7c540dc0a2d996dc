"""Fake provider clients: embeddings, chat completions and speech."""

import asyncio
from typing import Any, Dict, List

from app.core.llm import LLMGatewayError, LLMReply

FAKE_EMBEDDING_MODEL = "fake-embedding-3"


class FakeEmbedder:
    """Returns canned vectors per text; unknown texts get ``default``."""

    def __init__(
        self,
        vectors: Dict[str, List[float]] | None = None,
        default: List[float] | None = None,
        model: str = FAKE_EMBEDDING_MODEL,
        fail_on_calls: set[int] | None = None,
    ):
        self.vectors = vectors or {}
        self.default = default or [1.0, 0.0, 0.0]
        self.model = model
        self.fail_on_calls = fail_on_calls or set()
        self.calls: List[str] = []

    def embed_text(self, text: str) -> List[float]:
        self.calls.append(text)
        if len(self.calls) in self.fail_on_calls:
            raise RuntimeError("embedding provider unavailable")
        return self.vectors.get(text, self.default)

    async def embed_text_async(self, text: str) -> List[float]:
        return await asyncio.to_thread(self.embed_text, text)


class FakeLLM:
    """Records requests and replies with canned text, or fails on demand."""

    def __init__(self, reply: str = "Benvenuti a Muro Lucano!", fail: bool = False, sources=None):
        self.reply = reply
        self.fail = fail
        self.sources = sources or []
        self.requests: List[Dict[str, Any]] = []

    async def complete(self, messages: List[Dict[str, Any]], language: str = "en") -> LLMReply:
        self.requests.append({"messages": messages, "language": language})
        if self.fail:
            raise LLMGatewayError("provider unreachable")
        return LLMReply(content=self.reply, sources=list(self.sources))


class FakeSpeech:
    """Returns fixed MP3-looking bytes."""

    def __init__(self, audio: bytes = b"ID3fake-mp3", fail: bool = False):
        self.audio = audio
        self.fail = fail
        self.requests: List[tuple] = []

    async def synthesize_async(self, text: str, language: str = "it") -> bytes:
        self.requests.append((text, language))
        if self.fail:
            raise RuntimeError("tts unavailable")
        return self.audio

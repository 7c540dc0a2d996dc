"""Pytest configuration and fixtures."""

import os

import pytest

from app.core.schemas_conversations import Persona
from tests.fakes.fake_clients import FakeEmbedder, FakeLLM
from tests.fakes.fake_db import (
    FakeConversationStore,
    FakeDocumentStore,
    FakeKnowledgeStore,
    FakePersonaStore,
)

# Set before any test module triggers get_settings()
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.setdefault("GUIDE_ENV", "test")


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["SUPABASE_URL"] = "https://test.supabase.co"
    os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-key"
    os.environ["OPENAI_API_KEY"] = "test-openai-key"
    os.environ["GUIDE_ENV"] = "test"


@pytest.fixture
def storyteller():
    return Persona(
        id="persona-storyteller",
        name="Storyteller",
        description="Shares legends and anecdotes",
        tone_instructions="Speak like a village elder telling stories by the fire.",
    )


@pytest.fixture
def knowledge_store():
    return FakeKnowledgeStore()


@pytest.fixture
def conversation_store():
    return FakeConversationStore()


@pytest.fixture
def persona_store(storyteller):
    return FakePersonaStore([storyteller])


@pytest.fixture
def document_store():
    return FakeDocumentStore()


@pytest.fixture
def embedder():
    return FakeEmbedder()


@pytest.fixture
def llm():
    return FakeLLM()

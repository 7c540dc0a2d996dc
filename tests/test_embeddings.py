"""Tests for embeddings generation with mocked OpenAI API."""

from unittest.mock import MagicMock

import pytest

from app.core.embeddings import ConfigurationError, EmbeddingClient


@pytest.fixture
def mock_openai_response():
    """Create a mock OpenAI embeddings response."""

    def _create_response(dimension: int = 1536):
        mock_response = MagicMock()
        mock_embedding = MagicMock()
        mock_embedding.embedding = [0.1] * dimension
        mock_response.data = [mock_embedding]
        return mock_response

    return _create_response


def _client(openai_client, dimensions=1536):
    return EmbeddingClient(
        api_key="test-key",
        model="text-embedding-3-small",
        dimensions=dimensions,
        client=openai_client,
    )


def test_embed_text(mock_openai_response):
    """Test embedding a single text."""
    mock_client = MagicMock()
    mock_client.embeddings.create.return_value = mock_openai_response()

    embedding = _client(mock_client).embed_text("Il castello normanno")

    assert len(embedding) == 1536
    mock_client.embeddings.create.assert_called_once_with(
        model="text-embedding-3-small",
        input="Il castello normanno",
        encoding_format="float",
    )


def test_embed_text_dimension_validation(mock_openai_response):
    """Test that dimension mismatch raises ValueError."""
    mock_client = MagicMock()
    mock_client.embeddings.create.return_value = mock_openai_response(dimension=512)

    with pytest.raises(ValueError, match="Embedding dimension mismatch"):
        _client(mock_client).embed_text("Test text")


def test_embed_text_empty_rejected():
    mock_client = MagicMock()

    with pytest.raises(ValueError):
        _client(mock_client).embed_text("  ")

    mock_client.embeddings.create.assert_not_called()


def test_embed_text_api_failure():
    """Test handling of API failures."""
    mock_client = MagicMock()
    mock_client.embeddings.create.side_effect = Exception("API Error")

    with pytest.raises(Exception, match="API Error"):
        _client(mock_client).embed_text("Test text")


def test_missing_api_key_fails_fast():
    with pytest.raises(ConfigurationError):
        EmbeddingClient(api_key="", model="text-embedding-3-small", dimensions=1536)


@pytest.mark.asyncio
async def test_embed_text_async(mock_openai_response):
    mock_client = MagicMock()
    mock_client.embeddings.create.return_value = mock_openai_response(dimension=8)

    embedding = await _client(mock_client, dimensions=8).embed_text_async("Ripe")

    assert embedding == [0.1] * 8

"""
Client factory tests - variant selection and SDK client construction.
"""

import pytest
from unittest.mock import MagicMock, patch
from ragdemo.agents import OllamaAgent, OpenAIAgent
from ragdemo.core.config import SampleVariant, Settings
from ragdemo.core.errors import ConfigurationError
from ragdemo.core.factory import (
    create_chat_client,
    create_embedding_client,
    create_ollama_client,
    create_openai_client
)
from ragdemo.vector.embeddings import OllamaEmbedding, OpenAIEmbedding


@pytest.fixture
def settings():
    return Settings(request_timeout_sec=12.0)


@patch('ragdemo.core.factory.openai.OpenAI')
def test_openai_client_bound_to_hosted_endpoint(mock_openai, settings):
    """Test that the hosted client uses the bearer token, endpoint and timeout."""
    create_openai_client(settings, "secret-token")

    mock_openai.assert_called_once_with(
        api_key="secret-token",
        base_url="https://models.inference.ai.azure.com",
        timeout=12.0,
        max_retries=0,
    )


@patch('ragdemo.core.factory.openai.OpenAI')
def test_hosted_clients_require_token(mock_openai, settings):
    """Test that no hosted client is built without a token."""
    with pytest.raises(ConfigurationError):
        create_chat_client(SampleVariant.HOSTED, settings, token=None)
    with pytest.raises(ConfigurationError):
        create_embedding_client(SampleVariant.HOSTED, settings, token="")

    mock_openai.assert_not_called()


@patch('ragdemo.core.factory.ollama.Client')
def test_ollama_client_bound_to_local_endpoint(mock_client, settings):
    """Test that the local client uses the local endpoint without auth."""
    create_ollama_client(settings)

    mock_client.assert_called_once_with(host="http://localhost:11434/", timeout=12.0)


def test_hosted_variant_types(settings):
    """Test the hosted variant produces OpenAI-backed clients."""
    sdk_client = MagicMock()

    chat = create_chat_client(SampleVariant.HOSTED, settings, "token", _client=sdk_client)
    embedder = create_embedding_client(SampleVariant.HOSTED, settings, "token", _client=sdk_client)

    assert isinstance(chat, OpenAIAgent)
    assert chat.model_name == "gpt-4o-mini"
    assert isinstance(embedder, OpenAIEmbedding)
    assert embedder.model_name == "text-embedding-3-small"
    assert embedder.get_dimension() == 1536


def test_configured_dimension_is_requested_from_hosted_model():
    """Test that RAGDEMO_EMBEDDING_DIMENSION reaches the embeddings request."""
    sdk_client = MagicMock()
    sdk_client.embeddings.create.return_value = MagicMock(data=[MagicMock(embedding=[0.5] * 256)])
    settings = Settings.from_env({"RAGDEMO_EMBEDDING_DIMENSION": "256"})

    embedder = create_embedding_client(SampleVariant.HOSTED, settings, "token", _client=sdk_client)
    vector = embedder.embed("alpha")

    assert len(vector) == embedder.get_dimension() == 256
    sdk_client.embeddings.create.assert_called_once_with(
        model="text-embedding-3-small", input="alpha", dimensions=256
    )


def test_local_variant_types(settings):
    """Test the local variant produces Ollama-backed clients with one model id."""
    sdk_client = MagicMock()

    chat = create_chat_client(SampleVariant.LOCAL, settings, _client=sdk_client)
    embedder = create_embedding_client(SampleVariant.LOCAL, settings, _client=sdk_client)

    assert isinstance(chat, OllamaAgent)
    assert isinstance(embedder, OllamaEmbedding)
    assert chat.model_name == embedder.model_name == "llama3.2:1b"


def test_unknown_variant_rejected(settings):
    """Test that unknown variants are rejected."""
    with pytest.raises(ValueError):
        create_chat_client("remote", settings, _client=MagicMock())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

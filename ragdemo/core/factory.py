"""
Client factory: builds the chat and embedding clients for a sample variant.
"""

from typing import Optional

import ollama
import openai

from .config import SampleVariant, Settings, TOKEN_SETTING
from .errors import ConfigurationError
from ..agents import BaseChatAgent, OllamaAgent, OpenAIAgent
from ..vector.embeddings import IEmbeddingProvider, OllamaEmbedding, OpenAIEmbedding


def create_openai_client(settings: Settings, token: Optional[str]) -> "openai.OpenAI":
    """OpenAI SDK client bound to the hosted endpoint. Requires a token."""
    if not token:
        raise ConfigurationError(TOKEN_SETTING)
    return openai.OpenAI(
        api_key=token,
        base_url=settings.hosted_endpoint,
        timeout=settings.request_timeout_sec,
        max_retries=0,
    )


def create_ollama_client(settings: Settings) -> "ollama.Client":
    """Ollama client bound to the local server."""
    return ollama.Client(host=settings.local_endpoint, timeout=settings.request_timeout_sec)


def create_chat_client(variant: SampleVariant, settings: Settings, token: Optional[str] = None,
                       _client=None) -> BaseChatAgent:
    """Get the chat client for a variant. _client injects a prebuilt SDK client."""
    if variant == SampleVariant.HOSTED:
        client = _client if _client is not None else create_openai_client(settings, token)
        return OpenAIAgent(client, settings.hosted_chat_model)
    elif variant == SampleVariant.LOCAL:
        client = _client if _client is not None else create_ollama_client(settings)
        return OllamaAgent(client, settings.local_model)
    raise ValueError(f"unsupported sample variant: {variant}")


def create_embedding_client(variant: SampleVariant, settings: Settings, token: Optional[str] = None,
                            _client=None) -> IEmbeddingProvider:
    """Get the embedding client for a variant. _client injects a prebuilt SDK client."""
    if variant == SampleVariant.HOSTED:
        client = _client if _client is not None else create_openai_client(settings, token)
        return OpenAIEmbedding(client, settings.hosted_embedding_model, settings.embedding_dimension)
    elif variant == SampleVariant.LOCAL:
        client = _client if _client is not None else create_ollama_client(settings)
        return OllamaEmbedding(client, settings.local_model)
    raise ValueError(f"unsupported sample variant: {variant}")

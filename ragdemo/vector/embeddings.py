"""
Embedding providers: hosted (OpenAI-compatible API), local (Ollama) and a
deterministic hash provider for offline runs and tests.
"""

import hashlib
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx
import numpy as np
import ollama
import openai

from ..core.errors import ServiceUnavailable
from ..util.logging import logger


class IEmbeddingProvider(ABC):
    """Abstract interface for embedding providers."""

    @abstractmethod
    def embed(self, text: str) -> List[float]:
        """Generate embedding vector for given text."""
        pass

    @abstractmethod
    def get_dimension(self) -> Optional[int]:
        """Get the dimension of the embedding vectors, or None if only known after the first call."""
        pass


class DeterministicHashEmbedding(IEmbeddingProvider):
    """Deterministic hash-based embedding provider for testing purposes.

    The text's SHA-256 digest seeds a random generator, so the same text always
    maps to the same unit vector without any model or network access.
    """

    def __init__(self, dimension: int = 1536):
        self.dimension = dimension

    def embed(self, text: str) -> List[float]:
        """Generate deterministic embedding vector using hash function."""
        seed = int.from_bytes(hashlib.sha256(text.encode("utf-8")).digest()[:8], "big")
        rng = np.random.default_rng(seed)
        vector = rng.standard_normal(self.dimension)
        return (vector / np.linalg.norm(vector)).tolist()

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        return self.dimension


class OpenAIEmbedding(IEmbeddingProvider):
    """Embeddings from an OpenAI-compatible endpoint (GitHub Models by default).

    One request per text, no batching.
    Models that accept a requested output size (text-embedding-3-*) are asked
    for `dimension` values; other models must already produce that size.
    """

    def __init__(self, client: "openai.OpenAI", model_name: str = "text-embedding-3-small",
                 dimension: Optional[int] = 1536):
        self.client = client
        self.model_name = model_name
        self.dimension = dimension

    def embed(self, text: str) -> List[float]:
        start_time = time.time()
        try:
            response = self.client.embeddings.create(**self._request(text))
        except (openai.APIConnectionError, openai.InternalServerError) as e:
            logger.log_client_call("openai", "embed", start_time, time.time(), "failed",
                                   {"model": self.model_name, "error": str(e)})
            raise ServiceUnavailable("OpenAI embeddings", str(e)) from e

        embedding = list(response.data[0].embedding)
        logger.log_client_call("openai", "embed", start_time, time.time(), details={
            "model": self.model_name,
            "text": text,
            "dimension": len(embedding)
        })
        return embedding

    def _request(self, text: str) -> Dict[str, Any]:
        request = {"model": self.model_name, "input": text}
        if self.dimension is not None and self.model_name.startswith("text-embedding-3"):
            request["dimensions"] = self.dimension
        return request

    def get_dimension(self) -> Optional[int]:
        return self.dimension


class OllamaEmbedding(IEmbeddingProvider):
    """Embeddings from a local Ollama server.

    The dimension depends on the model and is learned from the first response.
    """

    def __init__(self, client: "ollama.Client", model_name: str = "llama3.2:1b"):
        self.client = client
        self.model_name = model_name
        self._dimension = None

    def embed(self, text: str) -> List[float]:
        start_time = time.time()
        try:
            response = self.client.embed(model=self.model_name, input=text)
        except (ConnectionError, httpx.HTTPError) as e:
            logger.log_client_call("ollama", "embed", start_time, time.time(), "failed",
                                   {"model": self.model_name, "error": str(e)})
            raise ServiceUnavailable("Ollama embeddings", str(e)) from e
        except ollama.ResponseError as e:
            logger.log_client_call("ollama", "embed", start_time, time.time(), "failed",
                                   {"model": self.model_name, "error": str(e)})
            if e.status_code >= 500:
                raise ServiceUnavailable("Ollama embeddings", str(e)) from e
            raise

        embedding = list(response["embeddings"][0])
        self._dimension = len(embedding)
        logger.log_client_call("ollama", "embed", start_time, time.time(), details={
            "model": self.model_name,
            "text": text,
            "dimension": self._dimension
        })
        return embedding

    def get_dimension(self) -> Optional[int]:
        return self._dimension

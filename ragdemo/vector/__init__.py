"""
Vector layer: record types, in-memory collection and embedding providers.
"""

# Package initialization for vector module
from .index import IVectorCollection, InMemoryVectorCollection, InMemoryVectorStore, cosine_distance
from .types import VectorRecord, SearchResult, EqualTo
from .embeddings import IEmbeddingProvider, DeterministicHashEmbedding, OpenAIEmbedding, OllamaEmbedding

__all__ = [
    'IVectorCollection',
    'InMemoryVectorCollection',
    'InMemoryVectorStore',
    'cosine_distance',
    'VectorRecord',
    'SearchResult',
    'EqualTo',
    'IEmbeddingProvider',
    'DeterministicHashEmbedding',
    'OpenAIEmbedding',
    'OllamaEmbedding'
]

"""
Retrieval: embed the user query and search the collection.
"""

from typing import List, Optional

from ..util.logging import logger
from ..vector.embeddings import IEmbeddingProvider
from ..vector.index import IVectorCollection
from ..vector.types import EqualTo, SearchResult


def semantic_search(collection: IVectorCollection, embedding_client: IEmbeddingProvider, query: str,
                    product_id: Optional[int] = None, top_k: int = 5,
                    include_vectors: bool = True) -> List[SearchResult]:
    """
    Perform semantic search for a user query.

    The search is always restricted to records whose product_id equals the
    given value, so the default of None keeps only untagged records.

    Args:
        collection: Collection to search
        embedding_client: Provider used to embed the query
        query: The user query string
        product_id: Product tag the results must carry (None = untagged only)
        top_k: Maximum number of results to return
        include_vectors: Whether returned records carry their vectors

    Returns:
        Results ordered by ascending cosine distance
    """
    query_embedding = embedding_client.embed(query)

    results = collection.search(
        query_embedding,
        top_k=top_k,
        filter=EqualTo("product_id", product_id),
        include_vectors=include_vectors,
    )

    logger.log_operation("retrieve", "success", {
        "query": query,
        "product_id": product_id,
        "ids": [result.record.id for result in results]
    })
    return results

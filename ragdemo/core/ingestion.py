"""
Ingestion: embed each text and upsert it into the collection under its position as id.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Sequence

from ..util.logging import logger
from ..vector.embeddings import IEmbeddingProvider
from ..vector.index import IVectorCollection
from ..vector.types import VectorRecord


def ingest(collection: IVectorCollection, embedding_client: IEmbeddingProvider, texts: Sequence[str],
           echo: Callable[[str], None] = print, max_workers: int = 1) -> List[VectorRecord]:
    """
    Ingest texts one record per text.

    Text at position i becomes record id i with no product id. With
    max_workers > 1 the embedding calls run on a thread pool, but records are
    still echoed and upserted in input order. Every upsert has completed when
    this returns.

    Args:
        collection: Target collection (must already exist)
        embedding_client: Provider used to embed each text
        texts: Texts to ingest, in order
        echo: Sink for the "{id}: {text}" progress lines
        max_workers: Thread pool size for embedding calls

    Returns:
        The upserted records in id order
    """
    if max_workers > 1 and len(texts) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            embeddings = executor.map(embedding_client.embed, texts)
            return _upsert_all(collection, texts, embeddings, echo)

    embeddings = (embedding_client.embed(text) for text in texts)
    return _upsert_all(collection, texts, embeddings, echo)


def _upsert_all(collection, texts, embeddings, echo) -> List[VectorRecord]:
    records = []
    for index, text in enumerate(texts):
        echo(f"{index}: {text}")
        record = VectorRecord(id=index, value=text, vector=next(embeddings))
        collection.upsert(record)
        records.append(record)

    logger.log_operation("ingest", "success", {"records": len(records)})
    return records

"""
In-memory vector collection with cosine-distance nearest-neighbour search.
Collections live only for the lifetime of the process.
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence, Union

import numpy as np

from ..core.errors import InvariantViolation
from ..util.logging import logger
from .types import EqualTo, SearchResult, VectorRecord, as_vector


class IVectorCollection(ABC):
    """Abstract interface for a named collection of vector records."""

    @abstractmethod
    def ensure_exists(self) -> "IVectorCollection":
        """Create the collection if it does not exist yet."""
        pass

    @abstractmethod
    def upsert(self, record: VectorRecord) -> None:
        """Insert a record, replacing any record with the same id."""
        pass

    @abstractmethod
    def search(self, query_vector: Union[Sequence[float], np.ndarray], top_k: int = 5,
               filter: Optional[EqualTo] = None, include_vectors: bool = False) -> List[SearchResult]:
        """Return up to top_k records ordered by ascending cosine distance."""
        pass

    @abstractmethod
    def get(self, record_id: int) -> Optional[VectorRecord]:
        """Fetch a record by id."""
        pass

    @abstractmethod
    def delete(self, record_id: int) -> None:
        """Delete a record by id."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all records from the collection."""
        pass


def cosine_distance(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Cosine distance between one query vector and each row of matrix.

    A zero-norm vector has no direction and sits at distance 1.0 from everything.
    """
    query_norm = np.linalg.norm(query)
    row_norms = np.linalg.norm(matrix, axis=1)
    dots = matrix.astype(np.float64) @ query.astype(np.float64)

    denom = row_norms * query_norm
    similarity = np.zeros(matrix.shape[0], dtype=np.float64)
    nonzero = denom > 0
    similarity[nonzero] = dots[nonzero] / denom[nonzero]
    return 1.0 - np.clip(similarity, -1.0, 1.0)


class InMemoryVectorCollection(IVectorCollection):
    """
    Owned dict of records keyed by id.

    Mutations are serialised by a per-collection lock; search works on a
    snapshot taken under the same lock.
    """

    def __init__(self, store: "InMemoryVectorStore", name: str, dimension: Optional[int] = None):
        self._store = store
        self.name = name
        self.dimension = dimension
        self._records: Dict[int, VectorRecord] = {}
        self._lock = threading.Lock()

    def ensure_exists(self) -> "InMemoryVectorCollection":
        """Register this collection with its store. No-op if the name is already registered."""
        return self._store._register(self)

    def _check_exists(self) -> None:
        if not self._store._is_registered(self):
            raise InvariantViolation(f"Collection '{self.name}' does not exist; call ensure_exists() first")

    def _check_dimension(self, vector: np.ndarray, what: str) -> None:
        if vector.shape[0] != self.dimension:
            raise InvariantViolation(
                f"{what} dimension {vector.shape[0]} does not match collection "
                f"'{self.name}' dimension {self.dimension}"
            )

    def upsert(self, record: VectorRecord) -> None:
        """Insert a record, replacing any record with the same id."""
        self._check_exists()
        if record.vector is None:
            raise InvariantViolation(f"Record {record.id} has no vector")

        with self._lock:
            if self.dimension is None:
                self.dimension = record.dimension
            self._check_dimension(record.vector, "Record vector")
            replaced = record.id in self._records
            self._records[record.id] = record

        logger.log_vector_operation("upsert", record.id, {
            "collection": self.name,
            "replaced": replaced,
            "product_id": record.product_id
        })

    def upsert_batch(self, records: Iterable[VectorRecord]) -> None:
        """Upsert several records in order."""
        for record in records:
            self.upsert(record)

    def search(self, query_vector: Union[Sequence[float], np.ndarray], top_k: int = 5,
               filter: Optional[EqualTo] = None, include_vectors: bool = False) -> List[SearchResult]:
        """
        Search for the records nearest to query_vector.

        Args:
            query_vector: Embedding of the query
            top_k: Maximum number of results to return (must be >= 1)
            filter: Optional equality predicate; EqualTo("product_id", None)
                matches only records without a product id
            include_vectors: Whether returned records carry their vectors

        Returns:
            Up to top_k results ordered by ascending cosine distance, ties
            broken by ascending id
        """
        if top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {top_k}")
        self._check_exists()

        query = as_vector(query_vector)
        with self._lock:
            candidates = [record for record in self._records.values()
                          if filter is None or filter.matches(record)]
            dimension = self.dimension

        if dimension is not None:
            self._check_dimension(query, "Query vector")
        if not candidates:
            return []

        matrix = np.stack([record.vector for record in candidates])
        distances = cosine_distance(query, matrix)

        ranked = sorted(zip(distances.tolist(), candidates), key=lambda pair: (pair[0], pair[1].id))

        results = []
        for distance, record in ranked[:top_k]:
            if not include_vectors:
                record = replace(record, vector=None)
            results.append(SearchResult(record=record, score=float(distance)))

        logger.log_operation("vector.search", "success", {
            "collection": self.name,
            "candidates": len(candidates),
            "returned": len(results),
            "top_k": top_k,
            "filter": None if filter is None else f"{filter.field}=={filter.value!r}"
        }, level=logging.DEBUG)
        return results

    def get(self, record_id: int) -> Optional[VectorRecord]:
        """Fetch a record by id, or None if absent."""
        self._check_exists()
        with self._lock:
            return self._records.get(record_id)

    def delete(self, record_id: int) -> None:
        """Delete a record by id. Deleting a missing id is a no-op."""
        self._check_exists()
        with self._lock:
            removed = self._records.pop(record_id, None) is not None
        logger.log_vector_operation("delete", record_id, {"collection": self.name, "removed": removed})

    def clear(self) -> None:
        """Remove all records from the collection."""
        with self._lock:
            self._records.clear()

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def __len__(self) -> int:
        return self.count()

    def records(self) -> List[VectorRecord]:
        """Snapshot of all records in ascending id order."""
        with self._lock:
            return [self._records[key] for key in sorted(self._records)]


class InMemoryVectorStore:
    """Registry of named in-memory collections."""

    def __init__(self):
        self._collections: Dict[str, InMemoryVectorCollection] = {}
        self._lock = threading.Lock()

    def get_collection(self, name: str, dimension: Optional[int] = None) -> InMemoryVectorCollection:
        """Return the registered collection with this name, or an unregistered handle for it."""
        with self._lock:
            existing = self._collections.get(name)
        if existing is not None:
            return existing
        return InMemoryVectorCollection(self, name, dimension)

    def _register(self, collection: InMemoryVectorCollection) -> InMemoryVectorCollection:
        with self._lock:
            registered = self._collections.setdefault(collection.name, collection)
        if registered is collection:
            logger.log_operation("vector.create_collection", "success", {
                "collection": collection.name,
                "dimension": collection.dimension
            })
        return registered

    def _is_registered(self, collection: InMemoryVectorCollection) -> bool:
        with self._lock:
            return self._collections.get(collection.name) is collection
    def collection_exists(self, name: str) -> bool:
        with self._lock:
            return name in self._collections

    def delete_collection(self, name: str) -> None:
        with self._lock:
            self._collections.pop(name, None)

    def list_collection_names(self) -> List[str]:
        with self._lock:
            return sorted(self._collections)

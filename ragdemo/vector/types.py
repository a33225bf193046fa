"""
Record and result types for the in-memory vector collection.
"""

from dataclasses import dataclass, fields
from typing import Any, Optional, Sequence, Union

import numpy as np


def as_vector(values: Union[Sequence[float], np.ndarray]) -> np.ndarray:
    """Copy values into a read-only 1-D float32 array."""
    vector = np.array(values, dtype=np.float32).reshape(-1)
    vector.setflags(write=False)
    return vector


@dataclass(frozen=True, eq=False)
class VectorRecord:
    """An ingested text and its embedding."""

    id: int
    """Unique key, assigned in ingestion order starting at 0"""

    value: str
    """The raw text content"""

    vector: Optional[np.ndarray]
    """Embedding of value; None only on results searched without vectors"""

    product_id: Optional[int] = None
    """Optional filter tag"""

    def __post_init__(self):
        if self.vector is not None:
            object.__setattr__(self, "vector", as_vector(self.vector))

    @property
    def dimension(self) -> int:
        return 0 if self.vector is None else int(self.vector.shape[0])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VectorRecord):
            return NotImplemented
        if (self.id, self.value, self.product_id) != (other.id, other.value, other.product_id):
            return False
        if self.vector is None or other.vector is None:
            return self.vector is None and other.vector is None
        return bool(np.array_equal(self.vector, other.vector))

    def __hash__(self) -> int:
        return hash((self.id, self.value, self.product_id))


@dataclass(frozen=True)
class SearchResult:
    """A record matched by a similarity search."""

    record: VectorRecord
    """The matched record"""

    score: float
    """Cosine distance to the query vector (0 = identical direction, lower is closer)"""


_FILTERABLE_FIELDS = {f.name for f in fields(VectorRecord)} - {"vector"}


@dataclass(frozen=True)
class EqualTo:
    """Equality predicate on a record field. A None value matches only unset fields."""

    field: str
    value: Any

    def __post_init__(self):
        if self.field not in _FILTERABLE_FIELDS:
            raise ValueError(f"Field '{self.field}' is not filterable; expected one of {sorted(_FILTERABLE_FIELDS)}")

    def matches(self, record: VectorRecord) -> bool:
        return getattr(record, self.field) == self.value

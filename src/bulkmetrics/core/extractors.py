"""Name parts extractors.

Metric names usually follow a dotted convention such as
``<application>.<host>.<metric>``. Extractors turn those parts into
separate document fields so they can be filtered and aggregated on.
"""

import threading
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any


class MemoizingExtractor(ABC):
    """Base extractor that computes the fields for each name once.

    Results are cached by exact name for the lifetime of the extractor.
    There is no eviction: metric names are expected to form a small, stable
    set. Subclasses implement compute().

    Thread-safe: concurrent calls for the same name compute it only once.
    """

    def __init__(self) -> None:
        self._extracted: dict[str, Mapping[str, Any] | None] = {}
        self._lock = threading.Lock()

    def extract(self, name: str) -> Mapping[str, Any] | None:
        """Return the (cached) fields for a metric name."""
        try:
            return self._extracted[name]
        except KeyError:
            pass
        with self._lock:
            if name not in self._extracted:
                self._extracted[name] = self.compute(name)
            return self._extracted[name]

    @abstractmethod
    def compute(self, name: str) -> Mapping[str, Any] | None:
        """Compute the fields for a name not seen before."""

    @property
    def cache_size(self) -> int:
        """Number of names currently cached."""
        return len(self._extracted)

    def clear(self) -> None:
        """Drop all cached results."""
        with self._lock:
            self._extracted.clear()


class DottedNameExtractor(MemoizingExtractor):
    """Map positional parts of a separated metric name to field names.

    Example:
        ```python
        extractor = DottedNameExtractor(["application", "host"])
        extractor.extract("shop.web01.requests")
        # {"application": "shop", "host": "web01"}
        ```
    """

    def __init__(self, fields: Sequence[str | None], separator: str = ".") -> None:
        """Initialize the extractor.

        Args:
            fields: Field name for each leading part of the name. A None entry
                skips that position.
            separator: String separating the parts of a name.
        """
        if not separator:
            raise ValueError("separator must be a non-empty string")
        super().__init__()
        self._fields = tuple(fields)
        self._separator = separator

    def compute(self, name: str) -> Mapping[str, Any] | None:
        parts = name.split(self._separator)
        extracted = {
            field: part
            for field, part in zip(self._fields, parts)
            if field is not None
        }
        return extracted or None

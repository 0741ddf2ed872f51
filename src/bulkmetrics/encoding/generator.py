"""Streaming JSON generator used by the serializers.

Objects are assembled field by field and each completed top-level object
is written to the output stream as one compact JSON text. Writing a field
that already exists replaces its value and keeps its original position.
"""

import json
import math
from datetime import datetime
from enum import Enum
from typing import Any, TextIO


class DateFormat(Enum):
    """How datetime values are rendered."""

    EPOCH_MILLIS = "epoch_millis"
    ISO_8601 = "iso_8601"


class JsonGenerationError(ValueError):
    """Raised when the generator primitives are called out of order."""


def _quote_non_finite(value: Any) -> Any:
    """Replace NaN and infinite floats with "NaN", "Infinity" or "-Infinity".

    Bare non-finite tokens are not valid JSON; nested dicts, lists and tuples
    are converted as well.
    """
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return value
    if isinstance(value, dict):
        return {key: _quote_non_finite(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_quote_non_finite(item) for item in value]
    return value


class JsonGenerator:
    """JsonWriter implementation writing to a text stream.

    Args:
        stream: Destination for the encoded objects.
        date_format: Rendering of datetime values (default: ISO-8601).

    Non-finite floats are written as the strings "NaN", "Infinity" and
    "-Infinity".
    """

    def __init__(
        self, stream: TextIO, date_format: DateFormat = DateFormat.ISO_8601
    ) -> None:
        self._stream = stream
        self._date_format = date_format
        self._stack: list[dict[str, Any]] = []
        self._pending_field: str | None = None

    @property
    def depth(self) -> int:
        """Number of currently open objects."""
        return len(self._stack)

    def write_start_object(self) -> None:
        obj: dict[str, Any] = {}
        if self._stack:
            if self._pending_field is None:
                raise JsonGenerationError("Nested object requires a field name")
            self._stack[-1][self._pending_field] = obj
            self._pending_field = None
        self._stack.append(obj)

    def write_object_field_start(self, name: str) -> None:
        self._require_open_object()
        self._pending_field = name
        self.write_start_object()

    def write_end_object(self) -> None:
        if not self._stack:
            raise JsonGenerationError("No open object to end")
        obj = self._stack.pop()
        if not self._stack:
            self._stream.write(
                json.dumps(
                    obj,
                    default=self._default,
                    separators=(",", ":"),
                    allow_nan=False,
                )
            )

    def write_string_field(self, name: str, value: str) -> None:
        self._field(name, value)

    def write_number_field(self, name: str, value: int | float) -> None:
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise TypeError(
                f"Number field {name!r} got {type(value).__name__}: {value!r}"
            )
        self._field(name, value)

    def write_object_field(self, name: str, value: Any) -> None:
        self._field(name, value)

    def _field(self, name: str, value: Any) -> None:
        self._require_open_object()
        self._stack[-1][name] = _quote_non_finite(value)

    def _require_open_object(self) -> None:
        if not self._stack:
            raise JsonGenerationError("Fields can only be written inside an object")

    def _default(self, value: Any) -> Any:
        """Encode values json does not handle natively."""
        if isinstance(value, datetime):
            if self._date_format is DateFormat.ISO_8601:
                return value.isoformat()
            # Truncate to the millisecond
            return math.floor(value.timestamp() * 1000)
        if isinstance(value, Enum):
            return value.value
        raise TypeError(
            f"Object of type {type(value).__name__} is not JSON serializable"
        )

"""Registry of serializers keyed by the type they handle."""

import io
import logging
from collections.abc import Iterable
from typing import Any, TextIO

from bulkmetrics.core.module import MetricsModule
from bulkmetrics.core.serializers import Serializer
from bulkmetrics.encoding.generator import DateFormat, JsonGenerator

logger = logging.getLogger(__name__)


class MetricsMapper:
    """Encodes registered value types to JSON.

    Modules contribute serializers through register_module(); each value is
    then written with the serializer registered for its exact type.

    Args:
        date_format: Rendering of datetime fields (default: ISO-8601).
    """

    def __init__(self, date_format: DateFormat = DateFormat.ISO_8601) -> None:
        self._date_format = date_format
        self._serializers: dict[type, Serializer[Any]] = {}
        self._modules: set[str] = set()

    @property
    def date_format(self) -> DateFormat:
        return self._date_format

    def register_module(self, module: MetricsModule) -> "MetricsMapper":
        """Register a module's serializers.

        Raises:
            ValueError: If a module with the same name is already registered,
                or one of its serializers handles an already handled type.
        """
        if module.module_name in self._modules:
            raise ValueError(f"Module {module.module_name!r} already registered")
        module.setup_module(self)
        self._modules.add(module.module_name)
        logger.debug("Registered module %s", module.module_name)
        return self

    def add_serializers(self, serializers: Iterable[Serializer[Any]]) -> None:
        """Add serializers, keyed by their handled type."""
        pending = list(serializers)
        for serializer in pending:
            if serializer.handled_type in self._serializers:
                raise ValueError(
                    f"Serializer for {serializer.handled_type.__name__} "
                    "already registered"
                )
        for serializer in pending:
            self._serializers[serializer.handled_type] = serializer

    def serializer_for(self, value_type: type) -> Serializer[Any] | None:
        """Return the serializer registered for a type, if any."""
        return self._serializers.get(value_type)

    def write_value(self, stream: TextIO, value: Any) -> None:
        """Write ``value`` to ``stream`` as one JSON object.

        Raises:
            TypeError: If no serializer handles the value's type.
        """
        serializer = self.serializer_for(type(value))
        if serializer is None:
            raise TypeError(f"No serializer registered for {type(value).__name__}")
        serializer.serialize(value, JsonGenerator(stream, self._date_format))

    def encode(self, value: Any) -> str:
        """Return ``value`` encoded as a JSON string."""
        buffer = io.StringIO()
        self.write_value(buffer, value)
        return buffer.getvalue()

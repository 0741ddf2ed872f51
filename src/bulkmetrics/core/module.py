"""Module wiring the metric serializers into a MetricsMapper."""

import logging
from typing import Any, NamedTuple

from bulkmetrics.core.models import SerializerConfig
from bulkmetrics.core.ports import SetupContext
from bulkmetrics.core.serializers import (
    BulkIndexOperationHeaderSerializer,
    CounterSerializer,
    GaugeSerializer,
    HistogramSerializer,
    MeterSerializer,
    Serializer,
    TimerSerializer,
)

logger = logging.getLogger(__name__)


class Version(NamedTuple):
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class MetricsModule:
    """Registers one serializer per metric kind plus the bulk header serializer.

    All serializers share the module's SerializerConfig.

    Example:
        ```python
        from bulkmetrics import MetricsMapper, MetricsModule, SerializerConfig

        mapper = MetricsMapper()
        mapper.register_module(MetricsModule(SerializerConfig()))
        ```
    """

    module_name = "metrics-elasticsearch-serialization"
    version = Version(1, 0, 0)

    def __init__(self, config: SerializerConfig | None = None) -> None:
        self._config = config if config is not None else SerializerConfig()

    @property
    def config(self) -> SerializerConfig:
        return self._config

    def create_serializers(self) -> list[Serializer[Any]]:
        """Build the serializers bound to this module's config."""
        config = self._config
        return [
            GaugeSerializer(config),
            CounterSerializer(config),
            HistogramSerializer(config),
            MeterSerializer(config),
            TimerSerializer(config),
            BulkIndexOperationHeaderSerializer(),
        ]

    def setup_module(self, context: SetupContext) -> None:
        """Add this module's serializers to the encoding framework."""
        serializers = self.create_serializers()
        context.add_serializers(serializers)
        logger.debug(
            "Registered %d serializers for module %s %s",
            len(serializers),
            self.module_name,
            self.version,
        )

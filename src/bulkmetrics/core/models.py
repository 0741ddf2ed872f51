"""Core domain models for metric serialization."""

import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Generic, TypeVar

from bulkmetrics.core.ports import (
    CounterSource,
    GaugeSource,
    HistogramSource,
    MeterSource,
    NamePartsExtractor,
    TimerSource,
)
from bulkmetrics.core.units import TimeUnit

T = TypeVar("T")

DEFAULT_TIMESTAMP_FIELD = "@timestamp"


class MetricKind(Enum):
    """Tag identifying the kind of metric a wrapper carries."""

    GAUGE = "gauge"
    COUNTER = "counter"
    HISTOGRAM = "histogram"
    METER = "meter"
    TIMER = "timer"


@dataclass(frozen=True)
class TimestampedMetric(Generic[T]):
    """A live metric captured under a name at a fixed point in time.

    The wrapped metric keeps changing after capture; the timestamp does not.
    Only the kind variants below can be instantiated: every instance carries
    a ``kind`` tag.

    Attributes:
        name: Metric name (e.g., "app.web01.requests").
        value: The live metric object from the registry.
        timestamp: Unix timestamp in seconds at capture time.
    """

    kind: ClassVar[MetricKind]

    name: str
    value: T
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        if not hasattr(type(self), "kind"):
            raise TypeError(
                f"{type(self).__name__} has no metric kind; "
                "use JsonGauge, JsonCounter, JsonHistogram, JsonMeter or JsonTimer"
            )

    def timestamp_as_date(self) -> datetime:
        """Return the capture time as a timezone-aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp, tz=UTC)


@dataclass(frozen=True)
class JsonGauge(TimestampedMetric[GaugeSource]):
    kind: ClassVar[MetricKind] = MetricKind.GAUGE


@dataclass(frozen=True)
class JsonCounter(TimestampedMetric[CounterSource]):
    kind: ClassVar[MetricKind] = MetricKind.COUNTER


@dataclass(frozen=True)
class JsonHistogram(TimestampedMetric[HistogramSource]):
    kind: ClassVar[MetricKind] = MetricKind.HISTOGRAM


@dataclass(frozen=True)
class JsonMeter(TimestampedMetric[MeterSource]):
    kind: ClassVar[MetricKind] = MetricKind.METER


@dataclass(frozen=True)
class JsonTimer(TimestampedMetric[TimerSource]):
    kind: ClassVar[MetricKind] = MetricKind.TIMER


def wrap(
    name: str, metric: Any, timestamp: float | None = None
) -> TimestampedMetric[Any]:
    """Wrap a live metric in the matching timestamped variant.

    The variant is chosen from the methods the metric exposes, most
    specific first: timer, histogram, meter, counter, gauge.

    Args:
        name: Metric name.
        metric: Live metric object from the registry.
        timestamp: Capture time in seconds (default: now).

    Returns:
        The timestamped wrapper for the metric.

    Raises:
        TypeError: If the object matches none of the metric protocols.
    """
    if timestamp is None:
        timestamp = time.time()
    wrapper: type[TimestampedMetric[Any]]
    if isinstance(metric, TimerSource):
        wrapper = JsonTimer
    elif isinstance(metric, HistogramSource):
        wrapper = JsonHistogram
    elif isinstance(metric, MeterSource):
        wrapper = JsonMeter
    elif isinstance(metric, CounterSource):
        wrapper = JsonCounter
    elif isinstance(metric, GaugeSource):
        wrapper = JsonGauge
    else:
        raise TypeError(f"Unsupported metric type: {type(metric).__name__}")
    return wrapper(name=name, value=metric, timestamp=timestamp)


@dataclass(frozen=True)
class BulkIndexOperationHeader:
    """Target of the document that follows in a bulk request.

    Attributes:
        index: Index name, omitted from the header when None.
        doc_type: Document type, omitted from the header when None.
    """

    index: str | None = None
    doc_type: str | None = None


@dataclass(frozen=True)
class SerializerConfig:
    """Settings shared by every serializer of a module.

    Attributes:
        rate_unit: Unit that meter and timer rates are expressed per.
        duration_unit: Unit that timer durations are expressed in.
        timestamp_field: Document field holding the capture time.
        additional_fields: Static fields added to every document, in order.
        name_extractors: Extractors applied to every metric name, in order.
    """

    rate_unit: TimeUnit = TimeUnit.SECONDS
    duration_unit: TimeUnit = TimeUnit.MILLISECONDS
    timestamp_field: str = DEFAULT_TIMESTAMP_FIELD
    additional_fields: Mapping[str, Any] = field(default_factory=dict)
    name_extractors: tuple[NamePartsExtractor, ...] = ()

    def __post_init__(self) -> None:
        if not self.timestamp_field:
            raise ValueError("timestamp_field must be a non-empty string")
        for extractor in self.name_extractors:
            if not callable(getattr(extractor, "extract", None)):
                raise TypeError(
                    f"name extractor must define extract(): {extractor!r}"
                )
        # Frozen: bypass __setattr__ to store read-only views
        object.__setattr__(
            self,
            "additional_fields",
            MappingProxyType(dict(self.additional_fields)),
        )
        object.__setattr__(self, "name_extractors", tuple(self.name_extractors))

"""Port interfaces for metric sources, extractors and JSON writers.

These protocols define the contracts the serializers depend on. The live
metrics come from an external registry; the serializers only rely on the
methods declared here, never on a concrete metrics implementation.
"""

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from bulkmetrics.core.serializers import Serializer


@runtime_checkable
class Snapshot(Protocol):
    """Point-in-time statistical summary of a distribution."""

    def get_max(self) -> float: ...

    def get_mean(self) -> float: ...

    def get_min(self) -> float: ...

    def get_median(self) -> float: ...

    def get_75th_percentile(self) -> float: ...

    def get_95th_percentile(self) -> float: ...

    def get_98th_percentile(self) -> float: ...

    def get_99th_percentile(self) -> float: ...

    def get_999th_percentile(self) -> float: ...

    def get_std_dev(self) -> float: ...


@runtime_checkable
class GaugeSource(Protocol):
    """A gauge whose value is computed on read and may raise."""

    def get_value(self) -> Any: ...


@runtime_checkable
class CounterSource(Protocol):
    """A monotonically adjusted integer count."""

    def get_count(self) -> int: ...


@runtime_checkable
class HistogramSource(Protocol):
    """A value distribution exposing a count and a snapshot."""

    def get_count(self) -> int: ...

    def get_snapshot(self) -> Snapshot: ...


@runtime_checkable
class MeterSource(Protocol):
    """An event rate meter. Rates are expressed per second."""

    def get_count(self) -> int: ...

    def get_one_minute_rate(self) -> float: ...

    def get_five_minute_rate(self) -> float: ...

    def get_fifteen_minute_rate(self) -> float: ...

    def get_mean_rate(self) -> float: ...


@runtime_checkable
class TimerSource(Protocol):
    """A meter plus a duration distribution recorded in nanoseconds."""

    def get_count(self) -> int: ...

    def get_snapshot(self) -> Snapshot: ...

    def get_one_minute_rate(self) -> float: ...

    def get_five_minute_rate(self) -> float: ...

    def get_fifteen_minute_rate(self) -> float: ...

    def get_mean_rate(self) -> float: ...


@runtime_checkable
class NamePartsExtractor(Protocol):
    """Derives additional document fields from a metric name.

    Most metric names carry some structure (application, host, subsystem)
    that is worth indexing as separate fields.
    """

    def extract(self, name: str) -> Mapping[str, Any] | None:
        """Return fields to merge into the document, or None for nothing."""
        ...


@runtime_checkable
class JsonWriter(Protocol):
    """Streaming JSON output used by serializers.

    Serializers write exclusively through these primitives.
    """

    def write_start_object(self) -> None: ...

    def write_object_field_start(self, name: str) -> None: ...

    def write_end_object(self) -> None: ...

    def write_string_field(self, name: str, value: str) -> None: ...

    def write_number_field(self, name: str, value: int | float) -> None: ...

    def write_object_field(self, name: str, value: Any) -> None:
        """Write any JSON-compatible value (including datetime)."""
        ...


class SetupContext(Protocol):
    """Registration point handed to modules by the encoding framework."""

    def add_serializers(self, serializers: Iterable["Serializer[Any]"]) -> None: ...


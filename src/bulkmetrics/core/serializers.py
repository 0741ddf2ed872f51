"""Serializers mapping each metric kind to a flat JSON document.

Every metric document has the same outline:

    {"name": ..., "<timestamp_field>": ..., <kind fields>,
     <additional fields>, <extracted name parts>}

Fields written later replace earlier fields of the same name, so static
additional fields and extractor output can override kind-specific fields.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from typing import Any, ClassVar, Generic, TypeVar

from bulkmetrics.core.models import (
    BulkIndexOperationHeader,
    JsonCounter,
    JsonGauge,
    JsonHistogram,
    JsonMeter,
    JsonTimer,
    SerializerConfig,
    TimestampedMetric,
)
from bulkmetrics.core.ports import JsonWriter, NamePartsExtractor, Snapshot
from bulkmetrics.core.units import (
    duration_factor,
    duration_unit_label,
    rate_factor,
    rate_unit_label,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=TimestampedMetric[Any])


def write_additional_fields(
    fields: Mapping[str, Any] | None, writer: JsonWriter
) -> None:
    """Write each entry of a mapping as a top-level field."""
    if fields is None:
        return
    for key, value in fields.items():
        writer.write_object_field(key, value)


def write_extracted_name_parts(
    extractors: Iterable[NamePartsExtractor], writer: JsonWriter, name: str
) -> None:
    """Write the fields every extractor derives from the metric name."""
    for extractor in extractors:
        write_additional_fields(extractor.extract(name), writer)


def write_metric_document(
    metric: M,
    writer: JsonWriter,
    config: SerializerConfig,
    write_value: Callable[[M, JsonWriter], None],
) -> None:
    """Write one complete metric document.

    Args:
        metric: The timestamped metric to serialize.
        writer: Destination for the JSON output.
        config: Shared serializer settings.
        write_value: Writes the kind-specific fields.
    """
    writer.write_start_object()
    writer.write_string_field("name", metric.name)
    writer.write_object_field(config.timestamp_field, metric.timestamp_as_date())

    write_value(metric, writer)

    write_additional_fields(config.additional_fields, writer)
    write_extracted_name_parts(config.name_extractors, writer, metric.name)

    writer.write_end_object()


class Serializer(ABC, Generic[T]):
    """Writes values of one handled type to a JsonWriter."""

    handled_type: ClassVar[type]

    @abstractmethod
    def serialize(self, value: T, writer: JsonWriter) -> None:
        """Write ``value`` as one JSON object."""


class MetricSerializer(Serializer[M]):
    """Base for the per-kind metric serializers."""

    def __init__(self, config: SerializerConfig) -> None:
        self._config = config

    @property
    def config(self) -> SerializerConfig:
        return self._config

    def serialize(self, value: M, writer: JsonWriter) -> None:
        write_metric_document(value, writer, self._config, self.serialize_value)

    @abstractmethod
    def serialize_value(self, metric: M, writer: JsonWriter) -> None:
        """Write the fields specific to this metric kind."""


class GaugeSerializer(MetricSerializer[JsonGauge]):
    """Writes ``value``, or ``error`` when the gauge fails to compute."""

    handled_type = JsonGauge

    def serialize_value(self, metric: JsonGauge, writer: JsonWriter) -> None:
        try:
            value = metric.value.get_value()
        except Exception as e:
            logger.warning("Failed to read gauge %s: %s", metric.name, e)
            writer.write_object_field("error", f"{type(e).__name__}: {e}")
            return
        writer.write_object_field("value", value)


class CounterSerializer(MetricSerializer[JsonCounter]):
    handled_type = JsonCounter

    def serialize_value(self, metric: JsonCounter, writer: JsonWriter) -> None:
        writer.write_number_field("count", metric.value.get_count())


def _write_snapshot(snapshot: Snapshot, writer: JsonWriter, factor: float) -> None:
    # stddev is written by the caller: timers emit it after the percentiles
    writer.write_number_field("max", snapshot.get_max() * factor)
    writer.write_number_field("mean", snapshot.get_mean() * factor)
    writer.write_number_field("min", snapshot.get_min() * factor)
    writer.write_number_field("p50", snapshot.get_median() * factor)
    writer.write_number_field("p75", snapshot.get_75th_percentile() * factor)
    writer.write_number_field("p95", snapshot.get_95th_percentile() * factor)
    writer.write_number_field("p98", snapshot.get_98th_percentile() * factor)
    writer.write_number_field("p99", snapshot.get_99th_percentile() * factor)
    writer.write_number_field("p999", snapshot.get_999th_percentile() * factor)


class HistogramSerializer(MetricSerializer[JsonHistogram]):
    """Writes the count and the unscaled distribution snapshot."""

    handled_type = JsonHistogram

    def serialize_value(self, metric: JsonHistogram, writer: JsonWriter) -> None:
        histogram = metric.value
        snapshot = histogram.get_snapshot()
        writer.write_number_field("count", histogram.get_count())
        _write_snapshot(snapshot, writer, 1)
        writer.write_number_field("stddev", snapshot.get_std_dev())


class MeterSerializer(MetricSerializer[JsonMeter]):
    """Writes the count and the rates expressed per configured rate unit."""

    handled_type = JsonMeter

    def __init__(self, config: SerializerConfig) -> None:
        super().__init__(config)
        self._rate_factor = rate_factor(config.rate_unit)
        self._rate_unit = rate_unit_label(config.rate_unit, "events")

    def serialize_value(self, metric: JsonMeter, writer: JsonWriter) -> None:
        meter = metric.value
        factor = self._rate_factor
        writer.write_number_field("count", meter.get_count())
        writer.write_number_field("m1_rate", meter.get_one_minute_rate() * factor)
        writer.write_number_field("m5_rate", meter.get_five_minute_rate() * factor)
        writer.write_number_field("m15_rate", meter.get_fifteen_minute_rate() * factor)
        writer.write_number_field("mean_rate", meter.get_mean_rate() * factor)
        writer.write_string_field("units", self._rate_unit)


class TimerSerializer(MetricSerializer[JsonTimer]):
    """Writes durations in the duration unit and rates per the rate unit."""

    handled_type = JsonTimer

    def __init__(self, config: SerializerConfig) -> None:
        super().__init__(config)
        self._rate_factor = rate_factor(config.rate_unit)
        self._rate_unit = rate_unit_label(config.rate_unit, "calls")
        self._duration_factor = duration_factor(config.duration_unit)
        self._duration_unit = duration_unit_label(config.duration_unit)

    def serialize_value(self, metric: JsonTimer, writer: JsonWriter) -> None:
        timer = metric.value
        snapshot = timer.get_snapshot()
        writer.write_number_field("count", timer.get_count())
        scale = self._duration_factor
        _write_snapshot(snapshot, writer, scale)
        writer.write_number_field("stddev", snapshot.get_std_dev() * scale)
        factor = self._rate_factor
        writer.write_number_field("m1_rate", timer.get_one_minute_rate() * factor)
        writer.write_number_field("m5_rate", timer.get_five_minute_rate() * factor)
        writer.write_number_field("m15_rate", timer.get_fifteen_minute_rate() * factor)
        writer.write_number_field("mean_rate", timer.get_mean_rate() * factor)
        writer.write_string_field("duration_units", self._duration_unit)
        writer.write_string_field("rate_units", self._rate_unit)


class BulkIndexOperationHeaderSerializer(Serializer[BulkIndexOperationHeader]):
    """Writes the action line that precedes a document in a bulk request."""

    handled_type = BulkIndexOperationHeader

    def serialize(self, value: BulkIndexOperationHeader, writer: JsonWriter) -> None:
        writer.write_start_object()
        writer.write_object_field_start("index")
        if value.index is not None:
            writer.write_string_field("_index", value.index)
        if value.doc_type is not None:
            writer.write_string_field("_type", value.doc_type)
        writer.write_end_object()
        writer.write_end_object()

"""Serialize application metrics into documents for Elasticsearch bulk ingestion."""

from bulkmetrics.core.extractors import DottedNameExtractor, MemoizingExtractor
from bulkmetrics.core.models import (
    BulkIndexOperationHeader,
    JsonCounter,
    JsonGauge,
    JsonHistogram,
    JsonMeter,
    JsonTimer,
    MetricKind,
    SerializerConfig,
    TimestampedMetric,
    wrap,
)
from bulkmetrics.core.module import MetricsModule
from bulkmetrics.core.ports import NamePartsExtractor
from bulkmetrics.core.units import (
    TimeUnit,
    duration_factor,
    duration_unit_label,
    rate_factor,
    rate_unit_label,
)
from bulkmetrics.encoding.generator import (
    DateFormat,
    JsonGenerationError,
    JsonGenerator,
)
from bulkmetrics.encoding.mapper import MetricsMapper
from bulkmetrics.encoding.ndjson import encode_bulk, encode_documents

__all__ = [
    # Models
    "BulkIndexOperationHeader",
    "JsonCounter",
    "JsonGauge",
    "JsonHistogram",
    "JsonMeter",
    "JsonTimer",
    "MetricKind",
    "SerializerConfig",
    "TimestampedMetric",
    "wrap",
    # Extractors
    "DottedNameExtractor",
    "MemoizingExtractor",
    "NamePartsExtractor",
    # Units
    "TimeUnit",
    "duration_factor",
    "duration_unit_label",
    "rate_factor",
    "rate_unit_label",
    # Encoding
    "DateFormat",
    "JsonGenerationError",
    "JsonGenerator",
    "MetricsMapper",
    "MetricsModule",
    "encode_bulk",
    "encode_documents",
]

"""NDJSON encoding for Elasticsearch bulk requests."""

from collections.abc import Callable, Iterable
from typing import Any

from bulkmetrics.core.models import BulkIndexOperationHeader, TimestampedMetric
from bulkmetrics.encoding.mapper import MetricsMapper

IndexName = str | Callable[[TimestampedMetric[Any]], str] | None


def encode_bulk(
    metrics: Iterable[TimestampedMetric[Any]],
    mapper: MetricsMapper,
    index: IndexName = None,
    doc_type: str | None = None,
) -> str:
    """Encode metrics as a bulk index request body.

    Args:
        metrics: An iterable of timestamped metrics.
        mapper: Mapper with the metrics module registered.
        index: Target index, or a callable choosing the index per metric.
            Omitted from the action line when None.
        doc_type: Document type, omitted from the action line when None.

    Returns:
        NDJSON string with an action line followed by the document line
        for each metric. Empty string if no metrics.
    """
    lines = []
    for metric in metrics:
        target = index(metric) if callable(index) else index
        header = BulkIndexOperationHeader(index=target, doc_type=doc_type)
        lines.append(mapper.encode(header))
        lines.append(mapper.encode(metric))

    if not lines:
        return ""

    return "\n".join(lines) + "\n"


def encode_documents(
    metrics: Iterable[TimestampedMetric[Any]], mapper: MetricsMapper
) -> str:
    """Encode metrics to newline-delimited JSON without action lines.

    Returns:
        NDJSON string with one document per line.
        Empty string if no metrics.
    """
    lines = [mapper.encode(metric) for metric in metrics]

    if not lines:
        return ""

    return "\n".join(lines) + "\n"

"""BDD step definitions for metric serialization features."""

import json
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when
from tests.fakes import CAPTURE_TIMESTAMP, FakeCounter, FakeGauge

from bulkmetrics.core.extractors import DottedNameExtractor
from bulkmetrics.core.models import (
    JsonCounter,
    JsonGauge,
    SerializerConfig,
    TimestampedMetric,
)
from bulkmetrics.core.module import MetricsModule
from bulkmetrics.core.ports import NamePartsExtractor
from bulkmetrics.encoding.mapper import MetricsMapper
from bulkmetrics.encoding.ndjson import encode_bulk


@dataclass
class SerializationScenarioContext:
    """State shared between the steps of one scenario."""

    additional_fields: dict[str, Any] = field(default_factory=dict)
    extractors: list[NamePartsExtractor] = field(default_factory=list)
    metrics: list[TimestampedMetric[Any]] = field(default_factory=list)
    body: str = ""

    def mapper(self) -> MetricsMapper:
        config = SerializerConfig(
            additional_fields=self.additional_fields,
            name_extractors=tuple(self.extractors),
        )
        return MetricsMapper().register_module(MetricsModule(config))

    def document(self, position: int) -> dict[str, Any]:
        """Return the n-th document (1-based), skipping action lines."""
        lines = self.body.strip().split("\n")
        result: dict[str, Any] = json.loads(lines[2 * position - 1])
        return result


@pytest.fixture
def ctx() -> SerializationScenarioContext:
    """Fresh scenario context for each test."""
    return SerializationScenarioContext()


def _expected(raw: str) -> Any:
    """Parse a step value: quoted strings stay strings, the rest is JSON."""
    return json.loads(raw)


# === Given ===
@given("a mapper with the metrics module registered")
def step_default_mapper(ctx: SerializationScenarioContext) -> None:
    ctx.additional_fields = {}


@given(parsers.parse('a mapper with static field "{name}" set to "{value}"'))
def step_static_field(ctx: SerializationScenarioContext, name: str, value: str) -> None:
    ctx.additional_fields[name] = value


@given(parsers.parse('a dotted name extractor for fields "{fields}"'))
def step_dotted_extractor(ctx: SerializationScenarioContext, fields: str) -> None:
    ctx.extractors.append(DottedNameExtractor(fields.split(",")))


@given(parsers.parse('a gauge "{name}" reporting {value:d}'))
def step_gauge(ctx: SerializationScenarioContext, name: str, value: int) -> None:
    ctx.metrics.append(JsonGauge(name, FakeGauge(value), CAPTURE_TIMESTAMP))


@given(parsers.parse('a gauge "{name}" raising "{message}"'))
def step_failing_gauge(
    ctx: SerializationScenarioContext, name: str, message: str
) -> None:
    gauge = FakeGauge(error=RuntimeError(message))
    ctx.metrics.append(JsonGauge(name, gauge, CAPTURE_TIMESTAMP))


@given(parsers.parse('a counter "{name}" with count {count:d}'))
def step_counter(ctx: SerializationScenarioContext, name: str, count: int) -> None:
    ctx.metrics.append(JsonCounter(name, FakeCounter(count), CAPTURE_TIMESTAMP))


# === When ===
@when(parsers.parse('the metrics are encoded as a bulk body for index "{index}"'))
def step_encode_bulk(ctx: SerializationScenarioContext, index: str) -> None:
    ctx.body = encode_bulk(ctx.metrics, ctx.mapper(), index=index)


# === Then ===
@then(parsers.parse("the bulk body should have {n:d} lines"))
def step_line_count(ctx: SerializationScenarioContext, n: int) -> None:
    assert len(ctx.body.strip().split("\n")) == n


@then(parsers.parse('document {position:d} should have field "{name}" equal to {raw}'))
def step_field_equals(
    ctx: SerializationScenarioContext, position: int, name: str, raw: str
) -> None:
    assert ctx.document(position)[name] == _expected(raw)


@then(parsers.parse('document {position:d} should not have field "{name}"'))
def step_field_missing(
    ctx: SerializationScenarioContext, position: int, name: str
) -> None:
    assert name not in ctx.document(position)

"""Shared test fixtures for all test modules."""

import json
from collections.abc import Callable
from typing import Any

import pytest

from bulkmetrics import MetricsMapper, MetricsModule, SerializerConfig


@pytest.fixture
def config() -> SerializerConfig:
    """Default serializer configuration."""
    return SerializerConfig()


@pytest.fixture
def mapper_factory() -> Callable[..., MetricsMapper]:
    """Factory fixture building a mapper with the metrics module registered.

    Keyword arguments are passed to SerializerConfig.

    Usage:
        def test_something(mapper_factory):
            mapper = mapper_factory(additional_fields={"env": "test"})
    """

    def _mapper(**config_kwargs: Any) -> MetricsMapper:
        mapper = MetricsMapper()
        mapper.register_module(MetricsModule(SerializerConfig(**config_kwargs)))
        return mapper

    return _mapper


@pytest.fixture
def mapper(mapper_factory: Callable[..., MetricsMapper]) -> MetricsMapper:
    """Mapper with the metrics module and default config."""
    return mapper_factory()


@pytest.fixture
def encode_doc(mapper: MetricsMapper) -> Callable[[Any], dict[str, Any]]:
    """Encode a value with the default mapper and parse the JSON back."""

    def _encode(value: Any) -> dict[str, Any]:
        result: dict[str, Any] = json.loads(mapper.encode(value))
        return result

    return _encode

"""Pure metric serialization logic: models, ports, units, serializers."""

"""JSON encoding: streaming generator, serializer mapper and bulk NDJSON."""

"""Contract tests for registries, exceptions and the adaptation protocol."""

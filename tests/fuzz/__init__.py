"""Intensive property tests for the formatter (run with: pytest -m fuzz)."""

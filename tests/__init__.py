"""Tests - Exporter test suite."""

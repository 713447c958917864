"""
Test Suite for DummyForge

Provides tests for:
- Record generation engine (validation, gender, uniqueness, sequencing)
- Field generators (names, phones, patterns, ages, dates)
- Uniqueness tracking and auto-increment counters
- Configuration loading and presets
- Exporters, CLI and HTTP API
"""

__version__ = "1.0.0"

"""
DummyForge Package

Synthetic tabular record generation from declarative field
configurations, with per-field uniqueness, auto-increment sequences,
gender/country-consistent values and SQL, CSV, text, XLSX and PDF export.
"""

__version__ = "1.0.0"
__author__ = "DummyForge Team"

from .config import (
    AgeConfig,
    ConfigLoader,
    ConfigValidator,
    DemographicsConfig,
    FieldConfig,
    FieldOptions,
    GenerationConfig,
    LocationConfig,
    Settings,
)
from .engine import DataGenerator, GenerationResult, determine_gender
from .errors import DummyForgeError, ErrorKind
from .exporters import Exporter, write_exports
from .field_types import FieldType
from .providers import FakerProvider, RandomValueProvider

__all__ = [
    "AgeConfig",
    "ConfigLoader",
    "ConfigValidator",
    "DemographicsConfig",
    "FieldConfig",
    "FieldOptions",
    "GenerationConfig",
    "LocationConfig",
    "Settings",
    "DataGenerator",
    "GenerationResult",
    "determine_gender",
    "DummyForgeError",
    "ErrorKind",
    "Exporter",
    "write_exports",
    "FieldType",
    "FakerProvider",
    "RandomValueProvider",
]

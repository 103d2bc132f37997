"""Extract wire bill-of-materials rows from harness drawings."""
from __future__ import annotations

from harness_extract.config import ConfigError, load_mapping
from harness_extract.domain import Mapping, MappingColumn, TextToken, WireField, WireTable

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "Mapping",
    "MappingColumn",
    "TextToken",
    "WireField",
    "WireTable",
    "__version__",
    "load_mapping",
]

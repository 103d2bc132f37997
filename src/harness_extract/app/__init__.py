"""Application-level helpers for the harness extractor."""
from __future__ import annotations

from . import driver, io, runtime

__all__ = ["driver", "io", "runtime"]

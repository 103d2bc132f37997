"""Output writers for extracted wire tables."""

from __future__ import annotations

from .workbook import OutputError, write_workbook

__all__ = ["OutputError", "write_workbook"]

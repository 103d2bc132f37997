"""Wire row extraction: structured attributes first, loose text as fallback."""

from __future__ import annotations

from .assemble import RowAssembler, extract_from_text
from .classify import FieldClassifier, classify_row
from .grouping import group_rows
from .normalize import clean_text, is_noise, normalize_token, normalize_tokens
from .structured import extract_from_attributes

__all__ = [
    "FieldClassifier",
    "RowAssembler",
    "classify_row",
    "clean_text",
    "extract_from_attributes",
    "extract_from_text",
    "group_rows",
    "is_noise",
    "normalize_token",
    "normalize_tokens",
]

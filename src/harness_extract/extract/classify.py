"""Heuristic assignment of row tokens to wire fields.

A row is scanned three times, left to right. Each pass handles one class of
token shape, from the most to the least certain:

1. literal identifiers: colour codes and ``<size><type>`` compounds such as
   ``1.5AVSS``;
2. bare numbers: cut length by integer range, wire size by decimal range;
3. alphanumeric labels: wire code first, then start/end connector names.

A token is consumed by at most one pass and a field is filled at most once;
the first eligible token (by x) wins.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from harness_extract.config import DEFAULT_CALIBRATION, Calibration
from harness_extract.domain import RowFields, TextToken, WireField
from harness_extract.extract.normalize import is_noise

COLOR_CODES: frozenset[str] = frozenset(
    {"R", "B", "Y", "L", "W", "G", "V", "O", "P", "S", "T", "BR", "GR", "PI", "LB", "VI", "GY"}
)

WIRE_TYPE_CODES: tuple[str, ...] = ("AVSS", "AVS", "FLRY", "T1", "T2", "T3", "T4", "GPT", "CAVS")
# Longest first so "CAVS" is never read as "AVS" with a "C" prefix.
_SUFFIXES_BY_LENGTH: tuple[str, ...] = tuple(sorted(WIRE_TYPE_CODES, key=len, reverse=True))
_WIRE_TYPE_SET = frozenset(WIRE_TYPE_CODES)

_INT_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

CLASSIFIED_FIELDS: tuple[WireField, ...] = (
    WireField.COLOR,
    WireField.WIRE_TYPE,
    WireField.WIRE_SIZE,
    WireField.CUT_LENGTH,
    WireField.WIRE_CODE,
    WireField.CONNECTOR_START,
    WireField.CONNECTOR_END,
)


def _squash_decimal(text: str) -> str:
    return text.replace(",", ".").replace(" ", "")


def parse_int(text: str) -> int | None:
    if not _INT_RE.fullmatch(text):
        return None
    return int(text)


def parse_decimal(text: str) -> float | None:
    """Parse ``text`` after comma/space squashing; ``None`` when not a number."""

    cleaned = _squash_decimal(text)
    if not _DECIMAL_RE.fullmatch(cleaned):
        return None
    return float(cleaned)


def match_wire_type_suffix(value: str) -> str | None:
    upper = value.upper()
    for code in _SUFFIXES_BY_LENGTH:
        if upper.endswith(code):
            return code
    return None


class FieldClassifier:
    """Assign the tokens of one spatial row to wire fields."""

    def __init__(self, calibration: Calibration = DEFAULT_CALIBRATION) -> None:
        self.calibration = calibration

    def classify(
        self,
        row: Sequence[TextToken],
        declared: Iterable[WireField] = CLASSIFIED_FIELDS,
    ) -> RowFields:
        fields = RowFields(f for f in declared if f in CLASSIFIED_FIELDS)
        ordered = sorted(row, key=lambda tok: tok.x)
        values = [tok.value.strip().upper() for tok in ordered]
        consumed: set[int] = set()

        for stage in (self._literal_stage, self._number_stage, self._label_stage):
            for idx, value in enumerate(values):
                if idx in consumed:
                    continue
                if stage(value, fields):
                    consumed.add(idx)
        return fields

    # ------------------------------------------------------------------
    # stages; each returns True when it consumed the token
    def _size_in_range(self, size: float) -> bool:
        cal = self.calibration
        return cal.min_wire_size <= size <= cal.max_wire_size

    def _literal_stage(self, value: str, fields: RowFields) -> bool:
        if fields.is_open(WireField.COLOR) and value in COLOR_CODES:
            fields.assign(WireField.COLOR, value)
            return True

        if not fields.is_open(WireField.WIRE_TYPE):
            return False
        code = match_wire_type_suffix(value)
        if code is None:
            return False

        size_part = value[: -len(code)].strip()
        if not size_part:
            fields.assign(WireField.WIRE_TYPE, code)
            return True

        size = parse_decimal(size_part)
        if size is None or not self._size_in_range(size):
            return False
        fields.assign(WireField.WIRE_TYPE, code)
        if fields.is_open(WireField.WIRE_SIZE):
            fields.assign(WireField.WIRE_SIZE, size_part)
        return True

    def _number_stage(self, value: str, fields: RowFields) -> bool:
        cal = self.calibration
        length = parse_int(value)
        if length is not None:
            # Integers never fall through to the size check.
            if fields.is_open(WireField.CUT_LENGTH) and cal.min_cut_length <= length <= cal.max_cut_length:
                fields.assign(WireField.CUT_LENGTH, value)
                return True
            return False

        if not fields.is_open(WireField.WIRE_SIZE):
            return False
        size = parse_decimal(value)
        if size is None or not self._size_in_range(size):
            return False
        if len(_squash_decimal(value)) > cal.max_size_text_length:
            return False
        fields.assign(WireField.WIRE_SIZE, value)
        return True

    def _label_stage(self, value: str, fields: RowFields) -> bool:
        cal = self.calibration
        if not any(ch.isalpha() for ch in value):
            return False
        if is_noise(value) or value in COLOR_CODES or value in _WIRE_TYPE_SET:
            return False

        if cal.min_code_length <= len(value) <= cal.max_code_length and fields.is_open(WireField.WIRE_CODE):
            fields.assign(WireField.WIRE_CODE, value)
            return True

        if not cal.min_connector_length <= len(value) <= cal.max_connector_length:
            return False
        for connector in (WireField.CONNECTOR_START, WireField.CONNECTOR_END):
            if fields.is_open(connector):
                fields.assign(connector, value)
                return True
        return False


def classify_row(
    row: Sequence[TextToken],
    declared: Iterable[WireField] = CLASSIFIED_FIELDS,
    *,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> dict[WireField, str]:
    """Return the field assignments for ``row``."""

    return FieldClassifier(calibration).classify(row, declared).assigned()


__all__ = [
    "CLASSIFIED_FIELDS",
    "COLOR_CODES",
    "FieldClassifier",
    "WIRE_TYPE_CODES",
    "classify_row",
    "match_wire_type_suffix",
    "parse_decimal",
    "parse_int",
]

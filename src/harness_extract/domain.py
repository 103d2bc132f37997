"""Core data structures shared by the extraction pipeline."""

from __future__ import annotations

from collections.abc import Iterable, Mapping as MappingABC
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple

import pandas as pd

from harness_extract.config import DEFAULT_CALIBRATION, Calibration

AUTO_INDEX_SOURCE = "auto_index"
DEFAULT_TABLE_NAME = "Wires"


class TextToken(NamedTuple):
    """One cleaned drawing-space text label."""

    value: str
    x: float
    y: float


class WireField(str, Enum):
    """Semantic slots filled for every wire row."""

    COLOR = "color"
    WIRE_TYPE = "wire_type"
    WIRE_SIZE = "wire_size"
    CUT_LENGTH = "cut_length"
    WIRE_CODE = "wire_code"
    CONNECTOR_START = "connector_start"
    CONNECTOR_END = "connector_end"
    INDEX = "index"

    @classmethod
    def parse(cls, value: str) -> "WireField":
        key = value.strip().lower().replace("-", "_").replace(" ", "_")
        for member in cls:
            if member.value == key or member.name.lower() == key:
                return member
        raise ValueError(f"unknown wire field {value!r}")


# Headings of the harness workbooks the tool was built around, followed by
# English equivalents.
FIELD_ALIASES: dict[WireField, frozenset[str]] = {
    WireField.COLOR: frozenset({"رنگ سيم", "رنگ سیم", "color", "colour", "wire color", "wire colour"}),
    WireField.WIRE_TYPE: frozenset({"نوع سيم", "نوع سیم", "wire type", "type"}),
    WireField.WIRE_SIZE: frozenset({"سايزسيم", "سایزسیم", "wire size", "size", "cross section"}),
    WireField.CUT_LENGTH: frozenset({"طول برش سيم", "طول برش سیم", "cut length", "length"}),
    WireField.WIRE_CODE: frozenset({"کدسیم", "كدسيم", "wire code", "code"}),
    WireField.CONNECTOR_START: frozenset({"ابتدا", "from", "start", "connector start", "connector a"}),
    WireField.CONNECTOR_END: frozenset({"انتها", "to", "end", "connector end", "connector b"}),
    WireField.INDEX: frozenset({"رديف", "ردیف", "no", "no.", "index", "#", "item"}),
}


def _optional_str(entry: MappingABC[str, Any], key: str) -> str | None:
    value = entry.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"{key!r} must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class MappingColumn:
    """Single output column declared by a mapping file."""

    col: str
    attr: str | None = None
    source: str | None = None
    field: WireField | None = None

    @classmethod
    def from_dict(cls, entry: MappingABC[str, Any]) -> "MappingColumn":
        col = entry.get("col")
        if col is not None and not isinstance(col, str):
            raise TypeError(f"'col' must be a string, got {type(col).__name__}")
        field_name = _optional_str(entry, "field")
        return cls(
            col=(col or "").strip(),
            attr=_optional_str(entry, "attr"),
            source=_optional_str(entry, "source"),
            field=WireField.parse(field_name) if field_name else None,
        )

    @property
    def is_auto_index(self) -> bool:
        return self.source == AUTO_INDEX_SOURCE


@dataclass(frozen=True)
class Mapping:
    """Ordered output layout plus optional calibration overrides."""

    columns: tuple[MappingColumn, ...] = ()
    calibration: Calibration = DEFAULT_CALIBRATION

    @classmethod
    def from_dict(cls, raw: MappingABC[str, Any]) -> "Mapping":
        entries = raw.get("columns") or []
        if not isinstance(entries, list):
            raise TypeError("'columns' must be a list")
        columns: list[MappingColumn] = []
        for entry in entries:
            if not isinstance(entry, MappingABC):
                raise TypeError("every column entry must be an object")
            column = MappingColumn.from_dict(entry)
            if column.col:
                columns.append(column)
        overrides = raw.get("calibration")
        if overrides is not None and not isinstance(overrides, MappingABC):
            raise TypeError("'calibration' must be an object")
        return cls(
            columns=tuple(columns),
            calibration=DEFAULT_CALIBRATION.with_overrides(overrides),
        )

    def column_names(self) -> list[str]:
        names: list[str] = []
        for column in self.columns:
            if column.col not in names:
                names.append(column.col)
        return names

    def attribute_columns(self) -> list[MappingColumn]:
        return [column for column in self.columns if column.attr]

    def index_column(self) -> str | None:
        for column in self.columns:
            if column.is_auto_index:
                return column.col
        return None

    def field_bindings(self) -> dict[WireField, str]:
        """Return the column bound to each semantic field (first declared wins)."""

        bindings: dict[WireField, str] = {}
        for column in self.columns:
            if column.field is not None and column.field not in bindings:
                bindings[column.field] = column.col
        for column in self.columns:
            if column.field is not None:
                continue
            if column.is_auto_index:
                bindings.setdefault(WireField.INDEX, column.col)
                continue
            key = column.col.strip().casefold()
            for wire_field, aliases in FIELD_ALIASES.items():
                if key in aliases:
                    bindings.setdefault(wire_field, column.col)
                    break
        return bindings


class RowFields:
    """Per-row assignment state: one optional slot per declared field."""

    def __init__(self, declared: Iterable[WireField]) -> None:
        self._slots: dict[WireField, str | None] = {wire_field: None for wire_field in declared}

    def __repr__(self) -> str:
        return f"RowFields({self.assigned()!r})"

    def is_declared(self, wire_field: WireField) -> bool:
        return wire_field in self._slots

    def is_open(self, wire_field: WireField) -> bool:
        """Return ``True`` when ``wire_field`` is declared and still empty."""

        return wire_field in self._slots and self._slots[wire_field] is None

    def assign(self, wire_field: WireField, value: str) -> None:
        if not self.is_open(wire_field):
            raise ValueError(f"field {wire_field.value} is not open for assignment")
        self._slots[wire_field] = value

    def get(self, wire_field: WireField) -> str | None:
        return self._slots.get(wire_field)

    def assigned(self) -> dict[WireField, str]:
        return {key: value for key, value in self._slots.items() if value is not None}


@dataclass
class WireTable:
    """Column-ordered output rows handed to the workbook writer."""

    columns: tuple[str, ...]
    name: str = DEFAULT_TABLE_NAME
    rows: list[dict[str, str]] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, mapping: Mapping, *, name: str = DEFAULT_TABLE_NAME) -> "WireTable":
        return cls(columns=tuple(mapping.column_names()), name=name)

    def __len__(self) -> int:
        return len(self.rows)

    def has_column(self, column: str | None) -> bool:
        return bool(column) and column in self.columns

    def new_row(self) -> dict[str, str]:
        return {column: "" for column in self.columns}

    def add_row(self, row: MappingABC[str, str]) -> dict[str, str]:
        unknown = set(row) - set(self.columns)
        if unknown:
            raise KeyError(f"row has undeclared columns: {sorted(unknown)}")
        full = self.new_row()
        full.update(row)
        self.rows.append(full)
        return full

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows, columns=list(self.columns), dtype=object)


__all__ = [
    "AUTO_INDEX_SOURCE",
    "DEFAULT_TABLE_NAME",
    "FIELD_ALIASES",
    "Mapping",
    "MappingColumn",
    "RowFields",
    "TextToken",
    "WireField",
    "WireTable",
]

"""Fallback row assembly from loose drawing text."""

from __future__ import annotations

from collections.abc import Iterable

from harness_extract.config import get_logger
from harness_extract.domain import Mapping, TextToken, WireField, WireTable
from harness_extract.extract.classify import CLASSIFIED_FIELDS, FieldClassifier
from harness_extract.extract.grouping import group_rows
from harness_extract.extract.normalize import normalize_tokens

logger = get_logger("extract", "assemble")


class RowAssembler:
    """Turn positioned text into wire rows on a :class:`WireTable`."""

    def __init__(self, table: WireTable, mapping: Mapping) -> None:
        self.table = table
        self.calibration = mapping.calibration
        self.bindings = {
            wire_field: column
            for wire_field, column in mapping.field_bindings().items()
            if table.has_column(column)
        }
        self.classifier = FieldClassifier(self.calibration)

    @property
    def index_column(self) -> str | None:
        return self.bindings.get(WireField.INDEX)

    def declared_fields(self) -> list[WireField]:
        return [wire_field for wire_field in CLASSIFIED_FIELDS if wire_field in self.bindings]

    def assemble(self, tokens: list[TextToken]) -> int:
        """Group, classify and append one row per group; returns rows added."""

        groups = group_rows(tokens, y_tolerance=self.calibration.row_y_tolerance)
        logger.info("Grouped into %d rows based on Y coordinate.", len(groups))

        declared = self.declared_fields()
        for idx, group in enumerate(groups, start=1):
            row = self.table.new_row()
            if self.index_column:
                row[self.index_column] = str(idx)
            assigned = self.classifier.classify(group, declared).assigned()
            for wire_field, value in assigned.items():
                row[self.bindings[wire_field]] = value
            self.table.add_row(row)
        return len(groups)


def extract_from_text(
    texts: Iterable[tuple[str | None, float, float]],
    table: WireTable,
    mapping: Mapping,
) -> int:
    """Normalise, group and classify raw ``(text, x, y)`` labels into ``table``."""

    tokens = normalize_tokens(texts)
    logger.info("Collected %d cleaned text-like entities.", len(tokens))
    return RowAssembler(table, mapping).assemble(tokens)


__all__ = ["RowAssembler", "extract_from_text"]

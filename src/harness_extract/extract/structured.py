"""Direct extraction from tagged block attributes."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from harness_extract.config import get_logger
from harness_extract.domain import Mapping, WireTable

logger = get_logger("extract", "structured")

AttributePairs = Sequence[tuple[str, str]]


def _find_attribute(attributes: AttributePairs, tag: str) -> str | None:
    wanted = tag.casefold()
    for attr_tag, value in attributes:
        if (attr_tag or "").casefold() == wanted:
            return value
    return None


def extract_from_attributes(
    blocks: Iterable[AttributePairs],
    table: WireTable,
    mapping: Mapping,
) -> bool:
    """Append one row per attributed block instance.

    Returns ``False`` when nothing usable was found, which is the signal to
    fall back to loose text parsing.
    """

    target_columns = mapping.attribute_columns()
    if not target_columns:
        logger.debug("Mapping declares no attribute tags; skipping structured extraction")
        return False
    index_column = mapping.index_column()

    added = 0
    for attributes in blocks:
        if not attributes:
            continue
        row = table.new_row()
        if index_column:
            row[index_column] = str(added + 1)
        for column in target_columns:
            value = _find_attribute(attributes, column.attr or "")
            if value is not None:
                row[column.col] = value
        table.add_row(row)
        added += 1

    if added:
        logger.info("Successfully extracted data from %d Insert entities.", added)
        return True
    return False


__all__ = ["extract_from_attributes"]

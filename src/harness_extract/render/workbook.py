"""Persist extracted wire tables as Excel workbooks."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import IllegalCharacterError

from harness_extract.config import get_logger
from harness_extract.domain import WireTable

logger = get_logger("render", "workbook")

_MIN_WIDTH = 6
_MAX_WIDTH = 80


class OutputError(RuntimeError):
    """Raised when the workbook cannot be written."""


def _strip_illegal(value: object) -> object:
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def _sanitize(frame: pd.DataFrame) -> pd.DataFrame:
    """Drop control characters openpyxl refuses to store in a cell."""

    frame = frame.rename(columns=lambda name: _strip_illegal(str(name)))
    return frame.apply(lambda column: column.map(_strip_illegal)) if not frame.empty else frame


def _autosize_columns(worksheet, frame: pd.DataFrame) -> None:
    for idx, column in enumerate(frame.columns, start=1):
        lengths = [len(str(column))]
        lengths.extend(len(str(value)) for value in frame[column].tolist())
        width = min(max(max(lengths) + 2, _MIN_WIDTH), _MAX_WIDTH)
        worksheet.column_dimensions[get_column_letter(idx)].width = width


def write_workbook(table: WireTable, path: str | Path) -> Path:
    """Write ``table`` to a single worksheet named after it and return the path."""

    destination = Path(path)
    existed = destination.exists()
    frame = _sanitize(table.to_frame())
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with pd.ExcelWriter(destination, engine="openpyxl") as writer:
            frame.to_excel(writer, sheet_name=table.name, index=False)
            _autosize_columns(writer.sheets[table.name], frame)
    except (OSError, ValueError, IllegalCharacterError) as exc:
        # ExcelWriter saves on exit even when the body failed.
        if not existed and destination.is_file():
            destination.unlink()
        raise OutputError(f"Failed to save workbook {destination}: {exc}") from exc

    logger.info("Excel saved as %s", destination)
    return destination


__all__ = ["OutputError", "write_workbook"]

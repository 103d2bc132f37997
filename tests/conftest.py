from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

import ezdxf
import pytest

from harness_extract.domain import Mapping, TextToken

ENGLISH_COLUMNS = [
    {"col": "No", "source": "auto_index"},
    {"col": "Wire Code", "attr": "WIRE_CODE"},
    {"col": "Color", "attr": "COLOR"},
    {"col": "Wire Type", "attr": "WIRE_TYPE"},
    {"col": "Wire Size", "attr": "SIZE"},
    {"col": "Cut Length", "attr": "LENGTH"},
    {"col": "From", "attr": "FROM"},
    {"col": "To", "attr": "TO"},
]

# Two printed wire rows plus a legend line and an MTEXT-formatted colour.
HARNESS_TEXTS = [
    ("W12", 0.0, 100.0),
    ("0.85AVSS", 10.0, 100.5),
    ("R", 20.0, 99.0),
    ("1250", 30.0, 100.0),
    ("CN101", 40.0, 100.0),
    ("CN202", 50.0, 100.0),
    ("W13", 0.0, 80.0),
    ("1.25", 10.0, 80.0),
    ("\\C1;B", 20.0, 80.0),
    ("300", 30.0, 80.0),
    ("NOTE: ALL LENGTHS IN MM", 0.0, 200.0),
]


def _row_tokens(*values: str, y: float = 0.0) -> list[TextToken]:
    """Return tokens laid out left to right on one baseline."""

    return [TextToken(value, float(idx * 10), y) for idx, value in enumerate(values)]


@pytest.fixture
def row_tokens():
    return _row_tokens


@pytest.fixture
def harness_texts() -> list[tuple[str, float, float]]:
    return list(HARNESS_TEXTS)


@pytest.fixture
def english_mapping() -> Mapping:
    return Mapping.from_dict({"columns": ENGLISH_COLUMNS})


@pytest.fixture
def mapping_file(tmp_path: Path) -> Path:
    path = tmp_path / "mapping.json"
    path.write_text(json.dumps({"columns": ENGLISH_COLUMNS}), encoding="utf-8")
    return path


def _build_doc(
    texts: Iterable[tuple[str, float, float]] = (),
    blocks: Iterable[Iterable[tuple[str, str]]] = (),
):
    doc = ezdxf.new("R2010")
    msp = doc.modelspace()
    for text, x, y in texts:
        if "\\" in text:
            msp.add_mtext(text, dxfattribs={"insert": (x, y)})
        else:
            msp.add_text(text, dxfattribs={"insert": (x, y)})
    blocks = list(blocks)
    if blocks:
        doc.blocks.new(name="WIRE")
        for idx, attributes in enumerate(blocks):
            ref = msp.add_blockref("WIRE", (0, idx * 10))
            for tag, value in attributes:
                ref.add_attrib(tag, value, insert=(0, idx * 10))
    return doc


@pytest.fixture
def make_doc():
    return _build_doc


@pytest.fixture
def harness_dxf(tmp_path: Path) -> Path:
    path = tmp_path / "harness.dxf"
    _build_doc(HARNESS_TEXTS).saveas(path)
    return path

from __future__ import annotations

import subprocess
from pathlib import Path
from types import SimpleNamespace

import pytest

from harness_extract.geometry.dxf_text import (
    count_entities,
    iter_block_attributes,
    iter_text_entities,
    load_drawing,
)
from harness_extract.vendors.ezdxf import DrawingLoadError


class DummyEntity:
    def __init__(self, kind: str, **dxf: object) -> None:
        self._kind = kind
        self.dxf = SimpleNamespace(**dxf)

    def dxftype(self) -> str:
        return self._kind


class DummyMText(DummyEntity):
    def __init__(self, text: str, insert: tuple[float, float]) -> None:
        super().__init__("MTEXT", insert=insert)
        self.text = text


class DummyInsert(DummyEntity):
    def __init__(self, attribs: list[tuple[str, str]]) -> None:
        super().__init__("INSERT", insert=(0.0, 0.0))
        self.attribs = [SimpleNamespace(dxf=SimpleNamespace(tag=tag, text=text)) for tag, text in attribs]


class DummyLayout:
    def __init__(self, entities: list[DummyEntity]) -> None:
        self.entities = entities

    def query(self, types: str) -> list[DummyEntity]:
        if types == "*":
            return list(self.entities)
        wanted = set(types.split())
        return [entity for entity in self.entities if entity.dxftype() in wanted]


class DummyLayouts:
    def __init__(self, layouts: dict[str, DummyLayout]) -> None:
        self._layouts = layouts

    def names(self) -> list[str]:
        return ["Model", *self._layouts]

    def get(self, name: str) -> DummyLayout:
        return self._layouts[name]


class DummyDoc:
    def __init__(self, model: list[DummyEntity], paper: list[DummyEntity] | None = None) -> None:
        self._model = DummyLayout(model)
        self.layouts = DummyLayouts({"Layout1": DummyLayout(paper or [])})

    def modelspace(self) -> DummyLayout:
        return self._model


def test_iter_text_entities_reads_text_and_raw_mtext() -> None:
    doc = DummyDoc(
        [
            DummyEntity("TEXT", text="R", insert=(1.0, 2.0)),
            DummyMText(r"\A1;150", insert=(3.0, 4.0)),
            DummyEntity("LINE"),
        ],
        paper=[DummyEntity("TEXT", text="W12", insert=(5.0, 6.0))],
    )

    assert list(iter_text_entities(doc)) == [
        ("R", 1.0, 2.0),
        (r"\A1;150", 3.0, 4.0),
        ("W12", 5.0, 6.0),
    ]


def test_text_without_position_defaults_to_origin() -> None:
    doc = DummyDoc([DummyEntity("TEXT", text="R")])

    assert list(iter_text_entities(doc)) == [("R", 0.0, 0.0)]


def test_iter_block_attributes_yields_pairs_per_insert() -> None:
    doc = DummyDoc([DummyInsert([("COLOR", "R"), ("SIZE", "0.5")]), DummyInsert([])])

    assert list(iter_block_attributes(doc)) == [[("COLOR", "R"), ("SIZE", "0.5")], []]


def test_count_entities_spans_layouts() -> None:
    doc = DummyDoc([DummyEntity("LINE"), DummyEntity("TEXT", text="R")], paper=[DummyEntity("LINE")])

    assert count_entities(doc) == 3


def test_real_document_round_trip(make_doc) -> None:
    doc = make_doc([("R", 1.0, 2.0), (r"\C1;B", 3.0, 4.0)], blocks=[[("COLOR", "G")]])

    assert sorted(iter_text_entities(doc)) == [(r"\C1;B", 3.0, 4.0), ("R", 1.0, 2.0)]
    assert list(iter_block_attributes(doc)) == [[("COLOR", "G")]]


def test_load_drawing_reads_saved_dxf(tmp_path, make_doc) -> None:
    path = tmp_path / "wires.dxf"
    make_doc([("R", 1.0, 2.0)]).saveas(path)

    doc = load_drawing(str(path))

    assert list(iter_text_entities(doc)) == [("R", 1.0, 2.0)]


def test_load_drawing_missing_file(tmp_path) -> None:
    with pytest.raises(DrawingLoadError, match="not found"):
        load_drawing(str(tmp_path / "missing.dxf"))


def test_dwg_conversion_scratch_directory_is_removed(tmp_path, make_doc, monkeypatch) -> None:
    converter = tmp_path / "dwg2dxf"
    converter.write_text("", encoding="utf-8")
    drawing = tmp_path / "harness.dwg"
    drawing.write_bytes(b"")
    monkeypatch.setenv("DWG2DXF_EXE", str(converter))
    monkeypatch.delenv("ODA_CONVERTER_EXE", raising=False)
    produced: list[Path] = []

    def fake_run(cmd, **kwargs):
        out_dxf = Path(cmd[2])
        make_doc([("R", 1.0, 2.0)]).saveas(out_dxf)
        produced.append(out_dxf)
        return subprocess.CompletedProcess(cmd, 0, "", "")

    monkeypatch.setattr(subprocess, "run", fake_run)

    doc = load_drawing(str(drawing))

    assert list(iter_text_entities(doc)) == [("R", 1.0, 2.0)]
    assert produced and not produced[0].parent.exists()

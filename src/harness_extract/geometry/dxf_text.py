"""DXF text and block-attribute harvesting for wire extraction."""

from __future__ import annotations

from typing import Any, Iterator, List, Tuple

from harness_extract.vendors import ezdxf as _ezdxf_vendor

TextItem = Tuple[str, float, float]
AttributeList = List[Tuple[str, str]]


def _extract_insert(entity: object) -> Tuple[float, float]:
    try:
        insert = entity.dxf.insert  # type: ignore[attr-defined]
    except Exception:
        return 0.0, 0.0
    try:
        x = float(getattr(insert, "x", insert[0]))
        y = float(getattr(insert, "y", insert[1]))
    except Exception:
        return 0.0, 0.0
    return x, y


def _entity_text(entity: object, kind: str) -> str:
    if kind == "TEXT":
        try:
            return str(entity.dxf.text or "")  # type: ignore[attr-defined]
        except Exception:
            return ""
    # MTEXT keeps its inline formatting codes; the normalizer strips them.
    try:
        return str(entity.text or "")  # type: ignore[attr-defined]
    except Exception:
        return ""


def iter_layouts(doc: Any) -> Iterator[Any]:
    """Yield modelspace followed by every paperspace layout."""

    try:
        modelspace = doc.modelspace()
    except Exception:
        modelspace = None
    if modelspace is not None:
        yield modelspace

    try:
        layout_names = list(doc.layouts.names())
    except Exception:
        layout_names = []

    for name in layout_names:
        if isinstance(name, str) and name.lower() == "model":
            continue
        try:
            layout = doc.layouts.get(name)
        except Exception:
            continue
        if layout is not None:
            yield layout


def _query(layout: Any, types: str) -> Any:
    return getattr(layout, "query", lambda *_: [])(types)


def iter_text_entities(doc: Any) -> Iterator[TextItem]:
    """Yield ``(raw_text, x, y)`` for every TEXT and MTEXT entity."""

    for layout in iter_layouts(doc):
        for entity in _query(layout, "TEXT MTEXT"):
            try:
                kind = entity.dxftype()
            except Exception:
                continue
            if kind not in ("TEXT", "MTEXT"):
                continue
            x, y = _extract_insert(entity)
            yield _entity_text(entity, kind), x, y


def _attribute_pairs(insert: object) -> AttributeList:
    pairs: AttributeList = []
    for attrib in getattr(insert, "attribs", None) or []:
        try:
            tag = attrib.dxf.tag
            value = attrib.dxf.text
        except Exception:
            continue
        pairs.append((str(tag or ""), str(value or "")))
    return pairs


def iter_block_attributes(doc: Any) -> Iterator[AttributeList]:
    """Yield the ``(tag, value)`` attribute list of each block instance."""

    for layout in iter_layouts(doc):
        for entity in _query(layout, "INSERT"):
            yield _attribute_pairs(entity)


def count_entities(doc: Any) -> int:
    return sum(len(list(_query(layout, "*"))) for layout in iter_layouts(doc))


def load_drawing(path: str) -> Any:
    """Open a DXF/DWG drawing through ezdxf."""

    return _ezdxf_vendor.read_document(path)


__all__ = [
    "count_entities",
    "iter_block_attributes",
    "iter_layouts",
    "iter_text_entities",
    "load_drawing",
]

from __future__ import annotations
from dataclasses import replace
from pathlib import Path
from typing import Any
import logging

from harness_extract.config import ConfigError, load_mapping
from harness_extract.domain import Mapping, WireTable
from harness_extract.extract import extract_from_attributes, extract_from_text
from harness_extract.geometry import (
    count_entities,
    iter_block_attributes,
    iter_text_entities,
    load_drawing,
)
from harness_extract.render import write_workbook

from . import io as app_io

log = logging.getLogger(__name__)


class DriverError(RuntimeError):
    """Raised when the extraction driver cannot complete a request."""


def build_table(mapping: Mapping) -> WireTable:
    """Return an empty table for ``mapping``; a mapping without columns is fatal."""

    if not mapping.columns:
        raise ConfigError("mapping.json does not contain any columns.")
    return WireTable.from_mapping(mapping)


def extract_wire_table(doc: Any, mapping: Mapping) -> WireTable:
    """Extract wire rows from ``doc``: tagged attributes first, loose text otherwise."""

    table = build_table(mapping)
    if not extract_from_attributes(iter_block_attributes(doc), table, mapping):
        log.warning("No structured attribute data found. Falling back to parsing Text/MText entities.")
        extract_from_text(iter_text_entities(doc), table, mapping)
    return table


def _load_inputs(spec: app_io.InputSpec) -> tuple[Path, Mapping]:
    if spec.dxf_path is None:
        raise DriverError("no DXF file provided (pass a path or set HARNESS_DXF_PATH)")
    if not spec.dxf_path.exists():
        raise DriverError(f"DXF file not found: {spec.dxf_path}")
    if spec.mapping_path is not None and not spec.mapping_path.exists():
        raise DriverError(f"mapping.json not found: {spec.mapping_path}")

    mapping = load_mapping(spec.mapping_path)
    if not mapping.columns:
        raise ConfigError("mapping.json does not contain any columns.")
    if spec.y_tolerance is not None:
        mapping = replace(
            mapping,
            calibration=replace(mapping.calibration, row_y_tolerance=float(spec.y_tolerance)),
        )
    return spec.dxf_path, mapping


def run(spec: app_io.InputSpec) -> Path:
    """Run one extraction and return the path of the written workbook."""

    dxf_path, mapping = _load_inputs(spec)

    doc = load_drawing(str(dxf_path))
    log.info("DXF loaded. Entities count: %d", count_entities(doc))

    table = extract_wire_table(doc, mapping)
    out_path = spec.out_path or dxf_path.parent / app_io.DEFAULT_OUTPUT_NAME
    return write_workbook(table, out_path)

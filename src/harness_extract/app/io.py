from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import argparse
import sys

from . import runtime

DEFAULT_OUTPUT_NAME = "output.xlsx"


@dataclass(frozen=True)
class InputSpec:
    """Resolved inputs derived from parsed CLI arguments and the environment."""

    dxf_path: Path | None
    mapping_path: Path | None
    out_path: Path | None
    y_tolerance: float | None = None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for the extractor CLI."""

    p = argparse.ArgumentParser(
        prog="harness-extract",
        description="Extract wire rows from a harness drawing into an Excel sheet.",
    )
    p.add_argument("dxf", nargs="?", help="DXF (or DWG) harness drawing.")
    p.add_argument("mapping", nargs="?", help="mapping.json column layout (default: bundled layout).")
    p.add_argument("--out", type=str, help="Output workbook path (default: output.xlsx beside the drawing).")
    p.add_argument("--log-level", type=str, default=None, help="Logging level (default: INFO).")
    p.add_argument("--y-tolerance", type=float, default=None, help="Row grouping tolerance in drawing units.")
    return p.parse_args(argv if argv is not None else sys.argv[1:])


def _maybe_path(s: str | None) -> Path | None:
    return Path(s).expanduser().resolve() if s else None


def resolve_input(ns: argparse.Namespace, cfg: runtime.RuntimeConfig) -> InputSpec:
    """Resolve CLI namespace, falling back to environment configuration."""

    dxf_path = _maybe_path(getattr(ns, "dxf", None)) or cfg.dxf_path
    mapping_path = _maybe_path(getattr(ns, "mapping", None)) or cfg.mapping_path
    out_path = _maybe_path(getattr(ns, "out", None)) or cfg.output_path
    if out_path is None and dxf_path is not None:
        out_path = dxf_path.parent / DEFAULT_OUTPUT_NAME
    return InputSpec(
        dxf_path=dxf_path,
        mapping_path=mapping_path,
        out_path=out_path,
        y_tolerance=getattr(ns, "y_tolerance", None),
    )

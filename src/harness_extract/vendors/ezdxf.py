"""ezdxf / ODA File Converter bindings used to open harness drawings."""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from pathlib import Path
from typing import Any, Final

log = logging.getLogger(__name__)

_DWG_CONVERTER_TIP: Final[str] = (
    "Set ODA_CONVERTER_EXE or DWG2DXF_EXE to a converter that accepts <input.dwg> <output.dxf>."
)

try:  # pragma: no cover - exercised indirectly
    import ezdxf as _ezdxf
    from ezdxf import recover as _recover
except Exception as exc:  # pragma: no cover - platform specific
    _ezdxf = None  # type: ignore[assignment]
    _recover = None  # type: ignore[assignment]
    _EZDXF_ERROR: Exception | None = exc
else:
    _EZDXF_ERROR = None

EZDXF_VERSION: Final[str] = getattr(_ezdxf, "__version__", "unknown") if _ezdxf else "unknown"
HAS_EZDXF: Final[bool] = _ezdxf is not None


class DrawingLoadError(RuntimeError):
    """Raised when a drawing cannot be opened."""


def require_ezdxf(action: str = "DXF operations") -> Any:
    """Return the ``ezdxf`` module or raise a friendly error."""

    if _ezdxf is None:
        msg = f"{action} requires ezdxf, which is unavailable."
        if _EZDXF_ERROR is not None:
            raise DrawingLoadError(f"{msg} ({_EZDXF_ERROR})") from _EZDXF_ERROR
        raise DrawingLoadError(msg)
    return _ezdxf


def _recover_document(doc_path: Path, *, error: Exception) -> Any | None:
    """Attempt to recover a damaged DXF after ``error``."""

    if _recover is None:
        return None
    try:
        doc, auditor = _recover.readfile(str(doc_path))
    except Exception as recover_exc:  # pragma: no cover - depends on dxfs supplied
        log.debug("ezdxf recover.readfile failed", exc_info=recover_exc)
        return None

    if auditor.has_errors:  # pragma: no cover - diagnostic only
        log.warning(
            "Recovered DXF %s with auditor errors after %s: %s",
            doc_path,
            type(error).__name__,
            auditor.errors,
        )
    else:
        log.info("Recovered DXF %s after %s", doc_path, type(error).__name__)
    return doc


def _configured_dwg_converter() -> Path | None:
    for env_var in ("ODA_CONVERTER_EXE", "DWG2DXF_EXE"):
        configured = os.environ.get(env_var)
        if configured and Path(configured).exists():
            return Path(configured)
    return None


def _convert_dwg_to_dxf(path: Path, converter: Path, out_dir: Path) -> Path:
    out_dxf = out_dir / (path.stem + ".dxf")

    if "odafileconverter" in converter.name.lower():
        cmd = [str(converter), str(path.parent), str(out_dir), "ACAD2018", "DXF", "0", "0", path.name]
    else:
        cmd = [str(converter), str(path), str(out_dxf)]

    try:
        subprocess.run(cmd, check=True, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)
    except (OSError, subprocess.CalledProcessError) as exc:  # pragma: no cover - converter runtime
        raise DrawingLoadError(f"DWG→DXF conversion failed: {exc}") from exc

    if not out_dxf.exists():  # pragma: no cover - unexpected converter behaviour
        raise DrawingLoadError(f"Converter reported success but DXF was not produced: {out_dxf}")
    return out_dxf


def _read_dwg(path: Path) -> Any:
    converter = _configured_dwg_converter()
    if converter is not None:
        # ezdxf loads the whole file into memory.
        with tempfile.TemporaryDirectory(prefix="dwg2dxf_") as scratch:
            return _read_dxf(_convert_dwg_to_dxf(path, converter, Path(scratch)))

    try:
        from ezdxf.addons import odafc
    except Exception as exc:  # pragma: no cover - optional dependency
        raise DrawingLoadError(f"DWG support is unavailable. {_DWG_CONVERTER_TIP}") from exc
    try:
        return odafc.readfile(str(path))
    except Exception as exc:  # pragma: no cover - depends on env/converter
        raise DrawingLoadError(f"Failed to load DWG {path}: {exc}. {_DWG_CONVERTER_TIP}") from exc


def _read_dxf(path: Path) -> Any:
    ezdxf = require_ezdxf("Reading DXF drawings")
    try:
        return ezdxf.readfile(str(path))
    except (OSError, ezdxf.DXFStructureError) as exc:
        recovered = _recover_document(path, error=exc)
        if recovered is not None:
            return recovered
        raise DrawingLoadError(f"Failed to load DXF {path}: {exc}") from exc


def read_document(path: str | Path) -> Any:
    """Return an ezdxf drawing for a DXF (or, with a converter, DWG) file."""

    path_obj = Path(path)
    if not path_obj.exists():
        raise DrawingLoadError(f"DXF file not found: {path_obj}")
    if path_obj.suffix.lower() == ".dwg":
        require_ezdxf("Reading DWG drawings")
        return _read_dwg(path_obj)
    return _read_dxf(path_obj)


__all__ = [
    "DrawingLoadError",
    "EZDXF_VERSION",
    "HAS_EZDXF",
    "read_document",
    "require_ezdxf",
]

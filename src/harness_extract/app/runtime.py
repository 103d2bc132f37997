from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import logging
import os

from harness_extract.config import configure_logging


@dataclass(frozen=True)
class RuntimeConfig:
    """Configuration derived from environment variables for CLI runs."""

    # Fallback inputs when no positional arguments are given
    dxf_path: Path | None = None
    mapping_path: Path | None = None
    output_path: Path | None = None

    # Logging
    log_level: str = "INFO"


def _maybe_path(value: str | None) -> Path | None:
    return Path(value).expanduser() if value else None


def build_config(env: dict[str, str] | None = None, *, log_level: str | None = None) -> RuntimeConfig:
    """Build a :class:`RuntimeConfig` from ``env`` and configure logging."""

    e = os.environ if env is None else env
    cfg = RuntimeConfig(
        dxf_path=_maybe_path(e.get("HARNESS_DXF_PATH")),
        mapping_path=_maybe_path(e.get("HARNESS_MAPPING_PATH")),
        output_path=_maybe_path(e.get("HARNESS_OUTPUT_PATH")),
        log_level=log_level or e.get("HARNESS_LOG_LEVEL", "INFO"),
    )
    _configure_logging(cfg.log_level)
    return cfg


def _configure_logging(level: str) -> None:
    numeric = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    configure_logging(numeric)

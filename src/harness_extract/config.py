"""Configuration helpers for the harness extractor."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping as TypingMapping

if TYPE_CHECKING:  # pragma: no cover - import for type checkers only
    from harness_extract.domain import Mapping

RESOURCE_DIR = Path(__file__).resolve().parent / "resources"
DEFAULT_MAPPING_PATH = RESOURCE_DIR / "default_mapping.json"

LOGGER_NAME = "harness_extract"


def get_logger(*names: str) -> logging.Logger:
    """Return a logger under the shared harness extractor namespace."""

    if not names:
        return logging.getLogger(LOGGER_NAME)
    qualified = ".".join((LOGGER_NAME, *names))
    return logging.getLogger(qualified)


logger = get_logger()


def configure_logging(level: int = logging.INFO, *, force: bool = False) -> None:
    """Initialise a basic logging configuration if none is present."""

    root = logging.getLogger()
    if root.handlers and not force:
        root.setLevel(level)
        return
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


class ConfigError(RuntimeError):
    """Raised when configuration data cannot be loaded or validated."""


@dataclass(frozen=True)
class Calibration:
    """Domain constants observed on harness drawings (millimetre units)."""

    row_y_tolerance: float = 5.0
    min_cut_length: int = 50
    max_cut_length: int = 2500
    min_wire_size: float = 0.1
    max_wire_size: float = 5.0
    max_size_text_length: int = 5
    min_code_length: int = 3
    max_code_length: int = 10
    min_connector_length: int = 4
    max_connector_length: int = 15

    def with_overrides(self, overrides: TypingMapping[str, Any] | None) -> "Calibration":
        """Return a copy with ``overrides`` applied, rejecting unknown keys."""

        if not overrides:
            return self
        known = {f.name for f in fields(self)}
        changes: dict[str, Any] = {}
        for key, value in overrides.items():
            if key not in known:
                raise ConfigError(f"Unknown calibration setting: {key!r}")
            current = getattr(self, key)
            invalid = ConfigError(f"Invalid value for calibration {key!r}: {value!r}")
            if isinstance(value, bool):
                raise invalid
            if isinstance(current, int) and isinstance(value, float) and not value.is_integer():
                raise invalid
            try:
                changes[key] = type(current)(value)
            except (TypeError, ValueError) as exc:
                raise invalid from exc
        return replace(self, **changes)


DEFAULT_CALIBRATION = Calibration()


def _load_json_mapping(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8-sig"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Malformed JSON in {path.name}: {exc}") from exc

    if not isinstance(raw, TypingMapping):
        raise ConfigError(f"Configuration root must be an object in {path.name}")

    return dict(raw)


def load_mapping(path: str | Path | None = None) -> Mapping:
    """Load a column mapping file, defaulting to the bundled harness layout."""

    from harness_extract.domain import Mapping

    mapping_path = Path(path) if path is not None else DEFAULT_MAPPING_PATH
    raw = _load_json_mapping(mapping_path)
    try:
        mapping = Mapping.from_dict(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid mapping in {mapping_path.name}: {exc}") from exc
    logger.debug("Loaded %d mapping columns from %s", len(mapping.columns), mapping_path)
    return mapping


__all__ = [
    "Calibration",
    "ConfigError",
    "DEFAULT_CALIBRATION",
    "DEFAULT_MAPPING_PATH",
    "LOGGER_NAME",
    "RESOURCE_DIR",
    "configure_logging",
    "get_logger",
    "load_mapping",
    "logger",
]

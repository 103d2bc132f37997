"""Command line entry point: ``python -m harness_extract``."""

from __future__ import annotations

import sys

from harness_extract.app import driver, io as app_io, runtime
from harness_extract.config import ConfigError, get_logger
from harness_extract.render import OutputError
from harness_extract.vendors.ezdxf import DrawingLoadError

logger = get_logger("cli")


def main(argv: list[str] | None = None) -> int:
    ns = app_io.parse_args(argv)
    cfg = runtime.build_config(log_level=ns.log_level)
    spec = app_io.resolve_input(ns, cfg)
    try:
        driver.run(spec)
    except (driver.DriverError, ConfigError, DrawingLoadError, OutputError) as exc:
        logger.error("ERROR: %s", exc)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

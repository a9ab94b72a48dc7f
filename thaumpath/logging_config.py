"""Logging set-up for the solver, driven by LOG_LEVEL and LOG_FILE.

The interactive loop owns stdout, so log records only ever go to a file.
Without ``LOG_FILE`` (or with ``LOG_LEVEL=0``) logging stays silent.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "thaumpath"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_LEVEL_NAMES = {
    "silent": 0,
    "info": 1,
    "debug": 2,
}
_NOISY_LOGGERS = ("urllib3", "nbtlib")

_CONFIGURED = False


def configure_logging() -> None:
    """Attach a file handler to the package logger once per process."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    level = _read_level(os.getenv("LOG_LEVEL", "0"))
    log_path = os.getenv("LOG_FILE")

    if level is None or level <= 0 or not log_path:
        _CONFIGURED = True
        return

    log_file = Path(log_path)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(_map_level(level))
    package_logger.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _CONFIGURED = True


def _read_level(raw: str) -> Optional[int]:
    normalized = raw.strip().lower()
    if normalized in _LEVEL_NAMES:
        return _LEVEL_NAMES[normalized]
    try:
        return int(normalized)
    except ValueError:
        return None


def _map_level(level: int) -> int:
    if level >= 2:
        return logging.DEBUG
    return logging.INFO

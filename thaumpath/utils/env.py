from __future__ import annotations

"""Helpers for loading environment configuration."""

import logging
import os
from pathlib import Path
from typing import Optional, Tuple, Union

from thaumpath.config import ENV_PREFIX

_ENV_LOADED = False

_LOGGER = logging.getLogger(__name__)


def load_dotenv(dotenv_path: Union[str, Path] = ".env") -> None:
    """Load environment variables from a simple ``.env`` file if present.

    Variables already set in the environment win over the file.
    """
    global _ENV_LOADED
    if _ENV_LOADED:
        return

    path = Path(dotenv_path)
    if path.exists():
        loaded = 0
        for line in path.read_text(encoding="utf-8").splitlines():
            parsed = _parse_line(line)
            if parsed:
                key, value = parsed
                os.environ.setdefault(key, value)
                loaded += 1
        _LOGGER.debug("Loaded %d entries from %s", loaded, path)

    _ENV_LOADED = True


def _parse_line(line: str) -> Optional[Tuple[str, str]]:
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    if "=" not in stripped:
        return None

    key, value = stripped.split("=", 1)
    return (key.strip(), _unquote(value.strip()))


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def env_name(option: str) -> str:
    """Map an option such as ``ftp_address`` to its environment name."""
    return f"{ENV_PREFIX}{option.upper()}"


def env_value(option: str) -> Optional[str]:
    """Return the non-empty environment value backing ``option``."""
    value = os.environ.get(env_name(option), "").strip()
    return value or None


def env_int(option: str, default: int) -> int:
    """Integer environment value for ``option``, or ``default``."""
    raw = env_value(option)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        _LOGGER.warning(
            "Ignoring non-integer %s=%r; using %d",
            env_name(option),
            raw,
            default,
        )
        return default

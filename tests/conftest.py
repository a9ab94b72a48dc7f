"""
ThaumPath Repository
Introductory remarks: This module is part of the ThaumPath codebase.

Shared fixtures for the test suite.
"""

from __future__ import annotations

import gzip
import io
from pathlib import Path
from typing import Callable, Iterable, List, Mapping, Tuple

import nbtlib
import pytest

from thaumpath import logging_config
from thaumpath.utils import env


@pytest.fixture(autouse=True)
def _isolated_runtime_env(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path_factory: pytest.TempPathFactory,
) -> None:
    """Keep tests away from the developer's shell and .env settings."""
    for name in (
        "USERNAME",
        "FTP_ADDRESS",
        "FTP_USERNAME",
        "FTP_PASSWORD",
        "SNAPSHOT_URL",
        "SNAPSHOT_FILE",
        "SLACK",
        "MAX_EXPANSIONS",
    ):
        monkeypatch.delenv(f"THAUMPATH_{name}", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "0")
    log_dir = tmp_path_factory.mktemp("logs")
    monkeypatch.setenv("LOG_FILE", str(Path(log_dir) / "thaumpath.log"))
    monkeypatch.setattr(env, "_ENV_LOADED", True)
    monkeypatch.setattr(logging_config, "_CONFIGURED", False)


def encode_snapshot(records: Iterable[Tuple[str, int]]) -> bytes:
    """Build gzip-compressed NBT bytes shaped like a ``.thaum`` file."""
    aspects = nbtlib.List[nbtlib.Compound](
        [
            nbtlib.Compound(
                {"key": nbtlib.String(key), "amount": nbtlib.Short(amount)}
            )
            for key, amount in records
        ]
    )
    root = nbtlib.File({"THAUMCRAFT.ASPECTS": aspects})
    buffer = io.BytesIO()
    root.write(buffer)
    return gzip.compress(buffer.getvalue())


@pytest.fixture
def snapshot_bytes() -> Callable[[Iterable[Tuple[str, int]]], bytes]:
    return encode_snapshot


@pytest.fixture
def nbt_records() -> Callable[[Mapping[str, int]], dict]:
    """Decoded-structure builder using plain Python containers."""

    def _build(amounts: Mapping[str, int]) -> dict:
        records: List[dict] = [
            {"key": key, "amount": amount} for key, amount in amounts.items()
        ]
        return {"THAUMCRAFT.ASPECTS": records}

    return _build

"""
ThaumPath Repository
Introductory remarks: This module is part of the ThaumPath codebase.

Central configuration constants for the ThaumPath research solver.
"""

from __future__ import annotations

# Pricing -------------------------------------------------------------------

UNAFFORDABLE_PRICE = 0xFFFF
"""Price of an aspect the player does not own at all."""

NO_PATH_PRICE = 0xFFFFFFFF
"""Price reported alongside an empty path set."""

# Search --------------------------------------------------------------------

DEFAULT_LENGTH_SLACK = 3
"""Number of path lengths probed per query, starting at the target."""

MAX_PATH_LENGTH = 16
"""Longest path (in aspects) the interactive loop widens the window to."""

DEFAULT_MAX_EXPANSIONS = 2_000_000
"""Per-query cap on frontier expansions; ``0`` disables the cap."""

ENDPOINT_COUNT = 2
"""Aspects on a path that the user does not count as "distance"."""

# Snapshot retrieval --------------------------------------------------------

ASPECT_LIST_TAG = "THAUMCRAFT.ASPECTS"
"""Top-level NBT entry holding the player's aspect records."""

SNAPSHOT_EXTENSION = "thaum"
"""File extension used by Thaumcraft for per-player research data."""

SNAPSHOT_PATH_TEMPLATE = "/World/playerdata/{username}.{extension}"
"""Remote location of a player's research data on the server."""

SNAPSHOT_TIMEOUT_SECONDS = 30
"""Timeout applied to FTP and HTTP snapshot transfers."""

ENV_PREFIX = "THAUMPATH_"
"""Prefix of environment variables backing CLI options."""

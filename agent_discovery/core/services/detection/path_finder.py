"""
L3 Detection — Executable lookup.

PATH first, then a few well-known directories that are often missing
from PATH in non-interactive shells (cron, IDE launchers, services).
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from agent_discovery.core.services.detection.platform import (
    PlatformProfile,
    current_platform,
)

logger = logging.getLogger(__name__)


def find_executable(
    name: str,
    profile: PlatformProfile | None = None,
) -> Path | None:
    """Locate an executable by name.

    Search order, first hit wins:
        1. ``shutil.which`` (PATH, PATHEXT on Windows)
        2. the profile's system fallback directories
        3. user-profile locations (``~/.local/bin``, npm shims, ...)

    Returns:
        Path to the executable, or None.  Not finding it is a normal
        outcome, never an error.
    """
    profile = profile or current_platform()

    found = shutil.which(name)
    if found:
        return Path(found)

    for directory in profile.fallback_dirs:
        candidate = Path(directory) / name
        if candidate.exists():
            logger.debug("Found %s in fallback dir %s", name, directory)
            return candidate

    for candidate in profile.user_paths(name):
        if candidate.exists():
            logger.debug("Found %s in user location %s", name, candidate)
            return candidate

    return None

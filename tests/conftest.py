"""
Shared test fixtures and configuration.
"""

import stat
from collections.abc import Callable
from pathlib import Path

import pytest

from agent_discovery.core.services.detection.platform import PlatformProfile


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def make_script(tmp_path: Path) -> Callable[..., Path]:
    """Factory for executable shell scripts in a private bin dir.

    ``make_script("claude", 'echo "2.1.12 (Claude Code)"')`` writes
    ``<tmp>/bin/claude`` and marks it executable.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()

    def _make(name: str, body: str, *, executable: bool = True) -> Path:
        script = bin_dir / name
        script.write_text(f"#!/bin/sh\n{body}\n")
        mode = script.stat().st_mode
        if executable:
            script.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        else:
            script.chmod(mode & ~(stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))
        return script

    return _make


@pytest.fixture
def isolated_profile() -> PlatformProfile:
    """A platform profile with no fallback dirs and no user locations."""
    return PlatformProfile(
        name="posix",
        fallback_dirs=(),
        home_candidates=lambda name, env: [],
    )

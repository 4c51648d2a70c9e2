"""
L3 Detection — Version string parsing (pure).

CLI ``--version`` output is loosely formatted::

    2.1.12 (Claude Code)
    codex-cli 0.87.0
    v1.2.3
    My Tool\\nVersion: 1.0.0\\nBuilt on 2025-01-01

The first ``X.Y.Z`` (optionally ``v``-prefixed) wins.  Without one, an
``X.Y`` is accepted and normalised to ``X.Y.0``.  Matches must be
valid semver cores (no leading zeros).  No I/O, no subprocess.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from packaging.version import Version

_THREE_PART = re.compile(r"[vV]?(\d+)\.(\d+)\.(\d+)")
_TWO_PART = re.compile(r"[vV]?(\d+)\.(\d+)")
_MAJOR_MINOR = re.compile(r"v?(\d+)\.(\d+)")

# Semver 2.0 numeric identifiers: 0, or no leading zero.
_SEMVER_CORE = re.compile(r"(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)")


@dataclass(frozen=True)
class ParsedVersion:
    """A parsed version plus the exact text it came from."""

    version: Version
    raw: str   # substring of the input, e.g. "v1.2" for 1.2.0

    def __str__(self) -> str:
        return str(self.version)


def _strict(core: str) -> Version | None:
    if not _SEMVER_CORE.fullmatch(core):
        return None
    return Version(core)


def parse_version(text: str) -> ParsedVersion | None:
    """Extract a semantic version from arbitrary CLI output.

    Returns:
        ``ParsedVersion`` or None when nothing usable is found.
    """
    if not text:
        return None

    match = _THREE_PART.search(text)
    if match:
        version = _strict(".".join(match.groups()))
        if version is None:
            return None
        return ParsedVersion(version=version, raw=match.group(0))

    # No X.Y.Z anywhere, so an X.Y here is never the head of one.
    match = _TWO_PART.search(text)
    if not match:
        return None
    major, minor = match.groups()
    version = _strict(f"{major}.{minor}.0")
    if version is None:
        return None
    return ParsedVersion(version=version, raw=match.group(0))


def extract_major_minor(text: str) -> tuple[int, int] | None:
    """First ``major.minor`` pair in ``text`` (``v`` prefix allowed).

    Used for prerequisite checks such as ``node --version`` →
    ``v20.11.1`` → ``(20, 11)``.
    """
    match = _MAJOR_MINOR.search(text or "")
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))

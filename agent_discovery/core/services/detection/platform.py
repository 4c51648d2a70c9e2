"""
L3 Detection — Platform capability table.

Everything that differs between operating systems lives here:
fallback directories, user-profile locations, and the path markers
used to guess how a tool was installed.  The resolver and detector
consult a ``PlatformProfile`` and stay platform-neutral themselves.
"""

from __future__ import annotations

import ntpath
import os
import posixpath
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

# Substring → install method.  First match wins, order matters.
_INSTALL_METHOD_MARKERS: tuple[tuple[tuple[str, ...], str], ...] = (
    ((".npm", "node_modules"), "npm"),
    ((".cargo",), "cargo"),
    (("homebrew", "linuxbrew"), "brew"),
    (("mise",), "mise"),
)


def _posix_home_candidates(name: str, env: Mapping[str, str]) -> list[str]:
    home = env.get("HOME")
    if not home:
        return []
    return [
        posixpath.join(home, ".local", "bin", name),
        posixpath.join(home, "bin", name),
    ]


def _windows_home_candidates(name: str, env: Mapping[str, str]) -> list[str]:
    paths: list[str] = []
    userprofile = env.get("USERPROFILE")
    if userprofile:
        # Native installers drop an .exe; PATHEXT-style lookups may not.
        paths.append(ntpath.join(userprofile, ".local", "bin", f"{name}.exe"))
        paths.append(ntpath.join(userprofile, ".local", "bin", name))
    appdata = env.get("APPDATA")
    if appdata:
        # npm global installs are .cmd shims
        paths.append(ntpath.join(appdata, "npm", f"{name}.cmd"))
    return paths


@dataclass(frozen=True)
class PlatformProfile:
    """Platform-varying data for executable lookup."""

    name: str
    fallback_dirs: tuple[str, ...]
    home_candidates: Callable[[str, Mapping[str, str]], list[str]]
    install_method_markers: tuple[tuple[tuple[str, ...], str], ...] = field(
        default=_INSTALL_METHOD_MARKERS,
    )

    def user_paths(self, name: str, env: Mapping[str, str] | None = None) -> list[Path]:
        """User-profile locations for ``name``.

        Missing environment variables just mean fewer candidates.
        """
        candidates = self.home_candidates(name, os.environ if env is None else env)
        return [Path(p) for p in candidates]

    def infer_install_method(self, path: Path | str) -> str | None:
        """Best-effort guess of the package manager from the path."""
        text = str(path)
        for markers, method in self.install_method_markers:
            if any(marker in text for marker in markers):
                return method
        return None


POSIX = PlatformProfile(
    name="posix",
    fallback_dirs=("/usr/local/bin", "/usr/bin"),
    home_candidates=_posix_home_candidates,
)

# PATH plus the npm shim directory cover Windows; no system fallbacks.
WINDOWS = PlatformProfile(
    name="windows",
    fallback_dirs=(),
    home_candidates=_windows_home_candidates,
)


def current_platform() -> PlatformProfile:
    """Profile for the running interpreter."""
    return WINDOWS if os.name == "nt" else POSIX

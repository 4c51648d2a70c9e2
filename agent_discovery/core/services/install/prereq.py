"""
L3 Detection — Prerequisite checks before installing.

A prerequisite with no check command is assumed present: we cannot
verify it, so we do not block on it.  A prerequisite WITH a check
command that fails, hangs, or prints nothing version-like is treated
as missing: install safety depends on not under-estimating risk.
"""

from __future__ import annotations

import logging
import re
import shlex
from collections.abc import Mapping
from typing import Any

from agent_discovery.core.data.catalog import get_install_info
from agent_discovery.core.models.agent import AgentKind
from agent_discovery.core.models.errors import (
    PrerequisiteMissing,
    PrerequisiteVersionMismatch,
    UnsupportedPlatform,
)
from agent_discovery.core.models.install import InstallInfo, Prerequisite
from agent_discovery.core.services.detection.version_parser import extract_major_minor
from agent_discovery.core.services.execution.subprocess_runner import run_command

logger = logging.getLogger(__name__)

PREREQ_CHECK_TIMEOUT = 5.0   # seconds

_MIN_MAJOR = re.compile(r"(\d+)\+")


def required_major(name: str) -> int:
    """Minimum major version encoded in a name: ``"Node.js 18+"`` → 18.

    Returns 0 when the name carries no ``<N>+`` suffix.
    """
    match = _MIN_MAJOR.search(name)
    return int(match.group(1)) if match else 0


def _missing(prereq: Prerequisite) -> PrerequisiteMissing:
    where = prereq.install_url or "the official website"
    return PrerequisiteMissing(
        prereq.name,
        install_url=prereq.install_url,
        fix=f"Install {prereq.name} from {where}",
    )


def check_prerequisite(prereq: Prerequisite, *, timeout: float = PREREQ_CHECK_TIMEOUT) -> None:
    """Verify a single prerequisite.

    Raises:
        PrerequisiteMissing: Check command failed to run, timed out, or
            printed no parseable ``major.minor``.
        PrerequisiteVersionMismatch: Found major below the ``<N>+`` floor.
    """
    if not prereq.check_command or not prereq.check_command.strip():
        logger.debug("Prerequisite '%s' has no check command, assuming present", prereq.name)
        return

    argv = shlex.split(prereq.check_command)
    result = run_command(argv, timeout=timeout)

    if result.spawn_error is not None or result.timed_out:
        logger.info(
            "Prerequisite '%s' not available (%s)",
            prereq.name,
            "timed out" if result.timed_out else result.spawn_error,
        )
        raise _missing(prereq)

    output = result.stdout_text() if result.stdout else result.stderr_text()
    found = extract_major_minor(output)
    if found is None:
        logger.info("Prerequisite '%s': no version in %r", prereq.name, output.strip()[:120])
        raise _missing(prereq)

    major, minor = found
    minimum = required_major(prereq.name)
    if major < minimum:
        raise PrerequisiteVersionMismatch(
            prereq.name,
            required=f"{minimum}+",
            found=f"{major}.{minor}",
            fix=f"Upgrade {prereq.name} to version {minimum}+",
        )

    logger.debug("Prerequisite '%s' satisfied (%d.%d)", prereq.name, major, minor)


def check_install_info(kind: AgentKind, info: InstallInfo) -> None:
    """Platform gate plus every prerequisite, in catalog order."""
    if not info.is_supported:
        where = info.docs_url or "the agent's documentation"
        raise UnsupportedPlatform(kind, fix=f"See {where} for supported platforms")

    for prereq in info.prerequisites:
        check_prerequisite(prereq)


def can_install(
    kind: AgentKind,
    *,
    overrides: Mapping[AgentKind, Mapping[str, Any]] | None = None,
) -> None:
    """Pre-flight check: can ``kind`` be installed here right now?

    Returns None when installation may proceed.

    Raises:
        UnsupportedPlatform, PrerequisiteMissing, PrerequisiteVersionMismatch
    """
    check_install_info(kind, get_install_info(kind, overrides=overrides))

"""
L5 Orchestration — Agent installation.

Linear pipeline, no going back::

    Started → CheckingPrerequisites → Installing → Verifying → Completed

Each stage is reported through ``on_progress`` *before* its work
starts.  The callback runs on the caller's thread, inline with the
pipeline: it must return quickly (update a progress bar, log a line),
never block on user input.

Calling ``install`` is itself the consent to install.  Asking the
user first is the front-end's job.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

from agent_discovery.core.data.catalog import get_install_info
from agent_discovery.core.models.agent import AgentKind
from agent_discovery.core.models.errors import (
    InstallerFailed,
    InstallPermissionDenied,
    InstallTimeout,
    NetworkError,
    VerificationFailed,
)
from agent_discovery.core.models.install import (
    CheckingPrerequisites,
    Completed,
    InstallOptions,
    InstallProgress,
    Installing,
    Started,
    Verifying,
)
from agent_discovery.core.models.status import DetectOptions
from agent_discovery.core.services.detection.detector import detect
from agent_discovery.core.services.execution.subprocess_runner import (
    CommandResult,
    run_command,
)
from agent_discovery.core.services.install.failure import (
    FailureClassifier,
    SubstringClassifier,
)
from agent_discovery.core.services.install.prereq import check_install_info

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[InstallProgress], None]

# Time for PATH / shell hash tables to catch up before re-detecting.
SETTLE_DELAY = 0.5   # seconds


def _ignore_progress(_: InstallProgress) -> None:
    return None


def _classify(
    result: CommandResult,
    options: InstallOptions,
    classifier: FailureClassifier,
) -> None:
    """Raise the matching ``InstallError`` for a failed installer run."""
    if result.spawn_error is not None:
        if isinstance(result.spawn_error, PermissionError):
            raise InstallPermissionDenied(
                str(result.spawn_error),
                fix="Try running with appropriate permissions",
            )
        raise InstallerFailed(
            str(result.spawn_error),
            fix="Check the command and try again",
        )

    if result.timed_out:
        raise InstallTimeout(
            options.timeout,
            fix=(
                f"Installation timed out after {options.timeout:g}s. "
                "Try with a longer timeout or check network."
            ),
        )

    stdout = result.stdout_text()
    stderr = result.stderr_text()

    if classifier.is_network_failure(stderr):
        raise NetworkError(
            "Network error during installation",
            stderr=stderr,
            fix="Check your internet connection and try again",
        )

    raise InstallerFailed(
        f"Installer exited with code {result.returncode}",
        exit_code=result.returncode,
        stdout=stdout,
        stderr=stderr,
        fix="See installer output above for details",
    )


def install(
    kind: AgentKind,
    options: InstallOptions | None = None,
    on_progress: ProgressCallback | None = None,
    *,
    classifier: FailureClassifier | None = None,
    overrides: Mapping[AgentKind, Mapping[str, Any]] | None = None,
    settle_delay: float = SETTLE_DELAY,
    detect_options: DetectOptions | None = None,
) -> None:
    """Install ``kind`` with its primary install method.

    Args:
        kind: Agent to install.
        options: Installer timeout (default 300s).
        on_progress: Receives each ``InstallProgress`` stage in order.
        classifier: Network-failure classifier for installer stderr.
        overrides: Catalog overrides (config ``agents:`` section).
        settle_delay: Seconds to wait before verification.
        detect_options: Options for the post-install detection.

    Returns:
        None once the agent is installed and detected as usable.

    Raises:
        InstallError: A subclass describing the failure, always with a
            non-empty ``fix``.
    """
    options = options or InstallOptions()
    emit = on_progress or _ignore_progress
    classifier = classifier or SubstringClassifier()

    emit(Started(agent=kind))
    logger.info("Installing %s", kind.display_name)

    info = get_install_info(kind, overrides=overrides)

    emit(CheckingPrerequisites())
    check_install_info(kind, info)

    command = info.primary.command
    emit(Installing(agent=kind))
    logger.info("Running installer: %s", info.primary.raw_command)

    result = run_command(
        command.argv,
        timeout=options.timeout,
        env_overrides=command.env_vars or None,
    )
    if not result.ok:
        logger.warning(
            "Installer for %s failed (exit=%s, timed_out=%s)",
            kind, result.returncode, result.timed_out,
        )
        _classify(result, options, classifier)

    emit(Verifying(agent=kind))
    if settle_delay > 0:
        time.sleep(settle_delay)

    status = detect(kind, detect_options)
    if not status.is_usable:
        logger.warning("%s installed but not detected (%s)", kind.display_name, status.kind)
        raise VerificationFailed(
            kind,
            fix=(
                "Installation completed but agent not found. You may need to "
                "restart your terminal for PATH changes to take effect."
            ),
        )

    emit(Completed(agent=kind))
    logger.info("%s installed at %s", kind.display_name, status.path)

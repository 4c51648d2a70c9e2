"""
L3 Detection — Agent detection pipeline.

    find_executable → check_version → parse_version → AgentStatus

Detection never raises.  "Not found" and "``--version`` hung" both
fold into ``NotInstalled``; other probe failures become ``Unknown``.
A version string we cannot parse still yields ``Installed``.

Note: treating a probe timeout as absence conflates a missing tool
with a hung one.  Kept for compatibility with existing callers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed

from agent_discovery.core.models.agent import AgentKind
from agent_discovery.core.models.status import (
    AgentStatus,
    DetectionError,
    DetectionResult,
    DetectOptions,
    Installed,
    NotInstalled,
    Unknown,
)
from agent_discovery.core.services.detection.path_finder import find_executable
from agent_discovery.core.services.detection.platform import (
    PlatformProfile,
    current_platform,
)
from agent_discovery.core.services.detection.version_parser import parse_version
from agent_discovery.core.services.detection.version_probe import (
    ProbeError,
    check_version,
)

logger = logging.getLogger(__name__)


def detect(
    kind: AgentKind,
    options: DetectOptions | None = None,
    *,
    profile: PlatformProfile | None = None,
) -> AgentStatus:
    """Detect a single agent.

    Args:
        kind: Agent to look for.
        options: Timeout and ``skip_version``.  Defaults: 5s, False.
        profile: Platform table override (tests, cross-platform tools).

    Returns:
        ``Installed``, ``NotInstalled`` or ``Unknown``.
    """
    options = options or DetectOptions()
    profile = profile or current_platform()

    path = find_executable(kind.executable_name, profile)
    if path is None:
        logger.debug("%s: executable '%s' not found", kind, kind.executable_name)
        return NotInstalled()

    install_method = profile.infer_install_method(path)

    if options.skip_version:
        return Installed(executable=path, install_method=install_method)

    try:
        output = check_version(path, options.timeout)
    except ProbeError as e:
        if e.error is DetectionError.TIMEOUT:
            logger.debug("%s: --version timed out, treating as not installed", kind)
            return NotInstalled()
        logger.debug("%s: probe failed (%s): %s", kind, e.error.value, e.detail)
        return Unknown(
            error=e.error,
            message=f"Failed to verify {kind.display_name}: {e.error.description}",
        )

    parsed = parse_version(output)
    if parsed is None:
        logger.debug("%s: unparseable version output %r", kind, output.strip()[:200])
        return Installed(
            executable=path,
            raw_version=output.strip(),
            install_method=install_method,
        )

    return Installed(
        executable=path,
        found_version=parsed.version,
        raw_version=parsed.raw,
        install_method=install_method,
    )


def detect_with_options(kind: AgentKind, options: DetectOptions) -> AgentStatus:
    """Same as ``detect`` with explicit options."""
    return detect(kind, options)


def _to_result(kind: AgentKind, status: AgentStatus) -> DetectionResult:
    if isinstance(status, Unknown):
        return DetectionResult.failure(kind, status.error, status.message)
    return DetectionResult.success(kind, status)


def detect_all(
    options: DetectOptions | None = None,
    agents: Iterable[AgentKind] | None = None,
    *,
    profile: PlatformProfile | None = None,
) -> dict[AgentKind, DetectionResult]:
    """Detect every known agent in parallel.

    All probes run concurrently on a thread pool, so wall-clock time
    is bounded by the *slowest* probe, not the sum.  One agent's
    failure never affects another: ``Unknown`` outcomes, and any
    unexpected exception inside a probe, land on the failure side of that
    agent's ``DetectionResult`` only.

    Returns:
        Exactly one ``DetectionResult`` per agent.
    """
    kinds = list(agents) if agents is not None else AgentKind.all()
    if not kinds:
        return {}

    results: dict[AgentKind, DetectionResult] = {}
    with ThreadPoolExecutor(max_workers=len(kinds), thread_name_prefix="detect") as pool:
        futures = {
            pool.submit(detect, kind, options, profile=profile): kind
            for kind in kinds
        }
        for future in as_completed(futures):
            kind = futures[future]
            try:
                results[kind] = _to_result(kind, future.result())
            except Exception as exc:
                logger.warning("Detection of %s crashed: %s", kind, exc)
                results[kind] = DetectionResult.failure(
                    kind, DetectionError.IO_ERROR, f"Detection crashed: {exc}",
                )

    # Stable order for callers that iterate.
    return {kind: results[kind] for kind in kinds}


def detect_all_with_options(options: DetectOptions) -> dict[AgentKind, DetectionResult]:
    """Same as ``detect_all`` with explicit options."""
    return detect_all(options)

"""
L3 Detection — ``--version`` probe.

Read-only: runs the executable once with ``--version`` and returns the
raw text.  Parsing happens elsewhere.
"""

from __future__ import annotations

from pathlib import Path

from agent_discovery.core.models.status import DetectionError
from agent_discovery.core.services.execution.subprocess_runner import run_command

VERSION_FLAG = "--version"


class ProbeError(Exception):
    """A version probe failed; ``error`` says how."""

    def __init__(self, error: DetectionError, detail: str = "") -> None:
        super().__init__(detail or error.description)
        self.error = error
        self.detail = detail


def check_version(path: Path | str, timeout: float) -> str:
    """Run ``<path> --version`` and return its output.

    Stdout is preferred; stderr is used when stdout is empty, since
    some tools print their banner there.

    Raises:
        ProbeError: ``TIMEOUT`` if the probe exceeded ``timeout``,
            ``PERMISSION_DENIED`` if the OS refused to execute it,
            ``IO_ERROR`` for other spawn failures or a non-zero exit,
            ``VERSION_PARSE_FAILED`` if the output is not UTF-8.
    """
    result = run_command([str(path), VERSION_FLAG], timeout=timeout)

    if result.timed_out:
        raise ProbeError(DetectionError.TIMEOUT, f"no answer within {timeout:g}s")

    if result.spawn_error is not None:
        if isinstance(result.spawn_error, PermissionError):
            raise ProbeError(DetectionError.PERMISSION_DENIED, str(result.spawn_error))
        raise ProbeError(DetectionError.IO_ERROR, str(result.spawn_error))

    if result.returncode != 0:
        raise ProbeError(DetectionError.IO_ERROR, f"exit status {result.returncode}")

    raw = result.stdout if result.stdout else result.stderr
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ProbeError(DetectionError.VERSION_PARSE_FAILED, str(e)) from e

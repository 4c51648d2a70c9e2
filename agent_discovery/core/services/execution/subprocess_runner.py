"""
L4 Execution — Core subprocess runner.

The SINGLE PLACE where child processes are spawned, for version
probes, prerequisite checks and installers alike.  Timeouts and
teardown are centralised here.

Teardown invariant: when this function returns (or raises, e.g. on
KeyboardInterrupt) the child AND everything it started are gone.  On
POSIX the child gets its own session, so ``bash -c "curl ... | bash"``
pipelines and daemons forked by a ``--version`` are killed as one
process group, even after the direct child has exited.

The timeout bounds the whole call: a background descendant holding
stdout/stderr open cannot stretch it past ``timeout`` plus a short
drain.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_POSIX = os.name != "nt"

# Upper bound for collecting leftover output once the group is dead.
_DRAIN_TIMEOUT = 1.0   # seconds


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one child process.

    Exactly one of these describes what happened:
        ``spawn_error``  the process never started
        ``timed_out``    it was killed after ``timeout`` seconds
        ``returncode``   it exited on its own
    """

    argv: tuple[str, ...]
    returncode: int | None = None
    stdout: bytes = b""
    stderr: bytes = b""
    timed_out: bool = False
    spawn_error: OSError | None = None
    elapsed_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out and self.spawn_error is None

    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


def _kill(proc: subprocess.Popen) -> None:
    """Kill ``proc``'s whole process group (POSIX) or ``proc`` itself, then reap.

    The group is signalled even when the leader already exited:
    background descendants keep the group alive after it.
    """
    if _POSIX:
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except (ProcessLookupError, PermissionError):
            pass   # no live member left (macOS reports EPERM for zombies)
    if proc.poll() is None:
        proc.kill()
    proc.wait()


def _drain(proc: subprocess.Popen) -> tuple[bytes, bytes]:
    """Collect buffered output after ``_kill``, never blocking for long."""
    try:
        stdout, stderr = proc.communicate(timeout=_DRAIN_TIMEOUT)
    except subprocess.TimeoutExpired:
        # Something escaped the group (setsid) and still holds a pipe.
        logger.debug("Output of %s still held open after kill, dropping it", proc.args[0])
        for pipe in (proc.stdout, proc.stderr):
            if pipe is not None:
                pipe.close()
        return b"", b""
    return stdout or b"", stderr or b""


def run_command(
    cmd: Sequence[str],
    *,
    timeout: float,
    env_overrides: Mapping[str, str] | None = None,
) -> CommandResult:
    """Run ``cmd`` with captured output and a hard wall-clock timeout.

    Args:
        cmd: ``[program, *args]``.  Never run through a shell.
        timeout: Seconds before the child and its descendants are killed.
        env_overrides: Extra variables layered over ``os.environ``.

    Returns:
        A ``CommandResult``.  Spawn failures and timeouts are reported
        in the result rather than raised.  If the child itself exited
        in time but a descendant kept its output open until the
        timeout, the child's exit status and output so far are
        returned (not ``timed_out``).
    """
    argv = tuple(str(part) for part in cmd)

    env = None
    if env_overrides:
        env = os.environ.copy()
        for key, value in env_overrides.items():
            env[key] = os.path.expandvars(value)

    logger.debug("Running: %s (timeout=%ss)", " ".join(argv), timeout)
    start = time.monotonic()

    try:
        proc = subprocess.Popen(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=env,
            start_new_session=_POSIX,
        )
    except OSError as e:
        logger.debug("Spawn failed for %s: %s", argv[0], e)
        return CommandResult(argv=argv, spawn_error=e)

    try:
        try:
            stdout, stderr = proc.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            leader_exited = proc.poll() is not None
            _kill(proc)
            stdout, stderr = _drain(proc)
            elapsed_ms = int((time.monotonic() - start) * 1000)
            if not leader_exited:
                logger.debug("Timed out after %ss: %s", timeout, argv[0])
                return CommandResult(argv=argv, timed_out=True, elapsed_ms=elapsed_ms)
            logger.debug(
                "%s exited %s but descendants held its output open; killed them",
                argv[0], proc.returncode,
            )
    finally:
        _kill(proc)

    elapsed_ms = int((time.monotonic() - start) * 1000)
    logger.debug("Exit %s after %dms: %s", proc.returncode, elapsed_ms, argv[0])
    return CommandResult(
        argv=argv,
        returncode=proc.returncode,
        stdout=stdout or b"",
        stderr=stderr or b"",
        elapsed_ms=elapsed_ms,
    )

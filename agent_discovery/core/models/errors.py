"""
Install errors — every failure carries a fix suggestion.

The ``fix`` string is what a front-end shows the user next to the
error, so it is mandatory and must never be empty.  Constructing an
``InstallError`` with a blank fix raises ``ValueError``.

Catch ``InstallError`` to handle all of them; new subclasses may be
added over time.
"""

from __future__ import annotations

from typing import Any

from agent_discovery.core.models.agent import AgentKind


class InstallError(Exception):
    """Base class for install pipeline failures."""

    error_type = "install_error"

    def __init__(self, message: str, *, fix: str) -> None:
        if not fix or not fix.strip():
            raise ValueError(f"{type(self).__name__} requires a non-empty fix suggestion")
        super().__init__(message)
        self.message = message
        self.fix = fix

    def fix_suggestion(self) -> str:
        """Actionable next step for the user."""
        return self.fix

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "error": self.message, "fix": self.fix}


class PrerequisiteMissing(InstallError):
    """A required tool (e.g. Node.js) is absent or could not be verified."""

    error_type = "prerequisite_missing"

    def __init__(self, name: str, *, fix: str, install_url: str | None = None) -> None:
        super().__init__(f"Missing prerequisite: {name}", fix=fix)
        self.name = name
        self.install_url = install_url


class PrerequisiteVersionMismatch(InstallError):
    """A required tool is present but too old."""

    error_type = "prerequisite_version_mismatch"

    def __init__(self, name: str, *, required: str, found: str, fix: str) -> None:
        super().__init__(
            f"Prerequisite version mismatch: {name} requires {required}, found {found}",
            fix=fix,
        )
        self.name = name
        self.required = required
        self.found = found

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "required": self.required, "found": self.found}


class NetworkError(InstallError):
    """The installer failed while talking to the network."""

    error_type = "network"

    def __init__(self, message: str, *, fix: str, stderr: str | None = None) -> None:
        super().__init__(f"Network error: {message}", fix=fix)
        self.stderr = stderr


class InstallPermissionDenied(InstallError):
    """The installer could not be started, or could not write, for lack of rights."""

    error_type = "permission_denied"

    def __init__(self, message: str, *, fix: str) -> None:
        super().__init__(f"Permission denied: {message}", fix=fix)


class InstallTimeout(InstallError):
    """The installer ran longer than the allowed time and was killed."""

    error_type = "timeout"

    def __init__(self, duration: float, *, fix: str) -> None:
        super().__init__(f"Installation timed out after {duration:g}s", fix=fix)
        self.duration = duration


class InstallerFailed(InstallError):
    """The installer exited non-zero, or could not be spawned at all."""

    error_type = "installer_failed"

    def __init__(
        self,
        message: str,
        *,
        fix: str,
        exit_code: int | None = None,
        stdout: str | None = None,
        stderr: str | None = None,
    ) -> None:
        super().__init__(f"Installation failed: {message}", fix=fix)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["exit_code"] = self.exit_code
        if self.stderr:
            data["stderr"] = self.stderr[-2000:]
        return data


class VerificationFailed(InstallError):
    """The installer succeeded but the agent is still not usable."""

    error_type = "verification_failed"

    def __init__(self, agent: AgentKind, *, fix: str) -> None:
        super().__init__("Verification failed: agent not detected after installation", fix=fix)
        self.agent = agent


class UnsupportedPlatform(InstallError):
    """The agent cannot be installed automatically on this platform."""

    error_type = "unsupported_platform"

    def __init__(self, agent: AgentKind, *, fix: str) -> None:
        super().__init__(f"Platform not supported for {agent.display_name}", fix=fix)
        self.agent = agent

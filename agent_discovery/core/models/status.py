"""
Detection models — what a probe observed about one agent.

``AgentStatus`` is a tagged union (discriminator: ``kind``):

    Installed        executable found and ran successfully
    NotInstalled     executable not found, or ``--version`` timed out
    VersionMismatch  found, but below a minimum a caller layered on top
    Unknown          probing failed for another reason

The union may grow.  Code that branches on it should always keep a
fallback branch for variants it does not know about.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Literal

from packaging.version import Version
from pydantic import BaseModel, ConfigDict, Field, field_serializer

from agent_discovery.core.models.agent import AgentKind


def _now() -> datetime:
    return datetime.now(UTC)


class DetectionError(str, Enum):
    """Closed set of reasons a probe can fail."""

    TIMEOUT = "timeout"
    PERMISSION_DENIED = "permission_denied"
    VERSION_PARSE_FAILED = "version_parse_failed"
    IO_ERROR = "io_error"

    @property
    def description(self) -> str:
        """Human-readable description, suitable for status lines."""
        return _ERROR_DESCRIPTIONS[self]


_ERROR_DESCRIPTIONS: dict[DetectionError, str] = {
    DetectionError.TIMEOUT: "Detection timed out",
    DetectionError.PERMISSION_DENIED: "Permission denied",
    DetectionError.VERSION_PARSE_FAILED: "Failed to parse version",
    DetectionError.IO_ERROR: "I/O error during detection",
}


class DetectOptions(BaseModel):
    """Knobs for a single detection call."""

    model_config = ConfigDict(frozen=True)

    timeout: float = Field(default=5.0, gt=0)   # seconds for ``--version``
    skip_version: bool = False                  # existence check only


class AgentStatus(BaseModel):
    """Base of the detection outcome union."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: str

    @property
    def is_usable(self) -> bool:
        """True only for ``Installed``: ready to run as-is."""
        return False

    @property
    def is_installed(self) -> bool:
        """True when a binary exists, whatever its version."""
        return False

    @property
    def path(self) -> Path | None:
        return None

    @property
    def version(self) -> Version | None:
        return None


class Installed(AgentStatus):
    """Agent found and its ``--version`` ran successfully.

    ``version`` is None when the output could not be parsed; the raw
    text is kept in ``raw_version`` so the agent stays usable.
    """

    kind: Literal["installed"] = "installed"
    executable: Path
    found_version: Version | None = None
    raw_version: str | None = None
    install_method: str | None = None
    last_verified: datetime = Field(default_factory=_now)
    # Reserved for callers that layer agent settings on top (e.g. a
    # configured reasoning effort).  Detection never sets it, and it is
    # kept out of serialized output.
    reasoning_level: str | None = Field(default=None, exclude=True)

    @field_serializer("found_version")
    def _dump_version(self, value: Version | None) -> str | None:
        return str(value) if value is not None else None

    @property
    def is_usable(self) -> bool:
        return True

    @property
    def is_installed(self) -> bool:
        return True

    @property
    def path(self) -> Path | None:
        return self.executable

    @property
    def version(self) -> Version | None:
        return self.found_version


class NotInstalled(AgentStatus):
    """Agent definitively not available."""

    kind: Literal["not_installed"] = "not_installed"


class VersionMismatch(AgentStatus):
    """Agent found, but older than a caller-imposed minimum."""

    kind: Literal["version_mismatch"] = "version_mismatch"
    found: Version
    required: Version
    executable: Path

    @field_serializer("found", "required")
    def _dump_versions(self, value: Version) -> str:
        return str(value)

    @property
    def is_installed(self) -> bool:
        return True

    @property
    def path(self) -> Path | None:
        return self.executable

    @property
    def version(self) -> Version | None:
        return self.found


class Unknown(AgentStatus):
    """Probing failed for a reason other than "not found"."""

    kind: Literal["unknown"] = "unknown"
    error: DetectionError
    message: str


class DetectionResult(BaseModel):
    """One agent's entry in a fan-out detection.

    Either ``status`` is set (success) or ``error`` + ``message`` are
    (failure: ``Unknown`` outcomes and crashed probes).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    agent: AgentKind
    status: Installed | NotInstalled | VersionMismatch | None = None
    error: DetectionError | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def success(cls, agent: AgentKind, status: AgentStatus) -> DetectionResult:
        """Wrap a non-``Unknown`` status."""
        return cls(agent=agent, status=status)

    @classmethod
    def failure(
        cls, agent: AgentKind, error: DetectionError, message: str = "",
    ) -> DetectionResult:
        """Record a detection that itself failed."""
        return cls(agent=agent, error=error, message=message or error.description)

    def to_dict(self) -> dict:
        data: dict = {"agent": self.agent.value, "ok": self.ok}
        if self.status is not None:
            data["status"] = self.status.model_dump(mode="json")
        if self.error is not None:
            data["error"] = self.error.value
            data["message"] = self.message
        return data

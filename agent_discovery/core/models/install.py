"""
Install models — catalog entries, options, and progress events.

The catalog types (``InstallInfo`` and friends) are read-only input:
the install pipeline never mutates them.  Progress events are created
and thrown away within a single ``install()`` call.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from agent_discovery.core.models.agent import AgentKind


class InstallLocation(str, Enum):
    """Where an install method puts the agent."""

    USER_LOCAL = "user_local"   # ~/.local, npm prefix, ... no root needed
    SYSTEM = "system"           # needs elevated privileges


class StructuredCommand(BaseModel):
    """A program invocation: ``<program> <args...>`` plus env overlay."""

    model_config = ConfigDict(frozen=True)

    program: str
    args: list[str] = Field(default_factory=list)
    env_vars: dict[str, str] = Field(default_factory=dict)

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]


class InstallMethod(BaseModel):
    """One way of installing an agent."""

    model_config = ConfigDict(frozen=True)

    command: StructuredCommand
    raw_command: str                 # copy-pasteable form for humans
    description: str = ""
    location: InstallLocation = InstallLocation.USER_LOCAL


class Prerequisite(BaseModel):
    """Something that must exist before installing (e.g. ``Node.js 18+``).

    The minimum major version, when any, is encoded in ``name`` as a
    trailing ``<N>+``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    check_command: str | None = None   # e.g. "node --version"
    install_url: str | None = None


class VerificationStep(BaseModel):
    """How a person can confirm the install by hand."""

    model_config = ConfigDict(frozen=True)

    command: str
    expected_pattern: str = r"\d+\.\d+\.\d+"
    success_message: str = ""


class InstallInfo(BaseModel):
    """Everything known about installing one agent on this platform."""

    model_config = ConfigDict(frozen=True)

    primary: InstallMethod
    alternatives: list[InstallMethod] = Field(default_factory=list)
    prerequisites: list[Prerequisite] = Field(default_factory=list)
    verification: VerificationStep
    is_supported: bool = True
    docs_url: str = ""


class InstallOptions(BaseModel):
    """Knobs for a single install call."""

    model_config = ConfigDict(frozen=True)

    timeout: float = Field(default=300.0, gt=0)   # seconds


# ── Progress events ─────────────────────────────────────────────


class InstallProgress(BaseModel):
    """Base of the progress event union (discriminator: ``stage``).

    Order for a successful install::

        Started → CheckingPrerequisites → (Downloading)* → Installing
                → Verifying → Completed
    """

    model_config = ConfigDict(frozen=True)

    stage: str

    @property
    def description(self) -> str:
        return _STAGE_DESCRIPTIONS.get(self.stage, self.stage)

    @property
    def is_complete(self) -> bool:
        return False


class Started(InstallProgress):
    stage: Literal["started"] = "started"
    agent: AgentKind


class CheckingPrerequisites(InstallProgress):
    stage: Literal["checking_prerequisites"] = "checking_prerequisites"


class Downloading(InstallProgress):
    stage: Literal["downloading"] = "downloading"
    agent: AgentKind
    estimated_remaining: float | None = None   # seconds, when known


class Installing(InstallProgress):
    stage: Literal["installing"] = "installing"
    agent: AgentKind


class Verifying(InstallProgress):
    stage: Literal["verifying"] = "verifying"
    agent: AgentKind


class Completed(InstallProgress):
    stage: Literal["completed"] = "completed"
    agent: AgentKind

    @property
    def is_complete(self) -> bool:
        return True


_STAGE_DESCRIPTIONS: dict[str, str] = {
    "started": "Starting installation",
    "checking_prerequisites": "Checking prerequisites",
    "downloading": "Downloading",
    "installing": "Installing",
    "verifying": "Verifying installation",
    "completed": "Installation complete",
}

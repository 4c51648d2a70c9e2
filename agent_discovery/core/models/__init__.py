"""
Domain models — Pydantic types for agent discovery.

All models are re-exported here for convenient access:

    from agent_discovery.core.models import AgentKind, Installed, InstallInfo
"""

from agent_discovery.core.models.agent import AgentKind
from agent_discovery.core.models.errors import (
    InstallError,
    InstallerFailed,
    InstallPermissionDenied,
    InstallTimeout,
    NetworkError,
    PrerequisiteMissing,
    PrerequisiteVersionMismatch,
    UnsupportedPlatform,
    VerificationFailed,
)
from agent_discovery.core.models.install import (
    CheckingPrerequisites,
    Completed,
    Downloading,
    InstallInfo,
    Installing,
    InstallLocation,
    InstallMethod,
    InstallOptions,
    InstallProgress,
    Prerequisite,
    Started,
    StructuredCommand,
    VerificationStep,
    Verifying,
)
from agent_discovery.core.models.settings import DetectSettings, InstallSettings, Settings
from agent_discovery.core.models.status import (
    AgentStatus,
    DetectionError,
    DetectionResult,
    DetectOptions,
    Installed,
    NotInstalled,
    Unknown,
    VersionMismatch,
)

__all__ = [
    "AgentKind",
    "AgentStatus",
    "CheckingPrerequisites",
    "Completed",
    "DetectOptions",
    "DetectSettings",
    "DetectionError",
    "DetectionResult",
    "Downloading",
    "InstallError",
    "InstallInfo",
    "InstallLocation",
    "InstallMethod",
    "InstallOptions",
    "InstallPermissionDenied",
    "InstallProgress",
    "InstallSettings",
    "InstallTimeout",
    "Installed",
    "InstallerFailed",
    "Installing",
    "NetworkError",
    "NotInstalled",
    "Prerequisite",
    "PrerequisiteMissing",
    "PrerequisiteVersionMismatch",
    "Settings",
    "Started",
    "StructuredCommand",
    "Unknown",
    "UnsupportedPlatform",
    "VerificationFailed",
    "VerificationStep",
    "VersionMismatch",
    "Verifying",
]

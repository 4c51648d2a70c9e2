"""
Agent Discovery — find, version-check and install AI coding agent CLIs.

    from agent_discovery import AgentKind, detect, detect_all

    status = detect(AgentKind.CLAUDE_CODE)
    if status.is_usable:
        print(status.path, status.version)
"""

__version__ = "0.1.0"

from agent_discovery.core.data.catalog import get_install_info  # noqa: E402, F401
from agent_discovery.core.models import (  # noqa: E402, F401
    AgentKind,
    AgentStatus,
    CheckingPrerequisites,
    Completed,
    DetectionError,
    DetectionResult,
    DetectOptions,
    Downloading,
    InstallError,
    InstallerFailed,
    InstallInfo,
    Installing,
    InstallLocation,
    InstallMethod,
    InstallOptions,
    InstallPermissionDenied,
    InstallProgress,
    InstallTimeout,
    Installed,
    NetworkError,
    NotInstalled,
    Prerequisite,
    PrerequisiteMissing,
    PrerequisiteVersionMismatch,
    Started,
    StructuredCommand,
    Unknown,
    UnsupportedPlatform,
    VerificationFailed,
    VerificationStep,
    VersionMismatch,
    Verifying,
)
from agent_discovery.core.services.detection import (  # noqa: E402, F401
    detect,
    detect_all,
    detect_all_with_options,
    detect_with_options,
)
from agent_discovery.core.services.install import (  # noqa: E402, F401
    SubstringClassifier,
    can_install,
    install,
)

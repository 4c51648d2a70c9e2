"""
L3 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ system state but never WRITE.
Subprocess calls, file lookups, env var reads — all read-only.
"""

from agent_discovery.core.services.detection.detector import (  # noqa: F401
    detect,
    detect_all,
    detect_all_with_options,
    detect_with_options,
)
from agent_discovery.core.services.detection.path_finder import (  # noqa: F401
    find_executable,
)
from agent_discovery.core.services.detection.platform import (  # noqa: F401
    POSIX,
    WINDOWS,
    PlatformProfile,
    current_platform,
)
from agent_discovery.core.services.detection.version_parser import (  # noqa: F401
    ParsedVersion,
    extract_major_minor,
    parse_version,
)
from agent_discovery.core.services.detection.version_probe import (  # noqa: F401
    ProbeError,
    check_version,
)

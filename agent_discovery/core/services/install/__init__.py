"""
L5 Orchestration — ``__init__.py`` re-exports the install pipeline.

Unlike detection, these functions WRITE: ``install`` runs the agent's
installer and changes the machine.  ``can_install`` is the read-only
pre-flight.
"""

from agent_discovery.core.services.install.executor import (  # noqa: F401
    SETTLE_DELAY,
    ProgressCallback,
    install,
)
from agent_discovery.core.services.install.failure import (  # noqa: F401
    DEFAULT_NETWORK_MARKERS,
    FailureClassifier,
    SubstringClassifier,
)
from agent_discovery.core.services.install.prereq import (  # noqa: F401
    can_install,
    check_install_info,
    check_prerequisite,
    required_major,
)

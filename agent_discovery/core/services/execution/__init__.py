"""
L4 Execution — ``__init__.py`` re-exports the subprocess runner.

Every child process spawned by this package goes through
``run_command``.
"""

from agent_discovery.core.services.execution.subprocess_runner import (  # noqa: F401
    CommandResult,
    run_command,
)

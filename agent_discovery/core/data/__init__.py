"""
L0 Data — ``__init__.py`` re-exports the agent install catalog.
"""

from agent_discovery.core.data.catalog import (  # noqa: F401
    AGENT_RECIPES,
    VERSION_PATTERN,
    get_install_info,
)

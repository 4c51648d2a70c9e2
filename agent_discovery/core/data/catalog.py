"""
L0 Data — Agent install recipes.

Pure data plus one builder.  Per-platform values are keyed by
platform profile name with ``_default`` as fallback, the same way for
every field that varies.  ``get_install_info`` resolves the platform
and validates the result into an ``InstallInfo``.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from agent_discovery.core.models.agent import AgentKind
from agent_discovery.core.models.install import InstallInfo
from agent_discovery.core.services.detection.platform import current_platform

VERSION_PATTERN = r"\d+\.\d+\.\d+"

_NODE_URL = "https://nodejs.org"


def _npm_global(package: str, description: str) -> dict[str, Any]:
    return {
        "command": {"program": "npm", "args": ["install", "-g", package]},
        "raw_command": f"npm install -g {package}",
        "description": description,
        "location": "user_local",
    }


AGENT_RECIPES: dict[AgentKind, dict[str, Any]] = {

    AgentKind.CLAUDE_CODE: {
        "primary": {
            "_default": {
                "command": {
                    "program": "bash",
                    "args": ["-c", "curl -fsSL https://claude.ai/install.sh | bash"],
                },
                "raw_command": "curl -fsSL https://claude.ai/install.sh | bash",
                "description": "Install via curl script (native installer)",
                "location": "user_local",
            },
            "windows": {
                "command": {
                    "program": "powershell",
                    "args": ["-Command", "irm https://claude.ai/install.ps1 | iex"],
                },
                "raw_command": "irm https://claude.ai/install.ps1 | iex",
                "description": "Install via PowerShell (native installer)",
                "location": "user_local",
            },
        },
        "alternatives": [
            _npm_global("@anthropic-ai/claude-code", "Install via npm (requires Node.js 18+)"),
        ],
        # Native installer has no prerequisites
        "prerequisites": [],
        "verification": {
            "command": "claude --version",
            "expected_pattern": VERSION_PATTERN,
            "success_message": "Claude Code is installed",
        },
        "is_supported": True,
        "docs_url": "https://docs.anthropic.com/en/docs/claude-code",
    },

    AgentKind.CODEX: {
        "primary": {
            "_default": _npm_global("@openai/codex", "Install via npm (Node.js package manager)"),
        },
        "alternatives": [],
        "prerequisites": [
            {"name": "Node.js 18+", "check_command": "node --version", "install_url": _NODE_URL},
        ],
        "verification": {
            "command": "codex --version",
            "expected_pattern": VERSION_PATTERN,
            "success_message": {
                "_default": "Codex is installed",
                "windows": "Codex is installed (Windows support is experimental; consider WSL)",
            },
        },
        "is_supported": True,
        "docs_url": "https://github.com/openai/codex",
    },

    AgentKind.OPENCODE: {
        "primary": {
            "_default": {
                "command": {
                    "program": "bash",
                    "args": ["-c", "curl -fsSL https://opencode.ai/install | bash"],
                },
                "raw_command": "curl -fsSL https://opencode.ai/install | bash",
                "description": "Install via curl script (native Go binary)",
                "location": "user_local",
            },
            "windows": {
                "command": {"program": "scoop", "args": ["install", "opencode"]},
                "raw_command": "scoop install opencode",
                "description": "Install via Scoop (Windows package manager)",
                "location": "user_local",
            },
        },
        "alternatives": [
            _npm_global("opencode-ai@latest", "Install via npm (requires Node.js)"),
        ],
        # Only the npm alternative needs Node.js
        "prerequisites": [],
        "verification": {
            "command": "opencode --version",
            "expected_pattern": VERSION_PATTERN,
            "success_message": "OpenCode is installed",
        },
        "is_supported": True,
        "docs_url": "https://github.com/anomalyco/opencode",
    },

    AgentKind.GEMINI: {
        "primary": {
            "_default": _npm_global("@google/gemini-cli", "Install via npm (Node.js package manager)"),
        },
        "alternatives": [],
        # Higher floor than the other npm agents
        "prerequisites": [
            {"name": "Node.js 20+", "check_command": "node --version", "install_url": _NODE_URL},
        ],
        "verification": {
            "command": "gemini --version",
            "expected_pattern": VERSION_PATTERN,
            "success_message": "Gemini CLI is installed",
        },
        "is_supported": True,
        "docs_url": "https://github.com/google-gemini/gemini-cli",
    },
}


def _resolve_platform(value: Any, platform: str) -> Any:
    """Pick the platform entry from a ``{"_default": ..., "<os>": ...}`` mapping."""
    if isinstance(value, Mapping) and "_default" in value:
        return value.get(platform, value["_default"])
    if isinstance(value, Mapping):
        return {k: _resolve_platform(v, platform) for k, v in value.items()}
    if isinstance(value, list):
        return [_resolve_platform(v, platform) for v in value]
    return value


def _merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def get_install_info(
    kind: AgentKind,
    *,
    platform: str | None = None,
    overrides: Mapping[AgentKind, Mapping[str, Any]] | None = None,
) -> InstallInfo:
    """Build the ``InstallInfo`` for ``kind`` on ``platform``.

    Args:
        kind: Agent.
        platform: Profile name (``posix`` / ``windows``).  Defaults to
            the running platform.
        overrides: Per-agent partial recipes, deep-merged over the
            built-in ones after platform resolution (see config
            ``agents:`` section).
    """
    platform = platform or current_platform().name
    recipe = _resolve_platform(AGENT_RECIPES[kind], platform)
    if overrides and kind in overrides:
        recipe = _merge(recipe, overrides[kind])
    return InstallInfo.model_validate(recipe)

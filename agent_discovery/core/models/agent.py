"""
Agent identity — which coding-agent CLIs we know how to find.

Each agent maps to a fixed executable name (what we look for on PATH)
and a display name (what we show to people).  New agents may be added
in later releases, so code that branches on ``AgentKind`` should keep
a fallback branch.
"""

from __future__ import annotations

from enum import Enum


class AgentKind(str, Enum):
    """Supported AI coding agents."""

    CLAUDE_CODE = "claude-code"
    CODEX = "codex"
    OPENCODE = "opencode"
    GEMINI = "gemini"

    @property
    def executable_name(self) -> str:
        """Command name searched for on PATH (e.g. ``claude``)."""
        return _EXECUTABLES[self]

    @property
    def display_name(self) -> str:
        """Human-readable name (e.g. ``Claude Code``)."""
        return _DISPLAY_NAMES[self]

    @classmethod
    def all(cls) -> list[AgentKind]:
        """Every known agent, in declaration order."""
        return list(cls)

    @classmethod
    def parse(cls, text: str) -> AgentKind:
        """Resolve a user-supplied agent name.

        Accepts the enum value (``claude-code``), the member name
        (``CLAUDE_CODE``, case-insensitive) or the executable name
        (``claude``).

        Raises:
            ValueError: If nothing matches.
        """
        needle = text.strip().lower()
        for kind in cls:
            if needle in (kind.value, kind.name.lower(), kind.executable_name):
                return kind
        known = ", ".join(k.value for k in cls)
        raise ValueError(f"Unknown agent '{text}'. Known agents: {known}")

    def __str__(self) -> str:
        return self.value


_EXECUTABLES: dict[AgentKind, str] = {
    AgentKind.CLAUDE_CODE: "claude",
    AgentKind.CODEX: "codex",
    AgentKind.OPENCODE: "opencode",
    AgentKind.GEMINI: "gemini",
}

_DISPLAY_NAMES: dict[AgentKind, str] = {
    AgentKind.CLAUDE_CODE: "Claude Code",
    AgentKind.CODEX: "Codex",
    AgentKind.OPENCODE: "OpenCode",
    AgentKind.GEMINI: "Gemini CLI",
}

"""
Tests for domain models — agents, statuses, progress events.
"""

import json
from pathlib import Path

import pytest
from packaging.version import Version

from agent_discovery.core.models import (
    AgentKind,
    CheckingPrerequisites,
    Completed,
    DetectionError,
    DetectionResult,
    DetectOptions,
    Downloading,
    Installed,
    Installing,
    InstallOptions,
    NotInstalled,
    Started,
    StructuredCommand,
    Unknown,
    VersionMismatch,
    Verifying,
)

# ── AgentKind ───────────────────────────────────────────────────


class TestAgentKind:
    def test_executable_names(self):
        assert AgentKind.CLAUDE_CODE.executable_name == "claude"
        assert AgentKind.CODEX.executable_name == "codex"
        assert AgentKind.OPENCODE.executable_name == "opencode"
        assert AgentKind.GEMINI.executable_name == "gemini"

    def test_display_names(self):
        assert AgentKind.CLAUDE_CODE.display_name == "Claude Code"
        assert AgentKind.GEMINI.display_name == "Gemini CLI"

    def test_all_in_declaration_order(self):
        assert AgentKind.all() == [
            AgentKind.CLAUDE_CODE,
            AgentKind.CODEX,
            AgentKind.OPENCODE,
            AgentKind.GEMINI,
        ]

    @pytest.mark.parametrize("text", ["claude-code", "CLAUDE_CODE", "claude", " Claude "])
    def test_parse_aliases(self, text):
        assert AgentKind.parse(text) is AgentKind.CLAUDE_CODE

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown agent"):
            AgentKind.parse("copilot")

    def test_str_is_value(self):
        assert str(AgentKind.CODEX) == "codex"


# ── Statuses ────────────────────────────────────────────────────


class TestAgentStatus:
    def test_installed_is_usable(self):
        status = Installed(executable=Path("/usr/bin/codex"), found_version=Version("0.87.0"))
        assert status.is_usable
        assert status.is_installed
        assert status.path == Path("/usr/bin/codex")
        assert status.version == Version("0.87.0")

    def test_not_installed(self):
        status = NotInstalled()
        assert not status.is_usable
        assert not status.is_installed
        assert status.path is None
        assert status.version is None

    def test_version_mismatch_installed_but_not_usable(self):
        status = VersionMismatch(
            found=Version("1.0.0"),
            required=Version("2.0.0"),
            executable=Path("/usr/local/bin/gemini"),
        )
        assert status.is_installed
        assert not status.is_usable
        assert status.version == Version("1.0.0")

    def test_unknown(self):
        status = Unknown(error=DetectionError.IO_ERROR, message="boom")
        assert not status.is_usable
        assert not status.is_installed

    def test_installed_json_dump(self):
        status = Installed(
            executable=Path("/opt/bin/claude"),
            found_version=Version("2.1.12"),
            raw_version="2.1.12",
            install_method="npm",
        )
        data = json.loads(status.model_dump_json())
        assert data["kind"] == "installed"
        assert data["found_version"] == "2.1.12"
        assert data["install_method"] == "npm"
        assert "reasoning_level" not in data

    def test_reasoning_level_reserved_for_callers(self):
        status = Installed(executable=Path("/opt/bin/codex"), reasoning_level="high")
        assert status.reasoning_level == "high"
        assert "reasoning_level" not in status.model_dump()

    def test_detect_options_defaults(self):
        options = DetectOptions()
        assert options.timeout == 5.0
        assert options.skip_version is False

    def test_detect_options_rejects_zero_timeout(self):
        with pytest.raises(ValueError):
            DetectOptions(timeout=0)


class TestDetectionResult:
    def test_success(self):
        result = DetectionResult.success(AgentKind.CODEX, NotInstalled())
        assert result.ok
        assert not result.failed
        assert result.to_dict() == {
            "agent": "codex",
            "ok": True,
            "status": {"kind": "not_installed"},
        }

    def test_failure_default_message(self):
        result = DetectionResult.failure(AgentKind.GEMINI, DetectionError.PERMISSION_DENIED)
        assert result.failed
        assert result.message == "Permission denied"
        data = result.to_dict()
        assert data["error"] == "permission_denied"
        assert "status" not in data

    @pytest.mark.parametrize("error", list(DetectionError))
    def test_every_error_has_description(self, error):
        assert error.description


# ── Install models ──────────────────────────────────────────────


class TestInstallModels:
    def test_structured_command_argv(self):
        cmd = StructuredCommand(program="npm", args=["install", "-g", "@openai/codex"])
        assert cmd.argv == ["npm", "install", "-g", "@openai/codex"]

    def test_install_options_default_timeout(self):
        assert InstallOptions().timeout == 300.0

    def test_progress_descriptions(self):
        kind = AgentKind.CODEX
        events = [
            Started(agent=kind),
            CheckingPrerequisites(),
            Downloading(agent=kind, estimated_remaining=3.0),
            Installing(agent=kind),
            Verifying(agent=kind),
            Completed(agent=kind),
        ]
        assert [e.description for e in events] == [
            "Starting installation",
            "Checking prerequisites",
            "Downloading",
            "Installing",
            "Verifying installation",
            "Installation complete",
        ]

    def test_only_completed_is_complete(self):
        assert Completed(agent=AgentKind.GEMINI).is_complete
        assert not Verifying(agent=AgentKind.GEMINI).is_complete
        assert not CheckingPrerequisites().is_complete

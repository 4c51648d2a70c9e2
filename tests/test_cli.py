"""
Tests for CLI commands — detect, info, can-install, install, global options.
"""

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from packaging.version import Version

from agent_discovery.core.models import (
    AgentKind,
    DetectionError,
    DetectionResult,
    Installed,
    InstallerFailed,
    NetworkError,
    NotInstalled,
    PrerequisiteVersionMismatch,
    Started,
)
from agent_discovery.main import cli

_DETECT_ALL = "agent_discovery.core.services.detection.detect_all"
_CAN_INSTALL = "agent_discovery.core.services.install.can_install"
_INSTALL = "agent_discovery.core.services.install.install"


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch):
    """No stray agents.yml, and leave the root logger as we found it."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("AGD_CONFIG", raising=False)
    monkeypatch.delenv("AGD_LOG_FILE", raising=False)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _results(**statuses) -> dict:
    out = {}
    for kind in AgentKind.all():
        status = statuses.get(kind.name, NotInstalled())
        if isinstance(status, DetectionError):
            out[kind] = DetectionResult.failure(kind, status)
        else:
            out[kind] = DetectionResult.success(kind, status)
    return out


class TestCLIGlobal:
    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Agent Discovery" in result.output
        for command in ("detect", "info", "can-install", "install"):
            assert command in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_bad_config(self, tmp_path: Path):
        config = tmp_path / "agents.yml"
        config.write_text("detect: [oops\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "info", "codex"])
        assert result.exit_code == 1
        assert "Invalid YAML" in result.output

    def test_unknown_agent(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "copilot"])
        assert result.exit_code == 2
        assert "unknown agent" in result.output


class TestDetectCommand:
    def test_json(self):
        installed = Installed(
            executable=Path("/usr/local/bin/claude"),
            found_version=Version("2.1.12"),
            raw_version="2.1.12",
        )
        with patch(_DETECT_ALL, return_value=_results(CLAUDE_CODE=installed)):
            result = CliRunner().invoke(cli, ["detect", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert list(data) == ["claude-code", "codex", "opencode", "gemini"]
        assert data["claude-code"]["status"]["found_version"] == "2.1.12"
        assert data["codex"]["status"]["kind"] == "not_installed"

    def test_human_output(self):
        installed = Installed(executable=Path("/usr/bin/codex"), raw_version="nightly")
        results = _results(CODEX=installed, GEMINI=DetectionError.PERMISSION_DENIED)
        with patch(_DETECT_ALL, return_value=results):
            result = CliRunner().invoke(cli, ["detect"])
        assert result.exit_code == 0
        assert "Codex" in result.output
        assert "nightly" in result.output
        assert "Permission denied" in result.output
        assert "OpenCode: not installed" in result.output

    def test_options_passed(self):
        with patch(_DETECT_ALL, return_value=_results()) as mock_detect:
            CliRunner().invoke(cli, ["detect", "--timeout", "1.5", "--skip-version"])
        options = mock_detect.call_args.args[0]
        assert options.timeout == 1.5
        assert options.skip_version is True
        assert mock_detect.call_args.kwargs["agents"] is None

    def test_config_defaults(self, tmp_path: Path):
        (tmp_path / "agents.yml").write_text("detect:\n  timeout: 9\n")
        with patch(_DETECT_ALL, return_value=_results()) as mock_detect:
            CliRunner().invoke(cli, ["detect"])
        assert mock_detect.call_args.args[0].timeout == 9

    def test_single_agent_missing_exits_1(self):
        results = {AgentKind.GEMINI: DetectionResult.success(AgentKind.GEMINI, NotInstalled())}
        with patch(_DETECT_ALL, return_value=results) as mock_detect:
            result = CliRunner().invoke(cli, ["detect", "gemini"])
        assert result.exit_code == 1
        assert mock_detect.call_args.kwargs["agents"] == [AgentKind.GEMINI]

    def test_single_agent_present(self):
        installed = Installed(executable=Path("/usr/bin/gemini"))
        results = {AgentKind.GEMINI: DetectionResult.success(AgentKind.GEMINI, installed)}
        with patch(_DETECT_ALL, return_value=results):
            result = CliRunner().invoke(cli, ["detect", "gemini"])
        assert result.exit_code == 0

    def test_zero_timeout_rejected(self):
        result = CliRunner().invoke(cli, ["detect", "--timeout", "0"])
        assert result.exit_code == 2


class TestInfoCommand:
    def test_human(self):
        result = CliRunner().invoke(cli, ["info", "codex"])
        assert result.exit_code == 0
        assert "npm install -g @openai/codex" in result.output
        assert "Node.js 18+" in result.output

    def test_json(self):
        result = CliRunner().invoke(cli, ["info", "gemini", "--json"])
        data = json.loads(result.output)
        assert data["agent"] == "gemini"
        assert data["prerequisites"][0]["name"] == "Node.js 20+"

    def test_config_override(self, tmp_path: Path):
        (tmp_path / "agents.yml").write_text(
            "agents:\n  gemini:\n    docs_url: https://example.invalid/docs\n"
        )
        result = CliRunner().invoke(cli, ["info", "gemini", "--json"])
        assert json.loads(result.output)["docs_url"] == "https://example.invalid/docs"


class TestCanInstallCommand:
    def test_ok(self):
        with patch(_CAN_INSTALL) as check:
            result = CliRunner().invoke(cli, ["can-install", "claude", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"agent": "claude-code", "ok": True}
        assert check.call_args.args[0] is AgentKind.CLAUDE_CODE

    def test_mismatch(self):
        error = PrerequisiteVersionMismatch(
            "Node.js 18+", required="18+", found="16.20", fix="Upgrade Node.js 18+ to version 18+",
        )
        with patch(_CAN_INSTALL, side_effect=error):
            result = CliRunner().invoke(cli, ["can-install", "codex"])
        assert result.exit_code == 1
        assert "requires 18+, found 16.20" in result.output
        assert "Upgrade Node.js" in result.output


class TestInstallCommand:
    def test_requires_confirmation(self):
        with patch(_INSTALL) as run:
            result = CliRunner().invoke(cli, ["install", "codex"], input="n\n")
        assert result.exit_code == 1
        assert "npm install -g @openai/codex" in result.output
        run.assert_not_called()

    def test_yes_skips_prompt(self):
        with patch(_INSTALL) as run:
            result = CliRunner().invoke(cli, ["install", "codex", "--yes", "--timeout", "60"])
        assert result.exit_code == 0
        assert "Codex installed" in result.output
        args = run.call_args.args
        assert args[0] is AgentKind.CODEX
        assert args[1].timeout == 60

    def test_progress_printed(self):
        def fake_install(kind, options, on_progress, **kwargs):
            on_progress(Started(agent=kind))

        with patch(_INSTALL, side_effect=fake_install):
            result = CliRunner().invoke(cli, ["install", "gemini", "-y"])
        assert "Starting installation" in result.output

    def test_failure_json(self):
        error = NetworkError(
            "Network error during installation",
            fix="Check your internet connection and try again",
        )
        with patch(_INSTALL, side_effect=error):
            result = CliRunner().invoke(cli, ["install", "opencode", "--yes", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["ok"] is False
        assert data["type"] == "network"
        assert data["fix"] == "Check your internet connection and try again"

    def test_failure_shows_stderr(self):
        error = InstallerFailed(
            "Installer exited with code 1",
            exit_code=1,
            stderr="EACCES: permission denied",
            fix="See installer output above for details",
        )
        with patch(_INSTALL, side_effect=error):
            result = CliRunner().invoke(cli, ["install", "codex", "--yes"])
        assert result.exit_code == 1
        assert "EACCES" in result.output
        assert "See installer output above" in result.output

    def test_config_markers_reach_classifier(self, tmp_path: Path):
        (tmp_path / "agents.yml").write_text("install:\n  network_markers: [proxy]\n")
        with patch(_INSTALL) as run:
            CliRunner().invoke(cli, ["install", "codex", "--yes"])
        classifier = run.call_args.kwargs["classifier"]
        assert classifier.is_network_failure("proxy refused the connection")
        assert "proxy" in classifier.markers

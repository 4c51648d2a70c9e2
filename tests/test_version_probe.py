"""
Tests for the ``--version`` probe against real (fake) executables.
"""

import os

import pytest

from agent_discovery.core.models import DetectionError
from agent_discovery.core.services.detection.version_probe import ProbeError, check_version

pytestmark = pytest.mark.skipif(os.name == "nt", reason="needs /bin/sh scripts")


class TestCheckVersion:
    def test_stdout(self, make_script):
        script = make_script("claude", 'echo "2.1.12 (Claude Code)"')
        assert check_version(script, timeout=5).strip() == "2.1.12 (Claude Code)"

    def test_receives_version_flag(self, make_script):
        script = make_script("codex", 'echo "args: $*"')
        assert check_version(script, timeout=5).strip() == "args: --version"

    def test_stderr_fallback(self, make_script):
        script = make_script("gemini", 'echo "gemini 0.1.5" >&2')
        assert check_version(script, timeout=5).strip() == "gemini 0.1.5"

    def test_nonexistent_path_is_io_error(self, tmp_path):
        with pytest.raises(ProbeError) as exc:
            check_version(tmp_path / "does-not-exist", timeout=5)
        assert exc.value.error is DetectionError.IO_ERROR

    def test_not_executable_is_permission_denied(self, make_script):
        script = make_script("locked", "echo 1.0.0", executable=False)
        with pytest.raises(ProbeError) as exc:
            check_version(script, timeout=5)
        assert exc.value.error is DetectionError.PERMISSION_DENIED

    def test_nonzero_exit_is_io_error(self, make_script):
        script = make_script("broken", "echo 1.0.0; exit 2")
        with pytest.raises(ProbeError) as exc:
            check_version(script, timeout=5)
        assert exc.value.error is DetectionError.IO_ERROR
        assert "exit status 2" in exc.value.detail

    def test_invalid_utf8(self, make_script):
        script = make_script("garbled", r"printf '\377\376 1.0.0'")
        with pytest.raises(ProbeError) as exc:
            check_version(script, timeout=5)
        assert exc.value.error is DetectionError.VERSION_PARSE_FAILED

    def test_timeout(self, make_script):
        script = make_script("slow", "sleep 30")
        with pytest.raises(ProbeError) as exc:
            check_version(script, timeout=0.2)
        assert exc.value.error is DetectionError.TIMEOUT

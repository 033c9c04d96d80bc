"""
Tests for the command runner — stderr classification, capture, env, detach.

Fake binaries are small shell scripts placed first on PATH.
"""

import subprocess
from pathlib import Path

import pytest

from conftest import write_script
from epos_opensource.adapters.mock import RecordingDisplay
from epos_opensource.adapters.shell.command import (
    Command,
    configure_platform,
    run_command,
    start_detached,
    uses_stderr_for_status,
)
from epos_opensource.core.errors import CommandError

STDERR_HELLO_OK = """\
    echo hello >&2
    exit 0
"""

STDERR_HELLO_FAIL = """\
    echo hello >&2
    exit 1
"""


class TestCommand:

    def test_requires_executable(self):
        with pytest.raises(ValueError):
            Command(args=[])

    @pytest.mark.parametrize("path, expected", [
        ("docker", True),
        ("/usr/local/bin/docker", True),
        ("C:/Program Files/Docker/docker.exe", True),
        ("/usr/bin/dockerd", False),
        ("kubectl", False),
        ("/usr/bin/other", False),
    ])
    def test_stderr_policy(self, path: str, expected: bool):
        assert uses_stderr_for_status(path) is expected


class TestBasicRuns:

    def test_true_captured(self, display: RecordingDisplay):
        assert run_command(Command(args=["true"]), capture=True, display=display) == ""
        assert display.messages == []

    def test_false_captured(self, display: RecordingDisplay):
        with pytest.raises(CommandError) as exc:
            run_command(Command(args=["false"]), capture=True, display=display)
        assert exc.value.returncode == 1
        assert "exit status 1" in str(exc.value)

    def test_missing_binary(self, display: RecordingDisplay):
        with pytest.raises(CommandError, match="failed to start"):
            run_command(Command(args=["epos-no-such-binary-xyz"]), display=display)

    def test_killed_by_signal(self, bin_dir: Path, display: RecordingDisplay):
        write_script(bin_dir, "suicide", "kill -9 $$\n")
        with pytest.raises(CommandError, match="terminated by signal 9"):
            run_command(Command(args=["suicide"]), capture=True, display=display)


class TestStdout:

    def test_capture_returns_stdout(self, bin_dir: Path, display: RecordingDisplay):
        write_script(bin_dir, "greet", "echo out\n")
        assert run_command(Command(args=["greet"]), capture=True, display=display) == "out\n"

    def test_capture_never_reaches_display(self, bin_dir: Path, display: RecordingDisplay):
        write_script(bin_dir, "greet", "echo out\n")
        run_command(Command(args=["greet"]), capture=True, display=display)
        assert display.output == ""

    def test_stream_forwards_stdout(self, bin_dir: Path, display: RecordingDisplay):
        write_script(bin_dir, "greet", "echo line1\nprintf 'partial'\n")
        assert run_command(Command(args=["greet"]), display=display) == ""
        assert display.output == "line1\npartial"

    def test_capture_failure_keeps_stdout(self, bin_dir: Path, display: RecordingDisplay):
        write_script(bin_dir, "half", "echo partial\nexit 4\n")
        with pytest.raises(CommandError) as exc:
            run_command(Command(args=["half"]), capture=True, display=display)
        assert exc.value.stdout == "partial\n"
        assert exc.value.returncode == 4


class TestStderrClassification:
    """docker stderr is status output; anyone else's is a warning or error."""

    def test_docker_stderr_streams(self, bin_dir: Path, display: RecordingDisplay):
        write_script(bin_dir, "docker", STDERR_HELLO_OK)
        run_command(Command(args=["docker"]), display=display)
        assert "hello" in display.output
        assert display.warnings == []
        assert display.errors == []

    def test_docker_stderr_shown_when_captured(self, bin_dir: Path, display: RecordingDisplay):
        write_script(bin_dir, "docker", STDERR_HELLO_OK)
        run_command(Command(args=["docker"]), capture=True, display=display)
        assert display.output == "hello\n"
        assert display.warnings == []

    def test_docker_failure_not_buffered(self, bin_dir: Path, display: RecordingDisplay):
        write_script(bin_dir, "docker", STDERR_HELLO_FAIL)
        with pytest.raises(CommandError):
            run_command(Command(args=["docker"]), display=display)
        assert "hello" in display.output
        assert display.errors == []

    def test_other_success_streamed_warns(self, bin_dir: Path, display: RecordingDisplay):
        write_script(bin_dir, "other", STDERR_HELLO_OK)
        run_command(Command(args=["other"]), display=display)
        assert display.warnings == ["hello"]
        assert display.output == ""

    def test_other_success_captured_is_silent(self, bin_dir: Path, display: RecordingDisplay):
        write_script(bin_dir, "other", STDERR_HELLO_OK)
        run_command(Command(args=["other"]), capture=True, display=display)
        assert display.messages == []

    @pytest.mark.parametrize("capture", [True, False])
    def test_other_failure_errors(self, bin_dir: Path, display: RecordingDisplay, capture: bool):
        write_script(bin_dir, "other", STDERR_HELLO_FAIL)
        with pytest.raises(CommandError, match="execution failed: exit status 1"):
            run_command(Command(args=["other"]), capture=capture, display=display)
        assert display.errors == ["hello"]
        assert display.warnings == []

    def test_policy_override(self, bin_dir: Path, display: RecordingDisplay):
        write_script(bin_dir, "other", STDERR_HELLO_OK)
        run_command(Command(args=["other"]), display=display, stderr_as_output=lambda exe: True)
        assert display.output == "hello\n"
        assert display.warnings == []


class TestEnvironmentAndCwd:

    def test_env_extends_parent(self, bin_dir: Path, display: RecordingDisplay, monkeypatch):
        monkeypatch.setenv("EPOS_INHERITED", "parent")
        write_script(bin_dir, "show", 'echo "$EPOS_INHERITED $EPOS_EXTRA"\n')
        out = run_command(
            Command(args=["show"], env={"EPOS_EXTRA": "child"}),
            capture=True,
            display=display,
        )
        assert out == "parent child\n"

    def test_env_overrides_parent(self, bin_dir: Path, display: RecordingDisplay, monkeypatch):
        monkeypatch.setenv("EPOS_VALUE", "parent")
        write_script(bin_dir, "show", 'echo "$EPOS_VALUE"\n')
        out = run_command(Command(args=["show"], env={"EPOS_VALUE": "child"}), capture=True, display=display)
        assert out == "child\n"

    def test_cwd(self, tmp_path: Path, display: RecordingDisplay):
        work = tmp_path / "work"
        work.mkdir()
        out = run_command(Command(args=["pwd"], cwd=work), capture=True, display=display)
        assert Path(out.strip()).resolve() == work.resolve()


class TestConfigurePlatform:

    def test_windows(self):
        kwargs: dict = {}
        env: dict = {}
        configure_platform(kwargs, env, system="Windows")
        assert kwargs["creationflags"] & 0x08000000
        assert env["COMPOSE_STATUS_STDOUT"] == "1"

    def test_windows_keeps_explicit_env(self):
        kwargs: dict = {}
        env = {"COMPOSE_STATUS_STDOUT": "0"}
        configure_platform(kwargs, env, system="Windows")
        assert env["COMPOSE_STATUS_STDOUT"] == "0"

    @pytest.mark.parametrize("system", ["Linux", "Darwin"])
    def test_elsewhere_untouched(self, system: str):
        kwargs: dict = {}
        env: dict = {}
        configure_platform(kwargs, env, system=system)
        assert kwargs == {}
        assert env == {}


class TestStartDetached:

    def test_returns_running_process(self):
        proc = start_detached(Command(args=["sh", "-c", "exit 3"]))
        assert proc.wait() == 3

    def test_caller_owns_pipes(self):
        proc = start_detached(Command(args=["sh", "-c", "echo detached"]), stdout=subprocess.PIPE)
        out, _ = proc.communicate()
        assert out == b"detached\n"

    def test_missing_binary(self):
        with pytest.raises(CommandError, match="failed to start"):
            start_detached(Command(args=["epos-no-such-binary-xyz"]))

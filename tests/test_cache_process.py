"""Tests for cache/process.py module.

Uses mocked subprocess for execution tests.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from incremental_cache.cache.process import SubprocessRunner
from incremental_cache.errors import ProcessLaunchError


class TestSubprocessRunner:
    """Tests for SubprocessRunner.run."""

    def test_returns_exit_code(self):
        """Should return the process exit status."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=3)

            assert SubprocessRunner().run(["docker", "version"]) == 3

    def test_streams_inherited_by_default(self):
        """Output should not be redirected unless quiet."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)

            SubprocessRunner().run(["docker", "import", "a.tar", "tag"])

            args, kwargs = mock_run.call_args
            assert args[0] == ["docker", "import", "a.tar", "tag"]
            assert kwargs["stdout"] is None
            assert kwargs["stderr"] is None
            assert kwargs["check"] is False

    def test_quiet_discards_output(self):
        """quiet=True should send stdout and stderr to DEVNULL."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)

            SubprocessRunner().run(["docker", "manifest", "inspect", "x"], quiet=True)

            _, kwargs = mock_run.call_args
            assert kwargs["stdout"] == subprocess.DEVNULL
            assert kwargs["stderr"] == subprocess.DEVNULL

    def test_launch_failure_raises(self):
        """Spawn errors should raise ProcessLaunchError."""
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError("No such file: 'docker'")

            with pytest.raises(ProcessLaunchError) as exc_info:
                SubprocessRunner().run(["docker", "version"])

            assert exc_info.value.code == "process_launch_error"
            assert exc_info.value.command == ["docker", "version"]
            assert "docker version" in str(exc_info.value)
            assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_accepts_tuple_args(self):
        """Any sequence of arguments should be accepted."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)

            SubprocessRunner().run(("true",))

            args, _ = mock_run.call_args
            assert args[0] == ["true"]

"""Local command execution session."""

from __future__ import annotations

import os
import subprocess
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import IO, List, Optional, Union

from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CommandResult:
    """Result of executing a local command."""
    command: str
    stdout: str
    stderr: str
    exit_status: int

    @property
    def ok(self) -> bool:
        return self.exit_status == 0

    @property
    def error_output(self) -> str:
        """Best text to show the operator when the command failed."""
        return self.stderr or self.stdout or f"exit status {self.exit_status}"


class LocalSession:
    """
    Runs shell commands in the project directory.

    Every stage goes through :meth:`run`, so exit status and output are
    captured the same way for git, npm and the publish helper.
    """

    def __init__(
        self,
        working_dir: Optional[Union[str, Path]] = None,
        default_timeout: Optional[int] = None,
    ) -> None:
        """
        Initialize local session.

        Args:
            working_dir: Working directory for commands. Defaults to the current directory.
            default_timeout: Seconds before a command is killed. None waits forever.
        """
        self.working_dir = str(working_dir or os.getcwd())
        self.default_timeout = default_timeout

    def run(
        self,
        command: str,
        *,
        timeout: Optional[int] = None,
        stream_output: bool = True,
    ) -> CommandResult:
        """
        Execute a command and wait for it to exit.

        Args:
            command: The command line, interpreted by the platform shell
            timeout: Overrides the session default timeout
            stream_output: Echo output to the terminal while capturing it

        Returns:
            CommandResult with stdout, stderr, and exit status
        """
        timeout = timeout if timeout is not None else self.default_timeout
        logger.debug("Running: %s (cwd=%s)", command, self.working_dir)

        if stream_output:
            return self._run_streaming(command, timeout)
        return self._run_blocking(command, timeout)

    def _run_blocking(self, command: str, timeout: Optional[int]) -> CommandResult:
        """Run command and capture its output silently."""
        try:
            result = subprocess.run(
                command,
                shell=True,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
                cwd=self.working_dir,
                env=self._get_env(),
            )
        except subprocess.TimeoutExpired:
            return CommandResult(
                command=command,
                stdout="",
                stderr=f"Command timed out after {timeout} seconds",
                exit_status=-2,
            )
        except OSError as exc:
            return CommandResult(command=command, stdout="", stderr=str(exc), exit_status=-1)

        return CommandResult(
            command=command,
            stdout=result.stdout.strip(),
            stderr=result.stderr.strip(),
            exit_status=result.returncode,
        )

    def _run_streaming(self, command: str, timeout: Optional[int]) -> CommandResult:
        """Run command, echoing output line by line while capturing it."""
        try:
            process = subprocess.Popen(
                command,
                shell=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                encoding="utf-8",
                errors="replace",
                cwd=self.working_dir,
                env=self._get_env(),
            )
        except OSError as exc:
            return CommandResult(command=command, stdout="", stderr=str(exc), exit_status=-1)

        stdout_chunks: List[str] = []
        stderr_chunks: List[str] = []

        readers = [
            threading.Thread(
                target=_pump, args=(process.stdout, stdout_chunks, sys.stdout), daemon=True
            ),
            threading.Thread(
                target=_pump, args=(process.stderr, stderr_chunks, sys.stderr), daemon=True
            ),
        ]
        for reader in readers:
            reader.start()

        try:
            process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()
            for reader in readers:
                reader.join(timeout=2)
            return CommandResult(
                command=command,
                stdout="".join(stdout_chunks).strip(),
                stderr=f"Command exceeded {timeout} seconds and was killed",
                exit_status=-2,
            )

        for reader in readers:
            reader.join()

        return CommandResult(
            command=command,
            stdout="".join(stdout_chunks).strip(),
            stderr="".join(stderr_chunks).strip(),
            exit_status=process.returncode,
        )

    def _get_env(self) -> dict:
        """Get environment variables for subprocess."""
        env = os.environ.copy()
        # npm 在非交互终端下不要弹出进度条和更新提示
        env.setdefault("NPM_CONFIG_UPDATE_NOTIFIER", "false")
        return env


def _pump(stream: Optional[IO[str]], sink: List[str], echo: IO[str]) -> None:
    if stream is None:
        return
    for line in stream:
        sink.append(line)
        echo.write(line)
        echo.flush()
    stream.close()

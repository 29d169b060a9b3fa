"""Git-based repository management."""

from __future__ import annotations

import shlex
from typing import Optional

from ..errors import CommandFailedError
from ..local.session import CommandResult, LocalSession


class GitCommandError(CommandFailedError):
    """Raised when a git command fails."""


class GitRepositoryManager:
    """Wraps `git` CLI commands used while preparing and publishing a project."""

    def __init__(self, session: LocalSession, git_binary: str = "git") -> None:
        self.session = session
        self.git_binary = git_binary

    def init_with_snapshot(self, message: str) -> None:
        """Initialize a repository and commit the whole working tree."""
        self._run("init")
        self._run("add .")
        self._run(f"commit -m {shlex.quote(message)}")

    def remote_url(self, remote: str = "origin") -> Optional[str]:
        result = self._query(f"config --get remote.{remote}.url")
        if not result.ok:
            return None
        return result.stdout.strip() or None

    def has_remote(self, remote: str = "origin") -> bool:
        return self._query(f"remote get-url {remote}").ok

    def user_name(self) -> Optional[str]:
        result = self._query("config --get user.name")
        if not result.ok:
            return None
        return result.stdout.strip() or None

    def _query(self, args: str) -> CommandResult:
        return self.session.run(f"{self.git_binary} {args}", stream_output=False)

    def _run(self, args: str) -> str:
        command = f"{self.git_binary} {args}"
        result = self.session.run(command)
        if not result.ok:
            raise GitCommandError(command, result.exit_status, result.error_output)
        return result.stdout

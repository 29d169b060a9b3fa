"""Exception types shared by the deployment stages."""

from __future__ import annotations


class DeployerError(RuntimeError):
    """Base class for failures the deployer reports to the operator."""


class ConfigurationError(DeployerError):
    """Raised when the deployer's own configuration file is invalid."""


class MissingToolError(DeployerError):
    """Raised when a required executable is not on PATH."""

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(f"Required tool '{tool}' is not installed or not on PATH")


class ManifestError(DeployerError):
    """Raised when package.json cannot be read or written."""


class CommandFailedError(DeployerError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, command: str, exit_code: int, stderr: str) -> None:
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(f"Command '{command}' failed with code {exit_code}: {stderr}")

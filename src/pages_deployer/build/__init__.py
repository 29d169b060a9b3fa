"""Build stage."""

from .runner import BUILD_COMMAND, INSTALL_COMMAND, BuildRunner

__all__ = ["BUILD_COMMAND", "INSTALL_COMMAND", "BuildRunner"]

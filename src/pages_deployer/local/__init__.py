"""Local execution: shell command session and tool probe."""

from .session import LocalSession, CommandResult
from .probe import LocalProbe, LocalToolFacts, describe_tool

__all__ = ["LocalSession", "CommandResult", "LocalProbe", "LocalToolFacts", "describe_tool"]

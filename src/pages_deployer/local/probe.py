"""Local tool probe: which executables the run can rely on."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from ..errors import MissingToolError
from ..utils.logging import get_logger

logger = get_logger(__name__)

# 工具的可读名称，用于错误提示
TOOL_LABELS = {
    "git": "Git",
    "node": "Node.js",
    "npm": "npm",
    "gh": "GitHub CLI",
}


@dataclass
class LocalToolFacts:
    """Which tools were found on PATH, and where."""

    locations: Dict[str, Optional[str]] = field(default_factory=dict)

    def has(self, tool: str) -> bool:
        return bool(self.locations.get(tool))

    @property
    def missing(self) -> List[str]:
        return [tool for tool, location in self.locations.items() if not location]

    def to_payload(self) -> dict:
        return {tool: self.has(tool) for tool in self.locations}


class LocalProbe:
    """Checks tool presence with a PATH lookup; never runs the tools."""

    def __init__(self, which: Callable[[str], Optional[str]] = shutil.which) -> None:
        self._which = which

    def has_command(self, tool: str) -> bool:
        return self._which(tool) is not None

    def collect(self, tools: Sequence[str]) -> LocalToolFacts:
        return LocalToolFacts(locations={tool: self._which(tool) for tool in tools})

    def require(self, tools: Sequence[str]) -> LocalToolFacts:
        """Raise MissingToolError for the first required tool that is absent."""
        facts = LocalToolFacts()
        for tool in tools:
            location = self._which(tool)
            if location is None:
                raise MissingToolError(tool)
            logger.debug("Found %s at %s", tool, location)
            facts.locations[tool] = location
        return facts


def describe_tool(tool: str) -> str:
    return TOOL_LABELS.get(tool, tool)

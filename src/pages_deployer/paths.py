"""File locations inside the project being published.

All paths are resolved against the project root (the working directory
by default):
- package.json          # project manifest
- vite.config.ts|js     # bundler configuration
- .git/                 # version-control marker
- dist/index.html       # build artifact entry point
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .config import ProjectConfig


@dataclass
class ProjectPaths:
    """Resolved locations of the files the deployer inspects."""

    root: Path
    manifest: Path
    bundler_configs: List[Path]
    git_dir: Path
    build_dir: Path
    entry_file: Path

    @classmethod
    def from_config(cls, project: ProjectConfig, root: Optional[Path] = None) -> "ProjectPaths":
        root = (root or Path.cwd()).resolve()
        build_dir = root / project.build_dir
        return cls(
            root=root,
            manifest=root / project.manifest,
            bundler_configs=[root / name for name in project.bundler_configs],
            git_dir=root / ".git",
            build_dir=build_dir,
            entry_file=build_dir / project.entry_file,
        )

    def existing_bundler_config(self) -> Optional[Path]:
        for candidate in self.bundler_configs:
            if candidate.exists():
                return candidate
        return None

    def relative_build_dir(self) -> str:
        """Build directory as written into commands and package.json."""
        try:
            return self.build_dir.relative_to(self.root).as_posix()
        except ValueError:
            return str(self.build_dir)

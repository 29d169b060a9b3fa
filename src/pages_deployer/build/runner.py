"""Dependency install and production build."""

from __future__ import annotations

from ..interaction import UserInteractionHandler
from ..local import LocalSession
from ..orchestrator.models import StageResult
from ..paths import ProjectPaths
from ..utils.logging import get_logger

logger = get_logger(__name__)

INSTALL_COMMAND = "npm install"
BUILD_COMMAND = "npm run build"


class BuildRunner:
    """Runs ``npm install`` and ``npm run build`` and verifies the artifact."""

    def __init__(
        self,
        session: LocalSession,
        paths: ProjectPaths,
        interaction_handler: UserInteractionHandler,
    ) -> None:
        self.session = session
        self.paths = paths
        self.interaction_handler = interaction_handler

    def install(self) -> StageResult:
        notify = self.interaction_handler.notify
        notify("Step 1: Install dependencies", "title")
        notify(f"Running: {INSTALL_COMMAND}", "step")
        result = self.session.run(INSTALL_COMMAND)
        if not result.ok:
            notify("Dependency installation failed", "error")
            return StageResult.failed("Dependency installation failed", result.error_output)
        notify("Dependencies installed", "success")
        return StageResult.success("Dependencies installed")

    def build(self) -> StageResult:
        notify = self.interaction_handler.notify
        notify("Step 2: Build project", "title")
        notify(f"Running: {BUILD_COMMAND}", "step")
        result = self.session.run(BUILD_COMMAND)
        if not result.ok:
            notify("Build failed", "error")
            notify(result.error_output, "info")
            return StageResult.failed("Build failed", result.error_output)
        notify("Build finished", "success")

        notify("Verifying build output...", "step")
        entry = self.paths.entry_file
        if not entry.is_file():
            # 构建命令成功但没有产物，同样视为失败
            message = f"Build failed: {self._display(entry)} does not exist"
            logger.error(message)
            notify(message, "error")
            return StageResult.failed(message)
        notify("Build output verified", "success")
        return StageResult.success(f"Built {self._display(entry)}")

    def _display(self, path) -> str:
        try:
            return path.relative_to(self.paths.root).as_posix()
        except ValueError:
            return str(path)

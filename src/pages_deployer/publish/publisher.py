"""Publishing the build output to GitHub Pages."""

from __future__ import annotations

import webbrowser
from typing import Callable, Optional

from ..config import ProjectConfig, ToolsConfig
from ..gitops import GitRepositoryManager
from ..interaction import InteractionRequest, QuestionCategory, UserInteractionHandler
from ..local import LocalProbe, LocalSession, LocalToolFacts
from ..orchestrator.models import StageResult
from ..paths import ProjectPaths
from ..utils.logging import get_logger
from .site_check import SiteChecker

logger = get_logger(__name__)

PUBLISH_COMMAND = "npm run deploy"


class Publisher:
    """Makes sure a remote exists, publishes, and reports the hosted URL."""

    def __init__(
        self,
        session: LocalSession,
        git: GitRepositoryManager,
        probe: LocalProbe,
        paths: ProjectPaths,
        project: ProjectConfig,
        tools: ToolsConfig,
        interaction_handler: UserInteractionHandler,
        site_checker: Optional[SiteChecker] = None,
        open_browser: bool = True,
        browser_opener: Callable[[str], bool] = webbrowser.open,
    ) -> None:
        self.session = session
        self.git = git
        self.probe = probe
        self.paths = paths
        self.project = project
        self.tools = tools
        self.interaction_handler = interaction_handler
        self.site_checker = site_checker
        self.open_browser = open_browser
        self.browser_opener = browser_opener
        # filled in by the probe stage; otherwise tools are looked up on demand
        self.tool_facts: Optional[LocalToolFacts] = None

    @property
    def fallback_command(self) -> str:
        return f"npx {self.project.publish_package} -d {self.paths.relative_build_dir()}"

    def ensure_remote(self, identity: str) -> StageResult:
        notify = self.interaction_handler.notify
        notify("Step 3: Publish to GitHub Pages", "title")

        remote = self.project.remote_name
        if self.git.has_remote(remote):
            notify(f"Remote '{remote}' is configured", "success")
            return StageResult.success("Remote configured")

        notify("No remote repository configured; a GitHub repository is needed first", "warning")
        create = self.interaction_handler.confirm(
            InteractionRequest(
                key="create_repo",
                question="Create a new GitHub repository?",
                category=QuestionCategory.DECISION,
            )
        )
        if not create:
            notify("Skipping repository creation", "info")
            return StageResult.success("Repository creation skipped")

        if self._tool_available(self.tools.repo_tool):
            return self._create_repository()
        return self._manual_repository_setup(identity)

    def _tool_available(self, tool: str) -> bool:
        if self.tool_facts is not None and tool in self.tool_facts.locations:
            return self.tool_facts.has(tool)
        return self.probe.has_command(tool)

    def _create_repository(self) -> StageResult:
        notify = self.interaction_handler.notify
        notify("Creating repository with GitHub CLI...", "step")
        command = (
            f"{self.tools.repo_tool} repo create {self.project.slug} "
            f"--public --push --source=. --remote={self.project.remote_name}"
        )
        result = self.session.run(command)
        if not result.ok:
            # 发布步骤仍会尝试，由它给出最终结果
            logger.warning("Repository creation failed: %s", result.error_output)
            notify(f"Repository creation failed: {result.error_output}", "warning")
            return StageResult.success("Repository creation failed; continuing")
        notify("Repository created", "success")
        return StageResult.success("Repository created")

    def _manual_repository_setup(self, identity: str) -> StageResult:
        notify = self.interaction_handler.notify
        slug = self.project.slug
        remote = self.project.remote_name
        notify("GitHub CLI is not installed; create the repository manually:", "warning")
        for line in (
            "1. Visit: https://github.com/new",
            f"2. Repository name: {slug}",
            "3. Visibility: Public",
            "4. Do not initialize with a README",
            "Then run:",
            f"   git remote add {remote} {self.project.repository_url(identity)}.git",
            f"   git push -u {remote} main",
        ):
            notify(line, "info")

        proceed = self.interaction_handler.confirm(
            InteractionRequest(
                key="continue_without_remote",
                question="Continue the deployment?",
                category=QuestionCategory.CONFIRMATION,
            )
        )
        if not proceed:
            return StageResult.cancelled("Deployment stopped before publishing")
        return StageResult.success("Continuing without an automatically created remote")

    def publish(self) -> StageResult:
        notify = self.interaction_handler.notify
        notify("Publishing...", "step")
        primary = self.session.run(PUBLISH_COMMAND)
        if primary.ok:
            notify("Published", "success")
            return StageResult.success("Published")

        notify("Publish failed", "error")
        notify(primary.error_output, "info")

        notify("Trying direct publish...", "warning")
        fallback = self.session.run(self.fallback_command)
        if not fallback.ok:
            notify("Direct publish failed as well", "error")
            return StageResult.failed("Publish failed", fallback.error_output)
        notify("Published", "success")
        return StageResult.success("Published with direct publish command")

    def finish(self, identity: str) -> str:
        """Report the hosted URL, optionally check it and open it. Returns the URL."""
        site_url = self.project.pages_url(identity)
        self.interaction_handler.present(
            "Deployment complete",
            [
                ("Project", self.project.display_name),
                ("Site", site_url),
                ("Source", self.project.repository_url(identity)),
                ("Next", "GitHub Pages can take 1-2 minutes to go live; refresh the page then"),
                ("Update", f"run `{PUBLISH_COMMAND}` again to republish"),
                ("Troubleshooting", "repository must be Public; check Settings -> Pages"),
            ],
        )

        if self.site_checker is not None:
            self.interaction_handler.notify(f"Waiting for {site_url} to come online...", "step")
            if self.site_checker.wait_until_live(site_url):
                self.interaction_handler.notify("Site is live", "success")
            else:
                self.interaction_handler.notify(
                    "Site is not reachable yet; GitHub Pages may still be building", "warning"
                )

        if self.open_browser and self.interaction_handler.confirm(
            InteractionRequest(
                key="open_browser",
                question="Open the site now?",
                category=QuestionCategory.OPTIONAL,
            )
        ):
            if not self.browser_opener(site_url):
                self.interaction_handler.notify(f"Could not open a browser; visit {site_url}", "warning")
        return site_url

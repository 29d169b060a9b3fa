"""High-level workflow: wires the stages together from configuration."""

from __future__ import annotations

import webbrowser
from pathlib import Path
from typing import Callable, Optional, Union

from .audit import ConfigurationAuditor, ProjectChecks
from .build import BuildRunner
from .config import AppConfig
from .gitops import GitRepositoryManager
from .identity import IdentityResolver
from .interaction import AutoResponseHandler, CLIInteractionHandler, UserInteractionHandler
from .local import LocalProbe, LocalSession
from .orchestrator import DeploymentOrchestrator, RunOutcome
from .paths import ProjectPaths
from .publish import Publisher, SiteChecker
from .utils.logging import get_logger

logger = get_logger(__name__)


def build_interaction_handler(config: AppConfig) -> UserInteractionHandler:
    if config.interaction.mode == "auto":
        # 自动模式下不打开浏览器
        return AutoResponseHandler(
            always_confirm=config.interaction.auto_answer,
            default_responses={"open_browser": "n"},
        )
    return CLIInteractionHandler()


class DeploymentWorkflow:
    """Coordinates a deployment of the project in ``project_dir``."""

    def __init__(
        self,
        config: AppConfig,
        project_dir: Optional[Union[str, Path]] = None,
        interaction_handler: Optional[UserInteractionHandler] = None,
        session: Optional[LocalSession] = None,
        probe: Optional[LocalProbe] = None,
        site_checker: Optional[SiteChecker] = None,
        browser_opener: Callable[[str], bool] = webbrowser.open,
    ) -> None:
        self.config = config
        self.paths = ProjectPaths.from_config(
            config.project, Path(project_dir) if project_dir else None
        )
        self.interaction_handler = interaction_handler or build_interaction_handler(config)
        self.session = session or LocalSession(
            working_dir=self.paths.root,
            default_timeout=config.tools.command_timeout,
        )
        self.probe = probe or LocalProbe()
        self.git = GitRepositoryManager(self.session)
        self.identity_resolver = IdentityResolver(
            self.git,
            remote=config.project.remote_name,
            placeholder=config.project.default_identity,
            override=config.project.identity_override,
        )

        if site_checker is None and config.publish.verify_site:
            site_checker = SiteChecker(
                attempts=config.publish.verify_attempts,
                interval=config.publish.verify_interval,
                timeout=config.publish.request_timeout,
            )

        checks = ProjectChecks(
            paths=self.paths,
            project=config.project,
            session=self.session,
            git=self.git,
            identity=self.identity_resolver.resolve,
            interaction_handler=self.interaction_handler,
        )
        self.orchestrator = DeploymentOrchestrator(
            project=config.project,
            probe=self.probe,
            required_tools=config.tools.required,
            auditor=ConfigurationAuditor(checks.table(), self.interaction_handler),
            identity_resolver=self.identity_resolver,
            builder=BuildRunner(self.session, self.paths, self.interaction_handler),
            publisher=Publisher(
                session=self.session,
                git=self.git,
                probe=self.probe,
                paths=self.paths,
                project=config.project,
                tools=config.tools,
                interaction_handler=self.interaction_handler,
                site_checker=site_checker,
                open_browser=config.interaction.open_browser,
                browser_opener=browser_opener,
            ),
            interaction_handler=self.interaction_handler,
            optional_tools=[config.tools.repo_tool],
        )

    def run_deploy(self) -> RunOutcome:
        logger.info("Preparing deployment of %s from %s", self.config.project.slug, self.paths.root)
        outcome = self.orchestrator.run()
        self._log_outcome(outcome)
        return outcome

    def run_check(self) -> RunOutcome:
        logger.info("Checking %s", self.paths.root)
        outcome = self.orchestrator.run_checks()
        self._log_outcome(outcome)
        return outcome

    def _log_outcome(self, outcome: RunOutcome) -> None:
        last = outcome.last_result
        detail = last.message if last else ""
        if outcome.exit_code == 0:
            logger.info("Run finished: %s %s", outcome.status.value, detail)
        else:
            logger.error("Run finished: %s %s", outcome.status.value, detail)

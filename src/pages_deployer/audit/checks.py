"""Configuration audit: ordered checks with optional corrective fixes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from ..config import ProjectConfig
from ..errors import CommandFailedError, DeployerError
from ..gitops import GitRepositoryManager
from ..interaction import UserInteractionHandler
from ..local import LocalSession
from ..paths import ProjectPaths
from ..utils.logging import get_logger
from . import manifest as manifest_io
from .templates import render_vite_config

logger = get_logger(__name__)

Predicate = Callable[[], bool]
Fix = Callable[[], Optional[str]]


class CheckStatus(Enum):
    PASSED = "passed"
    FIXED = "fixed"
    FAILED = "failed"
    FIX_FAILED = "fix_failed"


@dataclass
class ConfigCheck:
    """A named predicate over the project files, with an optional fix.

    The fix returns a short description of what it changed.
    """

    name: str
    predicate: Predicate
    fix: Optional[Fix] = None


@dataclass
class CheckOutcome:
    name: str
    status: CheckStatus
    detail: str = ""


@dataclass
class AuditReport:
    outcomes: List[CheckOutcome] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(outcome.status != CheckStatus.FAILED for outcome in self.outcomes)

    @property
    def failed(self) -> List[CheckOutcome]:
        return [o for o in self.outcomes if o.status == CheckStatus.FAILED]

    @property
    def fixed(self) -> List[CheckOutcome]:
        return [o for o in self.outcomes if o.status == CheckStatus.FIXED]

    @property
    def fix_failures(self) -> List[CheckOutcome]:
        return [o for o in self.outcomes if o.status == CheckStatus.FIX_FAILED]


class ConfigurationAuditor:
    """Evaluates every check in order; failures without a fix do not stop the pass."""

    def __init__(self, checks: List[ConfigCheck], interaction_handler: UserInteractionHandler) -> None:
        self.checks = checks
        self.interaction_handler = interaction_handler

    def run(self) -> AuditReport:
        report = AuditReport()
        for check in self.checks:
            report.outcomes.append(self._run_check(check))
        return report

    def _run_check(self, check: ConfigCheck) -> CheckOutcome:
        notify = self.interaction_handler.notify
        if check.predicate():
            notify(f"{check.name}: passed", "success")
            return CheckOutcome(check.name, CheckStatus.PASSED)

        notify(f"{check.name}: not satisfied", "warning")
        if check.fix is None:
            return CheckOutcome(check.name, CheckStatus.FAILED, "no automatic fix available")

        try:
            detail = check.fix() or "fixed"
        except DeployerError as exc:
            # the fix already ran; a later stage reports the real failure
            logger.warning("Fix for '%s' did not complete: %s", check.name, exc)
            notify(f"{check.name}: fix attempted ({exc})", "warning")
            return CheckOutcome(check.name, CheckStatus.FIX_FAILED, f"fix attempted: {exc}")

        notify(f"{check.name}: {detail}", "success")
        return CheckOutcome(check.name, CheckStatus.FIXED, detail)


class ProjectChecks:
    """The default check table for a Vite project published with gh-pages."""

    def __init__(
        self,
        paths: ProjectPaths,
        project: ProjectConfig,
        session: LocalSession,
        git: GitRepositoryManager,
        identity: Callable[[], str],
        interaction_handler: UserInteractionHandler,
    ) -> None:
        self.paths = paths
        self.project = project
        self.session = session
        self.git = git
        self.identity = identity
        self.interaction_handler = interaction_handler

    def table(self) -> List[ConfigCheck]:
        manifest_name = self.paths.manifest.name
        bundler_name = self.paths.bundler_configs[0].name
        package = self.project.publish_package
        return [
            ConfigCheck(manifest_name, self.manifest_exists),
            ConfigCheck(bundler_name, self.bundler_config_exists, self.write_bundler_config),
            ConfigCheck(f"{package} dependency", self.publish_dependency_declared, self.install_publish_dependency),
            ConfigCheck(f"{manifest_name} scripts", self.deploy_scripts_configured, self.write_deploy_scripts),
            ConfigCheck("Git repository", self.git_repository_exists, self.init_git_repository),
        ]

    # predicates

    def manifest_exists(self) -> bool:
        return self.paths.manifest.is_file()

    def bundler_config_exists(self) -> bool:
        return self.paths.existing_bundler_config() is not None

    def publish_dependency_declared(self) -> bool:
        manifest = self._read_manifest_quietly()
        return manifest is not None and manifest_io.declares_dependency(
            manifest, self.project.publish_package
        )

    def deploy_scripts_configured(self) -> bool:
        manifest = self._read_manifest_quietly()
        return manifest is not None and manifest_io.has_deploy_scripts(manifest)

    def git_repository_exists(self) -> bool:
        return self.paths.git_dir.exists()

    # fixes

    def write_bundler_config(self) -> str:
        target = self.paths.bundler_configs[0]
        self.interaction_handler.notify(f"Creating {target.name} with default settings...", "step")
        try:
            target.write_text(render_vite_config(self.project.slug), encoding="utf-8")
        except OSError as exc:
            raise DeployerError(f"Cannot write {target.name}: {exc}") from exc
        return f"created {target.name}"

    def install_publish_dependency(self) -> str:
        package = self.project.publish_package
        self.interaction_handler.notify(f"Installing {package}...", "step")
        command = f"npm install --save-dev {package}"
        result = self.session.run(command)
        if not result.ok:
            raise CommandFailedError(command, result.exit_status, result.error_output)
        return f"installed {package}"

    def write_deploy_scripts(self) -> str:
        self.interaction_handler.notify(f"Updating {self.paths.manifest.name}...", "step")
        manifest = manifest_io.read_manifest(self.paths.manifest)
        manifest_io.apply_deploy_scripts(
            manifest,
            publish_package=self.project.publish_package,
            build_dir=self.paths.relative_build_dir(),
            homepage=self.project.pages_url(self.identity()),
        )
        manifest_io.write_manifest(self.paths.manifest, manifest)
        return f"updated {self.paths.manifest.name}"

    def init_git_repository(self) -> str:
        self.interaction_handler.notify("Initializing Git repository...", "step")
        self.git.init_with_snapshot(self.project.initial_commit_message)
        return "initialized Git repository"

    def _read_manifest_quietly(self) -> Optional[dict]:
        try:
            return manifest_io.read_manifest(self.paths.manifest)
        except DeployerError as exc:
            logger.debug("Manifest unreadable: %s", exc)
            return None

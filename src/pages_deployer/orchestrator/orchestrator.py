"""Deployment orchestrator: runs the stages in order and stops at the first non-success."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Tuple

from ..audit import ConfigurationAuditor
from ..errors import DeployerError, MissingToolError
from ..identity import IdentityResolver
from ..interaction import InteractionRequest, QuestionCategory, UserInteractionHandler
from ..local import LocalProbe, LocalToolFacts, describe_tool
from .models import RunOutcome, StageRecord, StageResult, StageStatus

if TYPE_CHECKING:
    from ..build import BuildRunner
    from ..config import ProjectConfig
    from ..publish import Publisher

logger = logging.getLogger(__name__)

Stage = Tuple[str, Callable[[], StageResult]]


class DeploymentOrchestrator:
    """
    部署编排器

    Stages: probe tools, audit configuration, resolve identity, confirm,
    install, build, ensure remote, publish. Each stage returns a
    StageResult; FAILED or CANCELLED ends the run.
    """

    def __init__(
        self,
        project: "ProjectConfig",
        probe: LocalProbe,
        required_tools: Sequence[str],
        auditor: ConfigurationAuditor,
        identity_resolver: IdentityResolver,
        builder: "BuildRunner",
        publisher: "Publisher",
        interaction_handler: UserInteractionHandler,
        optional_tools: Sequence[str] = (),
    ) -> None:
        self.project = project
        self.probe = probe
        self.required_tools = list(required_tools)
        self.optional_tools = list(optional_tools)
        self.auditor = auditor
        self.identity_resolver = identity_resolver
        self.builder = builder
        self.publisher = publisher
        self.interaction_handler = interaction_handler
        self.identity: Optional[str] = None
        self.tool_facts: Optional[LocalToolFacts] = None

    def run(self) -> RunOutcome:
        self.interaction_handler.notify(f"{self.project.display_name}: GitHub Pages deployment", "title")
        outcome = self._run_stages(
            [
                ("probe", self.probe_tools),
                ("audit", self.audit_configuration),
                ("identity", self.resolve_identity),
                ("confirm", self.confirm_deployment),
                ("install", self.builder.install),
                ("build", self.builder.build),
                ("remote", self.ensure_remote),
                ("publish", self.publisher.publish),
            ]
        )
        outcome.identity = self.identity
        if outcome.status == StageStatus.SUCCESS:
            outcome.site_url = self.publisher.finish(self._require_identity())
        return outcome

    def run_checks(self) -> RunOutcome:
        """Probe tools and audit configuration only."""
        return self._run_stages(
            [
                ("probe", self.probe_tools),
                ("audit", self.audit_configuration),
            ]
        )

    def _run_stages(self, stages: List[Stage]) -> RunOutcome:
        outcome = RunOutcome(status=StageStatus.SUCCESS)
        for name, stage in stages:
            logger.debug("Starting stage %s", name)
            result = stage()
            outcome.stages.append(StageRecord(name, result))
            if result.status != StageStatus.SUCCESS:
                logger.info("Stage %s ended the run: %s (%s)", name, result.status.value, result.message)
                outcome.status = result.status
                break
        return outcome

    # stages

    def probe_tools(self) -> StageResult:
        notify = self.interaction_handler.notify
        notify("Checking system environment...", "step")
        try:
            facts = self.probe.require(self.required_tools)
        except MissingToolError as exc:
            message = f"{describe_tool(exc.tool)} is not installed; install it first"
            notify(message, "error")
            return StageResult.failed(message)

        optional = self.probe.collect(self.optional_tools)
        if optional.missing:
            logger.info("Optional tools not found: %s", ", ".join(optional.missing))
        facts.locations.update(optional.locations)
        logger.debug("Tool facts: %s", facts.to_payload())
        self.tool_facts = facts
        self.publisher.tool_facts = facts
        notify("Environment check passed", "success")
        return StageResult.success("All required tools found")

    def audit_configuration(self) -> StageResult:
        self.interaction_handler.notify("Checking configuration files", "title")
        report = self.auditor.run()
        if not report.ok:
            names = ", ".join(outcome.name for outcome in report.failed)
            self.interaction_handler.notify(
                "Configuration check failed; fix the problems above manually", "error"
            )
            return StageResult.failed(f"Configuration check failed: {names}")
        return StageResult.success(f"{len(report.fixed)} fix(es) applied")

    def resolve_identity(self) -> StageResult:
        self.identity = self.identity_resolver.resolve()
        self.interaction_handler.present(
            "Deployment information",
            [
                ("Project", self.project.display_name),
                ("Target", "GitHub Pages"),
                ("Site", self.project.pages_url(self.identity)),
                ("Repository", self.project.repository_url(self.identity)),
            ],
        )
        return StageResult.success(self.identity)

    def confirm_deployment(self) -> StageResult:
        proceed = self.interaction_handler.confirm(
            InteractionRequest(
                key="proceed",
                question="Start the deployment?",
                category=QuestionCategory.CONFIRMATION,
            )
        )
        if not proceed:
            self.interaction_handler.notify("Deployment cancelled", "info")
            return StageResult.cancelled()
        return StageResult.success("Confirmed")

    def ensure_remote(self) -> StageResult:
        return self.publisher.ensure_remote(self._require_identity())

    def _require_identity(self) -> str:
        if self.identity is None:
            raise DeployerError("Identity stage has not run; cannot resolve the site URL")
        return self.identity

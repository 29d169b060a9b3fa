"""Shared fixtures: a scripted command session and a ready-made project tree."""

import json
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

import pytest

from pages_deployer.config import AppConfig
from pages_deployer.interaction import ScriptedInteractionHandler
from pages_deployer.local import CommandResult, LocalProbe
from pages_deployer.paths import ProjectPaths
from pages_deployer.workflow import DeploymentWorkflow

Response = Union[int, CommandResult, Callable[[str], Union[int, CommandResult]]]

REMOTE_URL_QUERY = "git config --get remote.origin.url"
USER_NAME_QUERY = "git config --get user.name"
REMOTE_PROBE = "git remote get-url origin"


class StubSession:
    """Stands in for LocalSession: records commands, replays scripted results.

    Unknown commands succeed with empty output.
    """

    def __init__(self, responses: Optional[Dict[str, Response]] = None) -> None:
        self.responses: Dict[str, Response] = dict(responses or {})
        self.commands: List[str] = []

    def run(self, command: str, *, timeout=None, stream_output: bool = True) -> CommandResult:
        self.commands.append(command)
        response = self.responses.get(command, 0)
        if callable(response):
            response = response(command)
        if isinstance(response, CommandResult):
            return response
        stderr = "" if response == 0 else f"{command} failed"
        return CommandResult(command=command, stdout="", stderr=stderr, exit_status=response)


def output(command: str, stdout: str, exit_status: int = 0) -> CommandResult:
    return CommandResult(command=command, stdout=stdout, stderr="", exit_status=exit_status)


def probe_with(*tools: str) -> LocalProbe:
    present = set(tools)
    return LocalProbe(which=lambda tool: f"/usr/bin/{tool}" if tool in present else None)


def write_manifest(root: Path, **overrides) -> Path:
    manifest = {
        "name": "fantan-simulator",
        "version": "0.0.0",
        "scripts": {
            "dev": "vite",
            "build": "vite build",
            "predeploy": "npm run build",
            "deploy": "gh-pages -d dist",
        },
        "devDependencies": {"gh-pages": "^6.1.1", "vite": "^5.0.0"},
        "homepage": "https://octocat.github.io/fantan-simulator",
    }
    manifest.update(overrides)
    path = root / "package.json"
    path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    return path


def make_build_output(root: Path) -> Callable[[str], int]:
    """Response for ``npm run build`` that writes dist/index.html."""

    def _build(command: str) -> int:
        dist = root / "dist"
        dist.mkdir(exist_ok=True)
        (dist / "index.html").write_text("<!doctype html>", encoding="utf-8")
        return 0

    return _build


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project that passes every configuration check."""
    write_manifest(tmp_path)
    (tmp_path / "vite.config.ts").write_text("export default {}\n", encoding="utf-8")
    (tmp_path / ".git").mkdir()
    return tmp_path


@pytest.fixture
def config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def paths(project_dir: Path, config: AppConfig) -> ProjectPaths:
    return ProjectPaths.from_config(config.project, project_dir)


@pytest.fixture
def handler() -> ScriptedInteractionHandler:
    return ScriptedInteractionHandler()


def make_workflow(
    project_dir: Path,
    session: StubSession,
    handler: ScriptedInteractionHandler,
    probe: Optional[LocalProbe] = None,
    config: Optional[AppConfig] = None,
    opened: Optional[List[str]] = None,
    site_checker=None,
) -> DeploymentWorkflow:
    opened = opened if opened is not None else []

    def _open(url: str) -> bool:
        opened.append(url)
        return True

    return DeploymentWorkflow(
        config=config or AppConfig(),
        project_dir=project_dir,
        interaction_handler=handler,
        session=session,  # type: ignore[arg-type]
        probe=probe or probe_with("git", "node", "npm"),
        site_checker=site_checker,
        browser_opener=_open,
    )

"""Configuration loading utilities for pages-deployer."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

# Load .env file if it exists
load_dotenv()

_DEFAULT_CONFIG_PATH = Path("pages-deployer.json")

INTERACTION_MODES = ("cli", "auto")


@dataclass
class ProjectConfig:
    """Layout and naming of the project being published."""

    slug: str = "fantan-simulator"
    display_name: str = "Fantan Simulator"
    build_dir: str = "dist"
    entry_file: str = "index.html"
    manifest: str = "package.json"
    bundler_configs: List[str] = field(
        default_factory=lambda: ["vite.config.ts", "vite.config.js"]
    )
    publish_package: str = "gh-pages"
    pages_domain: str = "github.io"
    default_identity: str = "yourusername"
    remote_name: str = "origin"
    initial_commit_message: str = "Initial commit"
    identity_override: Optional[str] = None

    def pages_url(self, identity: str) -> str:
        return f"https://{identity}.{self.pages_domain}/{self.slug}"

    def repository_url(self, identity: str) -> str:
        return f"https://github.com/{identity}/{self.slug}"


@dataclass
class ToolsConfig:
    """External executables the run depends on."""

    required: List[str] = field(default_factory=lambda: ["git", "node", "npm"])
    repo_tool: str = "gh"
    command_timeout: Optional[int] = None  # None: wait for the command forever


@dataclass
class InteractionConfig:
    """Configuration for operator prompts."""

    mode: str = "cli"  # "cli" | "auto"
    auto_answer: bool = True
    open_browser: bool = True


@dataclass
class PublishConfig:
    """Settings for the post-publish site check."""

    verify_site: bool = False
    verify_attempts: int = 5
    verify_interval: float = 10.0
    request_timeout: float = 10.0


@dataclass
class AppConfig:
    """Top-level configuration."""

    project: ProjectConfig = field(default_factory=ProjectConfig)
    tools: ToolsConfig = field(default_factory=ToolsConfig)
    interaction: InteractionConfig = field(default_factory=InteractionConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "AppConfig":
        payload = _strip_comments(payload)
        unknown = set(payload) - {"project", "tools", "interaction", "publish", "log_level"}
        if unknown:
            raise ConfigurationError(
                "Unknown configuration section(s): " + ", ".join(sorted(unknown))
            )

        config = cls(
            project=_build_section(ProjectConfig, payload.get("project")),
            tools=_build_section(ToolsConfig, payload.get("tools")),
            interaction=_build_section(InteractionConfig, payload.get("interaction")),
            publish=_build_section(PublishConfig, payload.get("publish")),
            log_level=str(payload.get("log_level", "INFO")),
        )
        config.validate()
        return config

    def validate(self) -> None:
        if self.interaction.mode not in INTERACTION_MODES:
            raise ConfigurationError(
                f"interaction.mode must be one of {', '.join(INTERACTION_MODES)}, "
                f"got '{self.interaction.mode}'"
            )
        if not self.project.slug:
            raise ConfigurationError("project.slug must not be empty")
        if not self.project.bundler_configs:
            raise ConfigurationError("project.bundler_configs must list at least one file")
        if self.publish.verify_attempts < 1:
            raise ConfigurationError("publish.verify_attempts must be at least 1")


def _strip_comments(payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    # 以下划线开头的字段视为注释
    return {k: v for k, v in (payload or {}).items() if not k.startswith("_")}


def _build_section(section_cls: type, payload: Optional[Dict[str, Any]]) -> Any:
    if payload is not None and not isinstance(payload, dict):
        raise ConfigurationError(
            f"{section_cls.__name__} section must be a JSON object, got {type(payload).__name__}"
        )
    payload = _strip_comments(payload)
    known = {f.name for f in fields(section_cls)}
    unknown = set(payload) - known
    if unknown:
        raise ConfigurationError(
            f"Unknown key(s) for {section_cls.__name__}: " + ", ".join(sorted(unknown))
        )
    return section_cls(**payload)


def load_config(path: Optional[str] = None, project_dir: Optional[str] = None) -> AppConfig:
    """Load configuration from `path` or the default location.

    Without an explicit path, ``pages-deployer.json`` in `project_dir`
    (the working directory when omitted) is used when present, otherwise
    built-in defaults.

    Environment variables (higher priority than config file):
    - PAGES_DEPLOYER_SLUG: project slug (repository name and URL path)
    - PAGES_DEPLOYER_BUILD_DIR: build output directory
    - PAGES_DEPLOYER_IDENTITY: force the GitHub account used in URLs
    - PAGES_DEPLOYER_INTERACTION_MODE: "cli" or "auto"
    - PAGES_DEPLOYER_LOG_LEVEL: logging level name
    """

    if path:
        candidate = Path(path)
        if not candidate.is_file():
            raise FileNotFoundError(f"Could not find configuration file: {candidate}")
    else:
        candidate = Path(project_dir) / _DEFAULT_CONFIG_PATH if project_dir else _DEFAULT_CONFIG_PATH

    if candidate.is_file():
        with candidate.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ConfigurationError(f"Invalid JSON in {candidate}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"{candidate} must contain a JSON object")
        config = AppConfig.from_dict(data)
    else:
        config = AppConfig()

    _apply_env_overrides(config)
    config.validate()
    return config


def _apply_env_overrides(config: AppConfig) -> None:
    env_slug = os.getenv("PAGES_DEPLOYER_SLUG")
    if env_slug:
        config.project.slug = env_slug

    env_build_dir = os.getenv("PAGES_DEPLOYER_BUILD_DIR")
    if env_build_dir:
        config.project.build_dir = env_build_dir

    env_identity = os.getenv("PAGES_DEPLOYER_IDENTITY")
    if env_identity:
        config.project.identity_override = env_identity

    env_mode = os.getenv("PAGES_DEPLOYER_INTERACTION_MODE")
    if env_mode:
        config.interaction.mode = env_mode

    env_level = os.getenv("PAGES_DEPLOYER_LOG_LEVEL")
    if env_level:
        config.log_level = env_level

"""Command-line interface for pages-deployer."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional

from .config import AppConfig, load_config
from .utils.logging import configure_logging
from .workflow import DeploymentWorkflow


@dataclass
class CLIContext:
    """Context captured from CLI arguments."""

    config: AppConfig
    project_dir: Optional[str]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pages-deployer",
        description="Build a front-end project and publish it to GitHub Pages.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a JSON config file overriding defaults.",
    )
    parser.add_argument(
        "--project-dir",
        type=str,
        default=None,
        help="Project root containing package.json (default: current directory).",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    )

    subparsers = parser.add_subparsers(dest="command")
    # 不带子命令时执行 deploy
    parser.set_defaults(command="deploy", yes=False, no_browser=False, verify_site=False)
    deploy_parser = subparsers.add_parser(
        "deploy", help="Check, build and publish the project (default)"
    )
    deploy_parser.add_argument(
        "--yes", "-y", action="store_true",
        help="Answer yes to every prompt (the browser is never opened)",
    )
    deploy_parser.add_argument(
        "--no-browser", action="store_true",
        help="Do not offer to open the published site",
    )
    deploy_parser.add_argument(
        "--verify-site", action="store_true",
        help="Poll the published URL until it answers",
    )

    subparsers.add_parser(
        "check", help="Check tools and project configuration, applying automatic fixes"
    )

    return parser


def _build_context(args: argparse.Namespace) -> CLIContext:
    config = load_config(args.config, project_dir=args.project_dir)
    if args.log_level:
        config.log_level = args.log_level
    if args.yes:
        config.interaction.mode = "auto"
        config.interaction.auto_answer = True
    if args.no_browser:
        config.interaction.open_browser = False
    if args.verify_site:
        config.publish.verify_site = True
    config.validate()
    configure_logging(config.log_level)
    return CLIContext(config=config, project_dir=args.project_dir)


def dispatch_command(args: argparse.Namespace) -> int:
    context = _build_context(args)
    workflow = DeploymentWorkflow(
        config=context.config,
        project_dir=context.project_dir,
    )

    if args.command == "check":
        return workflow.run_check().exit_code

    if args.command == "deploy":
        return workflow.run_deploy().exit_code

    raise ValueError(f"Unsupported command: {args.command}")


def run_cli(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return dispatch_command(args)

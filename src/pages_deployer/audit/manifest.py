"""Reading and updating package.json."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from ..errors import ManifestError

DEPENDENCY_SECTIONS = ("devDependencies", "dependencies")


def read_manifest(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ManifestError(f"{path.name} not found in {path.parent}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise ManifestError(f"Cannot read {path.name}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"{path.name} must contain a JSON object")
    return data


def write_manifest(path: Path, data: Dict[str, Any]) -> None:
    try:
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Cannot write {path.name}: {exc}") from exc


def declares_dependency(manifest: Dict[str, Any], package: str) -> bool:
    for section in DEPENDENCY_SECTIONS:
        deps = manifest.get(section)
        if isinstance(deps, dict) and deps.get(package):
            return True
    return False


def has_deploy_scripts(manifest: Dict[str, Any]) -> bool:
    scripts = manifest.get("scripts")
    if not isinstance(scripts, dict):
        return False
    return bool(scripts.get("deploy")) and bool(scripts.get("predeploy"))


def deploy_scripts(publish_package: str, build_dir: str) -> Dict[str, str]:
    return {
        "predeploy": "npm run build",
        "deploy": f"{publish_package} -d {build_dir}",
    }


def apply_deploy_scripts(
    manifest: Dict[str, Any],
    *,
    publish_package: str,
    build_dir: str,
    homepage: str,
) -> Dict[str, Any]:
    """Set predeploy/deploy scripts and homepage, keeping every other key."""
    scripts = manifest.get("scripts")
    if not isinstance(scripts, dict):
        scripts = {}
    scripts.update(deploy_scripts(publish_package, build_dir))
    manifest["scripts"] = scripts
    manifest["homepage"] = homepage
    return manifest

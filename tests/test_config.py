import json
import unittest
from pathlib import Path

import pytest

from pages_deployer.config import AppConfig, load_config
from pages_deployer.errors import ConfigurationError


class ConfigDefaultsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = AppConfig()
        self.assertEqual(config.project.slug, "fantan-simulator")
        self.assertEqual(config.project.build_dir, "dist")
        self.assertEqual(config.tools.required, ["git", "node", "npm"])
        self.assertEqual(config.interaction.mode, "cli")
        self.assertIsNone(config.tools.command_timeout)
        self.assertFalse(config.publish.verify_site)

    def test_urls(self) -> None:
        project = AppConfig().project
        self.assertEqual(project.pages_url("octocat"), "https://octocat.github.io/fantan-simulator")
        self.assertEqual(project.repository_url("octocat"), "https://github.com/octocat/fantan-simulator")

    def test_from_dict_merges_sections_and_ignores_comments(self) -> None:
        config = AppConfig.from_dict(
            {
                "_comment": "ignored",
                "project": {"slug": "my-game", "_note": "ignored"},
                "interaction": {"mode": "auto"},
            }
        )
        self.assertEqual(config.project.slug, "my-game")
        self.assertEqual(config.project.build_dir, "dist")
        self.assertEqual(config.interaction.mode, "auto")

    def test_unknown_keys_are_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            AppConfig.from_dict({"project": {"slugg": "typo"}})
        with self.assertRaises(ConfigurationError):
            AppConfig.from_dict({"llm": {}})

    def test_invalid_values_are_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            AppConfig.from_dict({"interaction": {"mode": "gui"}})
        with self.assertRaises(ConfigurationError):
            AppConfig.from_dict({"publish": {"verify_attempts": 0}})

    def test_non_object_sections_are_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            AppConfig.from_dict({"project": "x"})
        with self.assertRaises(ConfigurationError):
            AppConfig.from_dict({"tools": ["git"]})


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "PAGES_DEPLOYER_SLUG",
        "PAGES_DEPLOYER_BUILD_DIR",
        "PAGES_DEPLOYER_IDENTITY",
        "PAGES_DEPLOYER_INTERACTION_MODE",
        "PAGES_DEPLOYER_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_load_config_without_file_uses_defaults(tmp_path, clean_env):
    clean_env.chdir(tmp_path)
    assert load_config() == AppConfig()


def test_load_config_reads_default_file_in_working_directory(tmp_path, clean_env):
    clean_env.chdir(tmp_path)
    Path("pages-deployer.json").write_text(json.dumps({"project": {"slug": "from-file"}}), encoding="utf-8")
    assert load_config().project.slug == "from-file"


def test_load_config_prefers_file_in_project_dir(tmp_path, clean_env):
    cwd = tmp_path / "elsewhere"
    project = tmp_path / "project"
    cwd.mkdir()
    project.mkdir()
    (cwd / "pages-deployer.json").write_text(json.dumps({"project": {"slug": "from-cwd"}}), encoding="utf-8")
    (project / "pages-deployer.json").write_text(
        json.dumps({"project": {"slug": "from-project"}}), encoding="utf-8"
    )
    clean_env.chdir(cwd)

    assert load_config(project_dir=str(project)).project.slug == "from-project"


def test_load_config_ignores_working_directory_file_for_other_project(tmp_path, clean_env):
    (tmp_path / "pages-deployer.json").write_text(json.dumps({"project": {"slug": "from-cwd"}}), encoding="utf-8")
    project = tmp_path / "project"
    project.mkdir()
    clean_env.chdir(tmp_path)

    assert load_config(project_dir=str(project)) == AppConfig()


def test_load_config_explicit_path(tmp_path, clean_env):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"tools": {"required": ["git"]}, "log_level": "DEBUG"}), encoding="utf-8")

    config = load_config(str(path))

    assert config.tools.required == ["git"]
    assert config.log_level == "DEBUG"


def test_load_config_missing_explicit_path(tmp_path, clean_env):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.json"))


def test_load_config_invalid_json(tmp_path, clean_env):
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_env_overrides(tmp_path, clean_env):
    clean_env.chdir(tmp_path)
    clean_env.setenv("PAGES_DEPLOYER_SLUG", "env-slug")
    clean_env.setenv("PAGES_DEPLOYER_BUILD_DIR", "build")
    clean_env.setenv("PAGES_DEPLOYER_IDENTITY", "octocat")
    clean_env.setenv("PAGES_DEPLOYER_INTERACTION_MODE", "auto")
    clean_env.setenv("PAGES_DEPLOYER_LOG_LEVEL", "WARNING")

    config = load_config()

    assert config.project.slug == "env-slug"
    assert config.project.build_dir == "build"
    assert config.project.identity_override == "octocat"
    assert config.interaction.mode == "auto"
    assert config.log_level == "WARNING"


def test_env_override_with_invalid_mode(tmp_path, clean_env):
    clean_env.chdir(tmp_path)
    clean_env.setenv("PAGES_DEPLOYER_INTERACTION_MODE", "robot")
    with pytest.raises(ConfigurationError):
        load_config()

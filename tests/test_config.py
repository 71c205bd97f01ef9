"""
Unit tests for configuration layering.
"""

from pathlib import Path

import pytest

from hurlkit.config import (
    InstallerConfig,
    load_config,
    load_config_file,
    load_environment,
    parse_bool,
)
from hurlkit.core.exceptions import ConfigError


@pytest.fixture
def config_dir(tmp_path):
    (tmp_path / "hurlkit.yaml").write_text(
        "hurl:\n"
        "  version: 4.1.0\n"
        "  disable-cache: true\n"
        "  install-root: /opt/tools\n"
        "  github_token: from-file\n"
    )
    return tmp_path


class TestParseBool:
    @pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", "on", " On ", True])
    def test_true(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "No", "off", False])
    def test_false(self, value):
        assert parse_bool(value) is False

    @pytest.mark.parametrize("value", ["", "maybe", "2"])
    def test_invalid(self, value):
        with pytest.raises(ConfigError, match="Invalid boolean"):
            parse_bool(value, "disable_cache")


class TestConfigFile:
    def test_reads_section(self, config_dir):
        values = load_config_file(config_dir / "hurlkit.yaml")

        assert values == {
            "version": "4.1.0",
            "disable_cache": True,
            "install_root": "/opt/tools",
            "github_token": "from-file",
        }

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "hurlkit.yaml"
        path.write_text("hurl:\n  version: '4.3.0'\n  colour: blue\n")

        assert load_config_file(path) == {"version": "4.3.0"}

    def test_missing_optional_file(self, tmp_path):
        assert load_config_file(tmp_path / "hurlkit.yaml") == {}

    def test_missing_required_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config_file(tmp_path / "hurlkit.yaml", required=True)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "hurlkit.yaml"
        path.write_text("hurl: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config_file(path)

    def test_invalid_section(self, tmp_path):
        path = tmp_path / "hurlkit.yaml"
        path.write_text("hurl: 4.3.0\n")

        with pytest.raises(ConfigError, match="section"):
            load_config_file(path)


class TestEnvironment:
    def test_hurlkit_variables(self):
        values = load_environment(
            {
                "HURLKIT_VERSION": "4.3.0",
                "HURLKIT_GITHUB_TOKEN": "token",
                "HURLKIT_DISABLE_CACHE": "yes",
                "HURLKIT_INSTALL_ROOT": "/opt",
                "HURLKIT_CACHE_DIR": "/var/cache/hurlkit",
            }
        )

        assert values == {
            "version": "4.3.0",
            "github_token": "token",
            "disable_cache": "yes",
            "install_root": "/opt",
            "cache_dir": "/var/cache/hurlkit",
        }

    def test_github_actions_inputs(self):
        values = load_environment(
            {
                "INPUT_VERSION": "latest",
                "INPUT_GITHUB-TOKEN": "input-token",
                "INPUT_DISABLE-CACHE": "false",
            }
        )

        assert values == {
            "version": "latest",
            "github_token": "input-token",
            "disable_cache": "false",
        }

    def test_precedence_and_empty_values(self):
        values = load_environment(
            {
                "HURLKIT_VERSION": "",
                "INPUT_VERSION": "4.3.0",
                "HURLKIT_GITHUB_TOKEN": "explicit",
                "GITHUB_TOKEN": "ambient",
            }
        )

        assert values["version"] == "4.3.0"
        assert values["github_token"] == "explicit"

    def test_github_token_fallback(self):
        assert load_environment({"GITHUB_TOKEN": "ambient"}) == {
            "github_token": "ambient"
        }


class TestLoadConfig:
    def test_defaults(self, tmp_path):
        config = load_config({"version": "4.3.0"}, environ={}, cwd=tmp_path)

        assert config == InstallerConfig(version="4.3.0")
        assert config.executable_name == "hurl"
        assert config.download_url == "https://github.com"
        assert config.api_url == "https://api.github.com"

    def test_file_layer(self, config_dir):
        config = load_config(environ={}, cwd=config_dir)

        assert config.version == "4.1.0"
        assert config.disable_cache is True
        assert config.install_root == Path("/opt/tools")
        assert config.github_token == "from-file"

    def test_environment_overrides_file(self, config_dir):
        config = load_config(
            environ={"HURLKIT_VERSION": "4.3.0", "HURLKIT_DISABLE_CACHE": "0"},
            cwd=config_dir,
        )

        assert config.version == "4.3.0"
        assert config.disable_cache is False

    def test_cli_overrides_environment(self, config_dir):
        config = load_config(
            {"version": "latest", "disable_cache": None},
            environ={"HURLKIT_VERSION": "4.3.0"},
            cwd=config_dir,
        )

        assert config.version == "latest"
        assert config.disable_cache is True

    def test_explicit_config_file(self, config_dir, tmp_path):
        other = tmp_path / "other"
        other.mkdir()

        config = load_config(
            config_file=config_dir / "hurlkit.yaml", environ={}, cwd=other
        )

        assert config.version == "4.1.0"

    def test_explicit_config_file_must_exist(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(config_file=tmp_path / "missing.yaml", environ={})

    def test_missing_version(self, tmp_path):
        with pytest.raises(ConfigError, match="No hurl version"):
            load_config(environ={}, cwd=tmp_path)

    def test_blank_version(self, tmp_path):
        with pytest.raises(ConfigError, match="No hurl version"):
            load_config({"version": "  "}, environ={}, cwd=tmp_path)

    def test_invalid_boolean(self, tmp_path):
        with pytest.raises(ConfigError, match="disable_cache"):
            load_config(
                environ={"HURLKIT_VERSION": "4.3.0", "HURLKIT_DISABLE_CACHE": "maybe"},
                cwd=tmp_path,
            )

    def test_paths_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("USERPROFILE", str(tmp_path))

        config = load_config(
            {"version": "4.3.0", "install_root": "~/tools"}, environ={}, cwd=tmp_path
        )

        assert config.install_root == tmp_path / "tools"

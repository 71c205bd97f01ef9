"""
Installer configuration.

Settings are layered, lowest priority first:

1. built-in defaults
2. the ``hurl:`` section of a YAML file (``hurlkit.yaml`` in the working
   directory, or the file given with ``--config``)
3. environment variables (``HURLKIT_*``, plus the ``INPUT_*`` variables
   GitHub Actions sets for action inputs)
4. command-line options

Example ``hurlkit.yaml``::

    hurl:
      version: latest
      disable-cache: false
      install-root: /opt/tools
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from hurlkit.core.exceptions import ConfigError
from hurlkit.release.locator import DEFAULT_DOWNLOAD_URL
from hurlkit.release.metadata import DEFAULT_API_URL

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "hurlkit.yaml"
CONFIG_SECTION = "hurl"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

# Environment variables per setting, highest priority first.
ENVIRONMENT_VARIABLES = {
    "version": ["HURLKIT_VERSION", "INPUT_VERSION"],
    "github_token": ["HURLKIT_GITHUB_TOKEN", "INPUT_GITHUB-TOKEN", "GITHUB_TOKEN"],
    "disable_cache": ["HURLKIT_DISABLE_CACHE", "INPUT_DISABLE-CACHE"],
    "install_root": ["HURLKIT_INSTALL_ROOT"],
    "cache_dir": ["HURLKIT_CACHE_DIR"],
}


@dataclass
class InstallerConfig:
    """Settings of one installation run."""

    version: str
    github_token: Optional[str] = None
    disable_cache: bool = False
    install_root: Optional[Path] = None
    cache_dir: Optional[Path] = None
    executable_name: str = "hurl"
    download_url: str = DEFAULT_DOWNLOAD_URL
    api_url: str = DEFAULT_API_URL


def parse_bool(value: Union[str, bool], name: str = "value") -> bool:
    """
    Parse a boolean setting.

    Raises:
        ConfigError: If ``value`` is not a recognised boolean string
    """
    if isinstance(value, bool):
        return value

    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {name}: '{value}'")


def load_config_file(path: Path, required: bool = False) -> Dict[str, Any]:
    """
    Read the ``hurl:`` section of a YAML configuration file.

    Keys may be written with dashes or underscores.

    Raises:
        ConfigError: If ``required`` and the file is missing, or the file is
            not valid YAML
    """
    if not path.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {path}")
        logger.debug(f"Config file not found (optional): {path}")
        return {}

    logger.debug(f"Loading configuration from {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Invalid configuration in {path}: expected a mapping")

    section = data.get(CONFIG_SECTION) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Invalid '{CONFIG_SECTION}' section in {path}")

    known = {f.name for f in fields(InstallerConfig)}
    values = {}
    for key, value in section.items():
        name = str(key).replace("-", "_")
        if name not in known:
            logger.warning(f"Ignoring unknown setting '{key}' in {path}")
            continue
        values[name] = value
    return values


def load_environment(environ: Mapping[str, str]) -> Dict[str, str]:
    """Collect settings from environment variables, ignoring empty values."""
    values = {}
    for name, variables in ENVIRONMENT_VARIABLES.items():
        for variable in variables:
            value = environ.get(variable)
            if value:
                values[name] = value
                break
    return values


def merge_settings(
    overrides: Optional[Dict[str, Any]] = None,
    config_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Merge the raw settings of every layer, without validation.

    Args:
        overrides: Command-line values; None entries are ignored
        config_file: Explicit configuration file (must exist)
        environ: Environment mapping (default: os.environ)
        cwd: Directory searched for ``hurlkit.yaml`` (default: current)
    """
    environ = os.environ if environ is None else environ

    if config_file is not None:
        values = load_config_file(Path(config_file), required=True)
    else:
        values = load_config_file(Path(cwd or Path.cwd()) / DEFAULT_CONFIG_FILE)

    values.update(load_environment(environ))
    values.update({k: v for k, v in (overrides or {}).items() if v is not None})
    return values


def load_config(
    overrides: Optional[Dict[str, Any]] = None,
    config_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> InstallerConfig:
    """
    Build the effective configuration.

    Arguments are those of :func:`merge_settings`.

    Returns:
        Merged InstallerConfig

    Raises:
        ConfigError: If a value is invalid or no version was given
    """
    values = merge_settings(overrides, config_file, environ, cwd)

    version = values.get("version")
    if version is None or not str(version).strip():
        raise ConfigError(
            "No hurl version given "
            "(use --hurl-version, HURLKIT_VERSION or the config file)"
        )
    values["version"] = str(version).strip()

    values["disable_cache"] = parse_bool(
        values.get("disable_cache", False), "disable_cache"
    )
    for name in ("install_root", "cache_dir"):
        if values.get(name) is not None:
            values[name] = Path(values[name]).expanduser()
    for name in ("github_token", "executable_name", "download_url", "api_url"):
        if values.get(name) is not None:
            values[name] = str(values[name])

    return InstallerConfig(**values)


__all__ = [
    "DEFAULT_CONFIG_FILE",
    "ENVIRONMENT_VARIABLES",
    "InstallerConfig",
    "parse_bool",
    "load_config_file",
    "load_environment",
    "merge_settings",
    "load_config",
]

"""
config.py

Responsibility: Load user configuration (YAML) into a typed, immutable model.

Lookup order for the file:
- `$CREATE_PACKAGE_CONFIG`
- `$XDG_CONFIG_HOME/create-package/config.yaml` (XDG_CONFIG_HOME defaults to ~/.config)
- built-in defaults when neither exists

Environment overrides (`CREATE_PACKAGE_GITHUB`, `CREATE_PACKAGE_TEMPLATE`,
`CREATE_PACKAGE_LOG_LEVEL`) win over the file. An unknown log level is a ConfigError.
A `host` other than github.com is treated as a GitHub Enterprise install.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from create_package.merger import DEFAULT_HOST, DEFAULT_LICENSE, DEFAULT_REGISTRY_URL

BUNDLED_TEMPLATE = Path(__file__).resolve().parent / "template"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Config:
    """Settings shared by every run; individual values can be overridden per environment."""

    github: str | None = None
    namespaces: tuple[str, ...] = ()
    template: Path = field(default=BUNDLED_TEMPLATE)
    host: str = DEFAULT_HOST
    registry_url: str = DEFAULT_REGISTRY_URL
    default_license: str = DEFAULT_LICENSE
    branch: str = "latest"
    private: bool = True
    log_level: str = "INFO"


def default_config_path(env: Mapping[str, str]) -> Path:
    base = env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "create-package" / "config.yaml"


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        raise ConfigError(f"`{key}` must be a string when provided.")
    return str(value).strip() or None


def _log_level(value: str) -> str:
    name = value.strip().upper()
    # getLevelName maps known names to their number and anything else to "Level <name>".
    if not isinstance(logging.getLevelName(name), int):
        raise ConfigError(f"Unknown log level: {value!r}")
    return name


def parse_config(data: Any) -> Config:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping/object at the top level.")

    namespaces_raw = data.get("namespaces") or []
    if isinstance(namespaces_raw, str):
        namespaces_raw = [namespaces_raw]
    if not isinstance(namespaces_raw, list):
        raise ConfigError("`namespaces` must be a list of strings when provided.")
    namespaces = tuple(str(ns).strip() for ns in namespaces_raw if str(ns).strip())

    private_raw = data.get("private", True)
    if not isinstance(private_raw, bool):
        raise ConfigError("`private` must be true or false.")

    template = _optional_str(data, "template")
    defaults = Config()
    return Config(
        github=_optional_str(data, "github"),
        namespaces=namespaces,
        template=Path(template).expanduser() if template else defaults.template,
        host=_optional_str(data, "host") or defaults.host,
        registry_url=_optional_str(data, "registry_url") or defaults.registry_url,
        default_license=_optional_str(data, "default_license") or defaults.default_license,
        branch=_optional_str(data, "branch") or defaults.branch,
        private=private_raw,
        log_level=_log_level(_optional_str(data, "log_level") or defaults.log_level),
    )


def _apply_env(config: Config, env: Mapping[str, str]) -> Config:
    overrides: dict[str, Any] = {}
    if env.get("CREATE_PACKAGE_GITHUB"):
        overrides["github"] = env["CREATE_PACKAGE_GITHUB"].strip()
    if env.get("CREATE_PACKAGE_TEMPLATE"):
        overrides["template"] = Path(env["CREATE_PACKAGE_TEMPLATE"]).expanduser()
    if env.get("CREATE_PACKAGE_LOG_LEVEL"):
        overrides["log_level"] = _log_level(env["CREATE_PACKAGE_LOG_LEVEL"])
    if not overrides:
        return config
    return replace(config, **overrides)


def load_config(path: str | Path | None = None, env: Mapping[str, str] | None = None) -> Config:
    """
    Load configuration from `path` (or the default lookup) and apply environment overrides.

    An explicitly named file that does not exist is an error; a missing default file is not.
    """
    env = os.environ if env is None else env
    explicit = path or env.get("CREATE_PACKAGE_CONFIG")
    cfg_path = Path(explicit).expanduser() if explicit else default_config_path(env)

    if not cfg_path.exists():
        if explicit:
            raise ConfigError(f"Config file does not exist: {cfg_path}")
        return _apply_env(Config(), env)

    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {cfg_path}: {e}") from e
    return _apply_env(parse_config(data), env)

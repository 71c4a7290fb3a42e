import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from rewire.errors import usage_error
from rewire.formatting.import_formatter import DEFAULT_COMMAND, DEFAULT_SELECT

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "REWIRE_CONFIG"

KNOWN_KEYS = {"suffix", "include_fakes", "fake_marker", "extra_skip_dirs", "log_level", "formatter"}


@dataclass
class FormatterConfig:
    command: List[str] = field(default_factory=lambda: list(DEFAULT_COMMAND))
    select: List[str] = field(default_factory=lambda: list(DEFAULT_SELECT))


@dataclass
class RewireConfig:
    suffix: str = ".py"
    include_fakes: bool = False
    fake_marker: str = "fake"
    extra_skip_dirs: List[str] = field(default_factory=list)
    log_level: str = "WARNING"
    formatter: FormatterConfig = field(default_factory=FormatterConfig)


def _as_list(value, key: str) -> List[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise usage_error(f"config key '{key}' must be a string or a list of strings")
    return [str(v) for v in value]


def config_from_dict(data: dict) -> RewireConfig:
    unknown = set(data) - KNOWN_KEYS
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))

    config = RewireConfig()
    if "suffix" in data:
        config.suffix = str(data["suffix"])
        if not config.suffix:
            raise usage_error("config key 'suffix' must not be empty")
    if "include_fakes" in data:
        config.include_fakes = bool(data["include_fakes"])
    if "fake_marker" in data:
        config.fake_marker = str(data["fake_marker"])
    if "extra_skip_dirs" in data:
        config.extra_skip_dirs = _as_list(data["extra_skip_dirs"] or [], "extra_skip_dirs")
    if "log_level" in data:
        config.log_level = str(data["log_level"]).upper()

    formatter = data.get("formatter") or {}
    if not isinstance(formatter, dict):
        raise usage_error("config key 'formatter' must be a mapping")
    if "command" in formatter:
        config.formatter.command = _as_list(formatter["command"], "formatter.command")
        if not config.formatter.command:
            raise usage_error("config key 'formatter.command' must not be empty")
    if "select" in formatter:
        config.formatter.select = _as_list(formatter["select"], "formatter.select")
    return config


def resolve_config_path(config_path: Optional[Path] = None) -> Optional[Path]:
    """
    Explicit path first, then $REWIRE_CONFIG (a local .env file is honored).

    Returns None when neither is set, meaning built-in defaults apply.
    """
    if config_path is not None:
        return Path(config_path)
    load_dotenv(find_dotenv(usecwd=True))
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return None


def load_config(config_path: Path = None) -> RewireConfig:
    config_path = resolve_config_path(config_path)
    if config_path is None:
        return RewireConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise usage_error(f"cannot read config {config_path}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise usage_error(f"invalid YAML in {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise usage_error(f"config {config_path} must contain a mapping")

    logger.debug("Loaded config from %s", config_path)
    return config_from_dict(data)

"""Configuration loading for gitsandbox."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import CONFIG_FILENAME, DEFAULT_FIXTURE_REPO, DOTGIT_NAME

DEFAULT_CONFIG = {
    "fixture_repo": DEFAULT_FIXTURE_REPO,
    "dotgit_name": DOTGIT_NAME,
    "keep_workspace": False,
    "verbose": False,
}

_STRING_KEYS = ("fixture_repo", "dotgit_name")
_BOOL_KEYS = ("keep_workspace", "verbose")


def validate_config(config: Dict) -> bool:
    """Basic structural check for configuration.

    Args:
        config: Configuration dictionary to validate

    Returns:
        True if config has valid structure, False otherwise
    """
    if not isinstance(config, dict):
        return False

    for key in _STRING_KEYS:
        if key in config and (not isinstance(config[key], str) or not config[key]):
            return False

    for key in _BOOL_KEYS:
        if key in config and not isinstance(config[key], bool):
            return False

    return True


def load_config(root_path: Path, logger: Optional[logging.Logger] = None) -> Dict[str, Any]:
    """Load the project configuration, merged over the defaults.

    Unlike the fixture data it describes, the config file is never written.

    Args:
        root_path: Directory to look for config.
        logger: Optional logger instance.

    Returns:
        The merged configuration dictionary.
    """
    config_path = root_path / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()

    if not config_path.exists():
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            loaded_config = json.load(f)
    except (OSError, ValueError) as e:
        if logger:
            logger.warning(f"Failed to read config: {e}")
        else:
            print(f"[Warning] Failed to read config: {e}")
        return config

    if not validate_config(loaded_config):
        if logger:
            logger.warning("Config file has invalid structure, using defaults")
        else:
            print("[Warning] Config file has invalid structure, using defaults")
        return config

    config.update(loaded_config)
    return config


def fixture_source(root_path: Path, config: Dict[str, Any]) -> Path:
    """Resolve the fixture repository directory named by ``config``."""
    return (root_path / config["fixture_repo"]).resolve()

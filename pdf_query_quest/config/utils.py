"""
Reading optional YAML/JSON configuration files, such as the prompt override.
"""

import json
import logging
import os
from typing import Any, Callable, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join("config", "prompts.yaml")

_LOADERS: Dict[str, Callable[[Any], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.load,
}


def read_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load a mapping from a YAML or JSON file.

    A bad file never stops the service: anything that cannot be read as a
    mapping is logged and comes back as an empty dict.

    Args:
        config_path: Path to the file. Defaults to CONFIG_PATH, then config/prompts.yaml

    Returns:
        The parsed mapping, or {} when unavailable
    """
    path = config_path or os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)
    loader = _LOADERS.get(os.path.splitext(path)[1].lower())

    if loader is None:
        logger.warning(f"Unsupported config file format: {path}")
        return {}
    if not os.path.isfile(path):
        logger.warning(f"Configuration file {path} not found")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = loader(f)
    except (yaml.YAMLError, json.JSONDecodeError, OSError) as e:
        logger.error(f"Could not load config file {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Configuration file {path} does not contain a mapping")
        return {}

    return data

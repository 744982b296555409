"""Configuration loader.

Reads configuration files in YAML format and returns a dictionary.
Configuration files reside in the `configs/` directory at the project
root; `configs/default.yaml` documents every recognised key.
"""

from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "configs" / "default.yaml"

LANELET_DEFAULTS: Dict[str, Any] = {
    "width": 3.75,
    "max_repair_attempts": 4,
    "up": [0.0, 1.0, 0.0],
}


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML configuration file into a dictionary.

    Parameters
    ----------
    path : str or Path
        Path to the YAML configuration file.

    Returns
    -------
    dict
        Parsed configuration dictionary.  Returns an empty dict if the
        file does not exist or cannot be parsed.
    """
    cfg_path = Path(path)
    if not cfg_path.is_file():
        return {}
    try:
        with open(cfg_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Could not read config %s: %s", cfg_path, exc)
        return {}


def lanelet_settings(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Return the `lanelet` section of a config merged over the defaults."""
    settings = dict(LANELET_DEFAULTS)
    settings.update(cfg.get("lanelet") or {})
    return settings

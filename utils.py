"""
utils.py — Core utilities for the risk parity comparison.
Provides config loading and output path handling.
"""

from pathlib import Path
from typing import Any, Dict, Union

import yaml


PROJECT_ROOT = Path(__file__).resolve().parent


def load_config(config_path: Union[str, Path] = None) -> Dict[str, Any]:
    """Load the master config.yaml file.

    Args:
        config_path: Optional override path. Defaults to PROJECT_ROOT/config.yaml.

    Returns:
        Dictionary of all configuration parameters.
    """
    if config_path is None:
        config_path = PROJECT_ROOT / "config.yaml"
    with open(config_path, "r") as f:
        config = yaml.safe_load(f)
    return config


def resolve_path(path: Union[str, Path]) -> Path:
    """Resolve a config path. Relative paths are taken from PROJECT_ROOT."""
    path = Path(path)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def ensure_directories(config: Dict[str, Any] = None) -> None:
    """Create all required output directories if they don't exist.

    Args:
        config: Config dict. If None, loads from default config.yaml.
    """
    if config is None:
        config = load_config()

    resolve_path(config["paths"]["output"]).parent.mkdir(parents=True, exist_ok=True)
    if config["output"].get("plot", False):
        resolve_path(config["paths"]["figures"]).mkdir(parents=True, exist_ok=True)

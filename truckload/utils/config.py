"""
Configuration Management

Load, save, and validate load planning configuration files.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..loading.dimensions import DEFAULT_TRUCK_DIMENSIONS, Dimensions, is_real_number
from ..loading.shelf_packer import ShelfPacker

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/default.yaml")

DEFAULT_CONFIG: Dict[str, Any] = {
    "truck": {
        "length": DEFAULT_TRUCK_DIMENSIONS.length,
        "width": DEFAULT_TRUCK_DIMENSIONS.width,
        "height": DEFAULT_TRUCK_DIMENSIONS.height,
        "unit": "cm",
    },
    "packing": {
        "gap": 0.0,
    },
    "logging": {
        "level": "INFO",
        "log_file": None,
    },
}


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Missing sections and keys fall back to the built-in defaults.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Configuration dictionary

    Example:
        >>> config = load_config("config/default.yaml")
        >>> print(config["truck"]["length"])
        1000.0
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    config = merge_configs(DEFAULT_CONFIG, loaded)
    _validate_config(config)

    return config


def save_config(config: Dict[str, Any], save_path: str):
    """
    Save configuration to YAML file.

    Args:
        config: Configuration dictionary
        save_path: Path to save YAML file
    """
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)

    with open(save_path, "w") as f:
        yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)

    logger.info("Configuration saved to: %s", save_path)


def merge_configs(base_config: Dict[str, Any],
                  override_config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge two configurations (override takes precedence).

    Args:
        base_config: Base configuration
        override_config: Override configuration

    Returns:
        Merged configuration
    """
    merged = copy.deepcopy(base_config)

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value

    return merged


def _require_number(section: str, key: str, value: Any, allow_zero: bool):
    if not is_real_number(value):
        raise ValueError(f"{section}.{key} must be a number, got {value!r}")
    if value < 0 or (value == 0 and not allow_zero):
        bound = "non-negative" if allow_zero else "positive"
        raise ValueError(f"{section}.{key} must be {bound}, got {value!r}")


def _validate_config(config: Dict[str, Any]):
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary

    Raises:
        ValueError: If configuration is invalid
    """
    for section in ("truck", "packing"):
        if not isinstance(config.get(section), dict):
            raise ValueError(f"Missing required section: {section}")

    truck = config["truck"]
    for key in ("length", "width", "height"):
        _require_number("truck", key, truck.get(key), allow_zero=False)

    _require_number("packing", "gap", config["packing"].get("gap"), allow_zero=True)

    log_config = config.get("logging") or {}
    level = log_config.get("level", "INFO")
    if not isinstance(logging.getLevelName(str(level).upper()), int):
        raise ValueError(f"logging.level is not a known level: {level!r}")

    logger.debug("Configuration validated successfully")


def get_default_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Get default configuration.

    Reads ``config/default.yaml`` (or ``config_path``) when it exists and
    otherwise returns a copy of the built-in defaults.

    Returns:
        Default configuration dictionary
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    if path.exists():
        return load_config(str(path))
    return copy.deepcopy(DEFAULT_CONFIG)


def truck_dimensions_from_config(config: Dict[str, Any]) -> Dimensions:
    """Build the truck interior from the ``truck`` section."""
    truck = config["truck"]
    return Dimensions(
        length=float(truck["length"]),
        width=float(truck["width"]),
        height=float(truck["height"]),
    )


def packer_from_config(config: Dict[str, Any]) -> ShelfPacker:
    """Build a ShelfPacker from the ``packing`` section."""
    return ShelfPacker(gap=float(config.get("packing", {}).get("gap", 0.0)))

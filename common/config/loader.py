"""
Centralized configuration loader.

The simulator's defaults live in photoelectric/config/settings.py. This
module layers an optional JSON override file on top of them:
1. Explicit path passed to load_config()
2. Path named by the PHOTOELECTRIC_CONFIG environment variable
3. No override (built-in defaults only)

Override files only need to contain the keys they change, e.g.:

    {"sweep": {"step_voltage": 0.05}, "experiment": {"noise_level": 0.1}}
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

_logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PHOTOELECTRIC_CONFIG"

# Singleton cache for loaded config
_config_cache: Optional[Dict[str, Any]] = None


class ConfigurationError(Exception):
    """Raised when configuration cannot be loaded."""
    pass


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge override dict into base dict.

    Args:
        base: Base dictionary
        override: Dictionary with values to override

    Returns:
        New merged dictionary (base is not modified)
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def get_default_config() -> Dict[str, Any]:
    """
    Build the full configuration dict from the built-in settings.

    Returns:
        Deep copy of the default settings, keyed by section
    """
    from photoelectric.config import settings

    return copy.deepcopy({
        "experiment": settings.DEFAULT_EXPERIMENT_PARAMS,
        "sweep": settings.SWEEP_CONFIG,
        "physics": settings.PHYSICS_MODEL_CONFIG,
        "export": settings.DATA_EXPORT_CONFIG,
        "plot": settings.PLOT_CONFIG,
        "validation": settings.VALIDATION_PATTERNS,
        "logging": settings.LOGGING_CONFIG,
    })


def load_override_file(path: Path) -> Dict[str, Any]:
    """
    Load a JSON override file.

    Args:
        path: Path to the JSON file

    Returns:
        Parsed override dict

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a JSON object
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in config file {path}: {e}")
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")

    _logger.debug(f"Loaded config override from {path}")
    return data


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration: defaults merged with an optional override file.

    Args:
        path: Override file path; falls back to $PHOTOELECTRIC_CONFIG

    Returns:
        Full config dict

    Raises:
        ConfigurationError: If an override file is named but cannot be used
    """
    config = get_default_config()

    override_path = path or os.environ.get(CONFIG_ENV_VAR)
    if override_path:
        override = load_override_file(Path(override_path))
        unknown = set(override) - set(config)
        if unknown:
            raise ConfigurationError(
                f"Unknown config section(s): {', '.join(sorted(unknown))}"
            )
        config = deep_merge(config, override)
        _logger.info(f"Using config override: {override_path}")

    return config


def get_config() -> Dict[str, Any]:
    """
    Get the full configuration dict.

    Loads config on first call, returns cached copy on subsequent calls.
    """
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def reload_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Force reload config from source (useful for testing).

    Returns:
        Freshly loaded config dict
    """
    global _config_cache
    _config_cache = load_config(path)
    return _config_cache

"""
Configuration loading module.

Provides access to the simulator configuration with optional JSON overrides.
"""

from .loader import (
    get_config,
    load_config,
    reload_config,
    deep_merge,
    ConfigurationError,
)

__all__ = ["get_config", "load_config", "reload_config", "deep_merge", "ConfigurationError"]

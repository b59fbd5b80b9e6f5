"""
ContigWeaver v0.1.0

Configuration management for ContigWeaver.

Author: ContigWeaver Development Team
License: MIT
"""

from .schema import (
    DEFAULT_CONFIG,
    ConfigValidationError,
    load_config,
    merge_overrides,
    save_config_template,
    validate_config,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigValidationError",
    "load_config",
    "merge_overrides",
    "save_config_template",
    "validate_config",
]

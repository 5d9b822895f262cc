"""
Utility functions and helpers.

This package contains utility functions for validation,
configuration, and other common operations.
"""

from .config import Settings, configure_logging, load_settings, settings_from_env
from .validators import (
    normalize_nameserver,
    validate_fqdn,
    validate_nameserver,
    validate_zone_name,
)

__all__ = [
    "Settings",
    "configure_logging",
    "load_settings",
    "settings_from_env",
    "normalize_nameserver",
    "validate_fqdn",
    "validate_nameserver",
    "validate_zone_name",
]

"""
Configuration module for the HoT attribution engine.

Provides the engine settings, YAML overrides and the spell data the
attribution rules key on.
"""

from .settings import (
    AttributionSettings,
    get_settings,
    reload_settings,
    settings,
)

__all__ = [
    "AttributionSettings",
    "get_settings",
    "reload_settings",
    "settings",
]

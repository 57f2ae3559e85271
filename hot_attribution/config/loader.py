"""
Configuration loader for attribution overrides.

Allows users to describe the analysed player's gear, traits and buffs and to
tweak engine settings via YAML configuration files.
"""

import yaml
import logging
from pathlib import Path
from typing import Dict, Optional, Any

from .settings import AttributionSettings
from ..models.combatant import CombatantRegistry

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads and applies custom configuration from YAML files."""

    @staticmethod
    def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to custom config file. If None, looks for:
                        1. hot_config.yaml in current directory
                        2. config/hot_config.yaml
                        3. ~/.hot_attribution/hot_config.yaml

        Returns:
            Configuration dictionary
        """
        search_paths = [
            Path("hot_config.yaml"),
            Path("config/hot_config.yaml"),
            Path.home() / ".hot_attribution" / "hot_config.yaml",
        ]

        if config_path:
            search_paths.insert(0, Path(config_path))

        for path in search_paths:
            if path.exists():
                try:
                    with open(path, "r") as f:
                        config = yaml.safe_load(f) or {}
                        logger.info(f"Loaded configuration from {path}")
                        return config
                except (OSError, yaml.YAMLError) as e:
                    logger.error(f"Failed to load config from {path}: {e}")

        logger.debug("No custom configuration file found, using defaults")
        return {}

    @staticmethod
    def apply_config(
        config: Dict[str, Any],
        settings: Optional[AttributionSettings] = None,
        registry: Optional[CombatantRegistry] = None,
    ) -> Dict[int, int]:
        """
        Apply custom configuration to settings and the combatant registry.

        Args:
            config: Configuration dictionary from YAML
            settings: Settings to update with the `settings` section
            registry: Registry whose selected player gets `traits`, `items` and `buffs`

        Returns:
            HoT duration overrides from the `durations` section (spell_id -> ms)
        """
        if settings is not None and "settings" in config:
            for key, value in (config["settings"] or {}).items():
                if not hasattr(settings, key):
                    logger.warning(f"Unknown setting {key}")
                    continue
                try:
                    current = getattr(settings, key)
                    setattr(settings, key, type(current)(value))
                    logger.debug(f"Set {key} = {value}")
                except (ValueError, TypeError) as e:
                    logger.warning(f"Invalid value for setting {key}: {e}")

        if registry is not None:
            if "traits" in config:
                for trait_id, rank in (config["traits"] or {}).items():
                    try:
                        registry.selected.traits[int(trait_id)] = int(rank)
                        logger.debug(f"Set trait {trait_id} rank {rank}")
                    except (ValueError, TypeError) as e:
                        logger.warning(f"Invalid trait {trait_id}: {e}")

            if "items" in config:
                for item_id in config["items"] or []:
                    try:
                        registry.selected.items.add(int(item_id))
                        logger.debug(f"Added item ID: {item_id}")
                    except (ValueError, TypeError) as e:
                        logger.warning(f"Invalid item ID {item_id}: {e}")

            if "buffs" in config:
                for buff_id in config["buffs"] or []:
                    try:
                        registry.selected.buffs.add(int(buff_id))
                        logger.debug(f"Added buff ID: {buff_id}")
                    except (ValueError, TypeError) as e:
                        logger.warning(f"Invalid buff ID {buff_id}: {e}")

        durations = {}
        if "durations" in config:
            for spell_id, duration in (config["durations"] or {}).items():
                try:
                    durations[int(spell_id)] = int(duration)
                    logger.debug(f"Duration override: {spell_id} = {duration}ms")
                except (ValueError, TypeError) as e:
                    logger.warning(f"Invalid duration for {spell_id}: {e}")

        logger.info("Custom configuration applied successfully")
        return durations


def load_and_apply_config(
    config_path: Optional[str] = None,
    settings: Optional[AttributionSettings] = None,
    registry: Optional[CombatantRegistry] = None,
) -> Dict[int, int]:
    """
    Load and apply configuration in one step.

    Args:
        config_path: Optional path to custom config file
        settings: Settings to update
        registry: Combatant registry to update

    Returns:
        HoT duration overrides
    """
    loader = ConfigLoader()
    config = loader.load_config(config_path)
    if not config:
        return {}
    return loader.apply_config(config, settings=settings, registry=registry)

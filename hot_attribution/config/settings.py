"""
Configuration settings for the HoT attribution engine.

Handles environment variables and the tunable constants of attribution:
the cast-to-application buffer, the pandemic refresh factor, the Tier21 proc
count and the mastery model.
"""

import os
import logging
from dataclasses import dataclass

# saw a few cases of taking close to 150ms from cast -> applybuff
DEFAULT_BUFFER_MS = 150
DEFAULT_PANDEMIC_FACTOR = 1.3
DEFAULT_T21_PROC_COUNT = 5
DEFAULT_MASTERY_PER_STACK = 0.0


@dataclass
class AttributionSettings:
    """Attribution engine settings."""

    buffer_ms: int = DEFAULT_BUFFER_MS
    pandemic_factor: float = DEFAULT_PANDEMIC_FACTOR
    t21_proc_count: int = DEFAULT_T21_PROC_COUNT
    mastery_per_stack: float = DEFAULT_MASTERY_PER_STACK
    log_level: str = "info"

    @classmethod
    def from_env(cls) -> "AttributionSettings":
        """Load attribution settings from environment variables."""
        return cls(
            buffer_ms=int(os.getenv("HOT_BUFFER_MS", str(DEFAULT_BUFFER_MS))),
            pandemic_factor=float(os.getenv("HOT_PANDEMIC_FACTOR", str(DEFAULT_PANDEMIC_FACTOR))),
            t21_proc_count=int(os.getenv("HOT_T21_PROC_COUNT", str(DEFAULT_T21_PROC_COUNT))),
            mastery_per_stack=float(
                os.getenv("HOT_MASTERY_PER_STACK", str(DEFAULT_MASTERY_PER_STACK))
            ),
            log_level=os.getenv("LOG_LEVEL", "info").lower(),
        )

    def setup_logging(self):
        """Configure logging based on settings."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def validate(self):
        """Validate configuration settings."""
        errors = []

        if self.buffer_ms < 0:
            errors.append(f"Buffer must not be negative: {self.buffer_ms}")

        if self.pandemic_factor < 1.0:
            errors.append(f"Pandemic factor must be at least 1.0: {self.pandemic_factor}")

        if self.t21_proc_count < 0:
            errors.append(f"Tier21 proc count must not be negative: {self.t21_proc_count}")

        if self.mastery_per_stack < 0:
            errors.append(f"Mastery per stack must not be negative: {self.mastery_per_stack}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def log_configuration(self):
        """Log current configuration."""
        logger = logging.getLogger(__name__)

        logger.info("=== Attribution Configuration ===")
        logger.info(f"Buffer: {self.buffer_ms}ms")
        logger.info(f"Pandemic Factor: {self.pandemic_factor}")
        logger.info(f"Tier21 Proc Count: {self.t21_proc_count}")
        logger.info(f"Mastery Per Stack: {self.mastery_per_stack:.2%}")
        logger.info(f"Log Level: {self.log_level}")
        logger.info("=== End Configuration ===")


# Global settings instance
settings = AttributionSettings.from_env()


def get_settings() -> AttributionSettings:
    """Get the global settings instance."""
    return settings


def reload_settings() -> AttributionSettings:
    """Reload settings from environment variables."""
    global settings
    settings = AttributionSettings.from_env()
    return settings

"""Configuration management with Pydantic validation.

Provides type-safe configuration with:
- Pydantic models for validation
- YAML file persistence
- Defaults matching a classic 20px-dot canvas display
"""

import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DrawMode = Literal["circle", "rectangle"]
LogFormat = Literal["simple", "structured"]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# =============================================================================
# Configuration Models
# =============================================================================


class DisplayConfig(BaseModel):
    """Dot-matrix display configuration."""

    dot_size: int = Field(20, ge=1, description="Pixel footprint of one dot")
    refresh: int = Field(50, ge=1, description="Repaint period in milliseconds")
    draw_mode: DrawMode = Field("circle", description="Dot shape: circle, rectangle")
    background: str = Field("rgb(60,60,60)", description="Background fill style")
    off: str = Field("rgb(50,50,50)", description="Fill style of an unlit dot")
    strict_bounds: bool = Field(False, description="Raise on out-of-range coordinates")

    @field_validator("background", "off")
    @classmethod
    def validate_style(cls, v: str) -> str:
        """Reject empty fill styles."""
        if not v.strip():
            raise ValueError("fill style must not be empty")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Log level")
    format: LogFormat = Field("simple", description="Format: simple, structured")
    file: str | None = Field(None, description="Log file path")
    max_size_mb: int = Field(10, ge=1, description="Max log file size")
    backup_count: int = Field(3, ge=0, description="Number of backup files")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize to an upper-case standard level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"level must be one of {', '.join(LOG_LEVELS)}")
        return level


class Config(BaseModel):
    """Root configuration model."""

    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Manager
# =============================================================================


class ConfigManager:
    """Configuration manager with YAML file persistence.

    Usage:
        config_manager = ConfigManager("/path/to/config.yaml")
        config = config_manager.get()
        config_manager.update_display(dot_size=10)
    """

    def __init__(self, config_path: str | Path) -> None:
        self._config_path = Path(config_path)
        self._config: Config
        self._logging_applied = False
        self._load()

    @property
    def path(self) -> Path:
        """Location of the backing YAML file."""
        return self._config_path

    def _load(self) -> None:
        """Load and validate configuration from file."""
        if self._config_path.exists():
            try:
                with open(self._config_path) as f:
                    data = yaml.safe_load(f) or {}
                self._config = Config.model_validate(data)
                logger.info("Loaded config from %s", self._config_path)
            except (yaml.YAMLError, PydanticValidationError) as e:
                logger.warning("Failed to load config, using defaults: %s", e)
                self._config = Config()
        else:
            logger.info("Config file not found, using defaults")
            self._config = Config()
            self._save()

    def _save(self) -> None:
        """Persist configuration to file."""
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)

            data = self._config.model_dump(mode="json")

            # Write atomically via temp file
            temp_path = self._config_path.with_suffix(".tmp")
            with open(temp_path, "w") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
            temp_path.replace(self._config_path)

            logger.debug("Saved config to %s", self._config_path)
        except OSError as e:
            logger.error("Failed to save config: %s", e)
            raise

    def get(self) -> Config:
        """Get current configuration (deep copy).

        Returns:
            Deep copy of current configuration
        """
        return self._config.model_copy(deep=True)

    def _replace(self, data: dict[str, Any]) -> None:
        try:
            self._config = Config.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigurationError(
                "Invalid configuration update",
                details={"errors": e.error_count()},
                cause=e,
            ) from e
        self._save()

    def update_display(self, **kwargs: Any) -> None:
        """Update display settings.

        Raises:
            ConfigurationError: If the resulting config fails validation
        """
        data = self._config.model_dump()
        data["display"].update(kwargs)
        self._replace(data)

    def update_logging(self, **kwargs: Any) -> None:
        """Update logging settings and reapply them if already applied."""
        data = self._config.model_dump()
        data["logging"].update(kwargs)
        self._replace(data)
        if self._logging_applied:
            self.apply_logging()

    def apply_logging(self) -> None:
        """Configure the root logger from the logging section."""
        from .logging import setup_logging

        setup_logging(self._config.logging)
        self._logging_applied = True
        logger.debug("Applied logging config from %s", self._config_path)


# =============================================================================
# Convenience Functions
# =============================================================================


def load_config(config_path: str | Path, apply_logging: bool = False) -> Config:
    """Load a configuration file without keeping a manager around.

    Args:
        config_path: Path to a YAML config file
        apply_logging: Also configure the root logger from the file

    Returns:
        Validated configuration
    """
    manager = ConfigManager(config_path)
    if apply_logging:
        manager.apply_logging()
    return manager.get()

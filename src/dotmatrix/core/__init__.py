"""Core infrastructure module.

Provides foundational components:
- Configuration management with validation
- Custom exception hierarchy
- Structured logging
"""

from .config import Config, ConfigManager, DisplayConfig, LoggingConfig, load_config
from .errors import (
    DotMatrixError,
    ConfigurationError,
    SurfaceError,
    ValidationError,
)
from .logging import setup_logging

__all__ = [
    # Config
    "Config",
    "ConfigManager",
    "DisplayConfig",
    "LoggingConfig",
    "load_config",
    # Errors
    "DotMatrixError",
    "ConfigurationError",
    "SurfaceError",
    "ValidationError",
    # Logging
    "setup_logging",
]

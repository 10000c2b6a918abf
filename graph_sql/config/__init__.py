from .config_manager import (
    ConfigManager,
    get_config,
    init_config,
    ConfigValidationError,
    Environment,
    SchemaConfig,
    DEFAULT_SCHEMA_CONFIG,
)

__all__ = [
    "ConfigManager",
    "get_config",
    "init_config",
    "ConfigValidationError",
    "Environment",
    "SchemaConfig",
    "DEFAULT_SCHEMA_CONFIG",
]

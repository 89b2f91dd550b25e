"""Configuration management for lingmedia.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (MISSING_MEDIA, REMOTE_MEDIA_PATH, LINGMEDIA_*)
3. Config file (./lingmedia.toml)
4. Default values (lowest priority)
"""

from lingmedia.config.env import EnvReader
from lingmedia.config.loader import (
    build_fallback_config,
    get_config,
    get_default_config_path,
    load_config_file,
    load_logging_config,
    parse_fallback_mode,
)
from lingmedia.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from lingmedia.config.models import (
    FallbackConfig,
    FallbackMode,
    LingmediaConfig,
    LoggingConfig,
    MediaConfig,
    RemoteConfig,
)

__all__ = [
    # Models
    "FallbackConfig",
    "FallbackMode",
    "LingmediaConfig",
    "LoggingConfig",
    "MediaConfig",
    "RemoteConfig",
    # Loader
    "EnvReader",
    "build_fallback_config",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    "load_logging_config",
    "parse_fallback_mode",
    # Logging factory
    "build_logging_config",
    "configure_logging_from_cli",
]

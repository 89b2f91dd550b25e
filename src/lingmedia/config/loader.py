"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables
3. Config file (./lingmedia.toml)
4. Default values

Environment variables:
- MISSING_MEDIA: Remote fallback mode ("ignore" or "link"; unset disables)
- REMOTE_MEDIA_PATH: Base URL of remote media storage
- LINGMEDIA_MEDIA_DIR: Local media directory
- LINGMEDIA_INDEX_PATH: Metadata index JSON file
- LINGMEDIA_REMOTE_TIMEOUT: Seconds per remote probe
- LINGMEDIA_LOG_LEVEL: Log level (debug, info, warning, error)
- LINGMEDIA_LOG_FORMAT: Log format (text, json)
- LINGMEDIA_HTTP_LOG_LEVEL: Log level for HTTP client request logging
- LINGMEDIA_CONFIG_PATH: Path to config file (overrides default location)
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from lingmedia.config.env import EnvReader
from lingmedia.config.models import (
    FallbackConfig,
    FallbackMode,
    LingmediaConfig,
    LoggingConfig,
    MediaConfig,
    RemoteConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("lingmedia.toml")


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Get the config file path, honoring LINGMEDIA_CONFIG_PATH."""
    reader = env_reader or EnvReader()
    return reader.get_path("LINGMEDIA_CONFIG_PATH", default=DEFAULT_CONFIG_FILE)


def load_config_file(path: Path) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed dictionary. Empty dict if the file doesn't exist or
        cannot be parsed (a warning is logged for parse errors).
    """
    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Could not parse config file %s: %s", path, e)
        return {}


def parse_fallback_mode(value: str | None) -> FallbackMode:
    """Map a MISSING_MEDIA value onto the closed set of fallback modes.

    Unset means disabled. Unrecognized values are logged and also disable
    the remote fallback rather than aborting the batch.

    Args:
        value: Raw MISSING_MEDIA value, or None if unset.

    Returns:
        The corresponding FallbackMode.
    """
    if value is None:
        return FallbackMode.DISABLED
    if value == FallbackMode.IGNORE.value:
        return FallbackMode.IGNORE
    if value == FallbackMode.LINK.value:
        return FallbackMode.LINK
    logger.warning(
        "Unsupported value %r for MISSING_MEDIA; remote media search disabled",
        value,
    )
    return FallbackMode.DISABLED


def build_fallback_config(
    mode: str | None,
    remote_base_url: str | None,
) -> FallbackConfig:
    """Build a FallbackConfig from raw mode and base URL values.

    A missing base URL with an enabled mode is kept as-is: the remote
    resolver warns and skips the search for each lookup.
    """
    fallback_mode = parse_fallback_mode(mode)
    if fallback_mode.remote_enabled and not remote_base_url:
        logger.warning(
            "MISSING_MEDIA=%s but REMOTE_MEDIA_PATH is not set; "
            "remote media search will find nothing",
            fallback_mode.value,
        )
    return FallbackConfig(mode=fallback_mode, remote_base_url=remote_base_url or None)


def _first_set(*values: Any) -> Any:
    """Return the first value that is not None (highest precedence first)."""
    for value in values:
        if value is not None:
            return value
    return None


def _read_file_config(
    config_path: Path | None, reader: EnvReader
) -> dict[str, Any]:
    if config_path is None:
        config_path = get_default_config_path(reader)
    return load_config_file(config_path)


def _logging_from(file_config: dict[str, Any], reader: EnvReader) -> LoggingConfig:
    section = file_config.get("logging", {})
    defaults = LoggingConfig()
    log_file = section.get("file")
    return LoggingConfig(
        level=_first_set(
            reader.get_str("LINGMEDIA_LOG_LEVEL"), section.get("level"), defaults.level
        ),
        file=Path(log_file).expanduser() if log_file else None,
        format=_first_set(
            reader.get_str("LINGMEDIA_LOG_FORMAT"),
            section.get("format"),
            defaults.format,
        ),
        include_stderr=bool(section.get("include_stderr", defaults.include_stderr)),
        http_level=_first_set(
            reader.get_str("LINGMEDIA_HTTP_LOG_LEVEL"),
            section.get("http_level"),
            defaults.http_level,
        ),
    )


def load_logging_config(
    config_path: Path | None = None, env_reader: EnvReader | None = None
) -> LoggingConfig:
    """Load only the logging section (env over file over defaults).

    Used by the CLI to set up logging before the full configuration,
    and its warnings, are built.
    """
    reader = env_reader or EnvReader()
    return _logging_from(_read_file_config(config_path, reader), reader)


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    media_dir: Path | None = None,
    index_path: Path | None = None,
    missing_media: str | None = None,
    remote_media_path: str | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
) -> LingmediaConfig:
    """Get lingmedia configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides LINGMEDIA_CONFIG_PATH).
        media_dir: CLI override for the media directory.
        index_path: CLI override for the index file.
        missing_media: CLI override for the fallback mode.
        remote_media_path: CLI override for the remote base URL.
        env_reader: Optional EnvReader for testing (uses os.environ if None).

    Returns:
        LingmediaConfig with merged configuration.
    """
    reader = env_reader or EnvReader()
    file_config = _read_file_config(config_path, reader)
    media_file = file_config.get("media", {})
    remote_file = file_config.get("remote", {})
    defaults = LingmediaConfig()

    media = MediaConfig(
        media_dir=Path(
            _first_set(
                media_dir,
                reader.get_path("LINGMEDIA_MEDIA_DIR"),
                media_file.get("media_dir"),
                defaults.media.media_dir,
            )
        ).expanduser(),
        index_path=Path(
            _first_set(
                index_path,
                reader.get_path("LINGMEDIA_INDEX_PATH"),
                media_file.get("index_path"),
                defaults.media.index_path,
            )
        ).expanduser(),
    )

    remote = RemoteConfig(
        timeout_seconds=float(
            _first_set(
                reader.get_float("LINGMEDIA_REMOTE_TIMEOUT"),
                remote_file.get("timeout_seconds"),
                defaults.remote.timeout_seconds,
            )
        ),
        follow_redirects=bool(
            remote_file.get("follow_redirects", defaults.remote.follow_redirects)
        ),
    )

    fallback = build_fallback_config(
        _first_set(
            missing_media,
            reader.get_str("MISSING_MEDIA"),
            remote_file.get("missing_media"),
        ),
        _first_set(
            remote_media_path,
            reader.get_str("REMOTE_MEDIA_PATH"),
            remote_file.get("base_url"),
        ),
    )

    return LingmediaConfig(
        media=media,
        remote=remote,
        fallback=fallback,
        logging=_logging_from(file_config, reader),
    )

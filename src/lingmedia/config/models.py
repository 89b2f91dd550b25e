"""Configuration data models.

This module defines dataclasses for lingmedia configuration options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class FallbackMode(Enum):
    """Behavior when media is missing from the local media directory.

    Mirrors the MISSING_MEDIA environment variable: unset disables remote
    lookups, "ignore" keeps the bare filename of a remote hit, and "link"
    stores the remote URL itself.
    """

    DISABLED = "disabled"
    IGNORE = "ignore"
    LINK = "link"

    @property
    def remote_enabled(self) -> bool:
        """True if this mode probes remote storage on a local miss."""
        return self is not FallbackMode.DISABLED


@dataclass(frozen=True)
class FallbackConfig:
    """Remote fallback policy, built once per batch run.

    This dataclass is immutable (frozen) so a single instance can be
    threaded through every resolution call of a batch.
    """

    mode: FallbackMode = FallbackMode.DISABLED

    # Base URL of the remote media store (REMOTE_MEDIA_PATH)
    remote_base_url: str | None = None


@dataclass
class MediaConfig:
    """Configuration for the local media store."""

    # Directory holding audio/video files and .videourl placeholders
    media_dir: Path = field(default_factory=lambda: Path("data/media_files"))

    # JSON metadata index keyed by story ID
    index_path: Path = field(default_factory=lambda: Path("data/index.json"))


@dataclass
class RemoteConfig:
    """Configuration for remote existence probes."""

    # Timeout per HEAD request in seconds
    timeout_seconds: float = 10.0

    # Follow redirects before judging the probe status
    follow_redirects: bool = True

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}"
            )


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    # Level for the httpx/httpcore loggers, which log every remote probe
    http_level: str = "warning"

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        if self.http_level.lower() not in valid_levels:
            raise ValueError(
                f"http_level must be one of {valid_levels}, got {self.http_level}"
            )
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class LingmediaConfig:
    """Main configuration container."""

    media: MediaConfig = field(default_factory=MediaConfig)
    remote: RemoteConfig = field(default_factory=RemoteConfig)
    fallback: FallbackConfig = field(default_factory=FallbackConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

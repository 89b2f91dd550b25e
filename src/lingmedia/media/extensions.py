"""Media kinds and the file extensions recognized for each."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType


class MediaKind(Enum):
    """Kind of media a metadata record can link to."""

    AUDIO = "audio"
    VIDEO = "video"


# Probe order for synthesized candidates follows tuple order.
TARGET_MEDIA_EXTENSIONS: Mapping[MediaKind, tuple[str, ...]] = MappingProxyType(
    {
        MediaKind.AUDIO: (".mp3", ".wav"),
        MediaKind.VIDEO: (".mp4", ".videourl"),
    }
)

# Local placeholder file whose content is an external video URL
VIDEOURL_EXTENSION = ".videourl"


def file_extension(filename: str) -> str:
    """Return the text after the last dot, with the leading dot.

    A name without a dot is treated as all extension, so "README"
    yields ".README" and never matches a media extension.
    """
    return "." + filename.rsplit(".", 1)[-1]


def classify_extension(extension: str) -> MediaKind | None:
    """Return the media kind an extension belongs to, or None.

    Matching is exact; callers lowercase first where case should not matter.
    """
    for kind, extensions in TARGET_MEDIA_EXTENSIONS.items():
        if extension in extensions:
            return kind
    return None


def is_media_extension(extension: str) -> bool:
    """True if the extension is recognized for any media kind."""
    return classify_extension(extension) is not None


def is_videourl(filename: str) -> bool:
    """Check if a filename is a .videourl placeholder."""
    return filename.endswith(VIDEOURL_EXTENSION)


def filename_from_path(path: str) -> str:
    """Return the filename at the end of a path.

    Both "/" and "\\" separators are accepted; documents exported on
    Windows link media with backslash paths.
    """
    return path.replace("\\", "/").rsplit("/", 1)[-1]

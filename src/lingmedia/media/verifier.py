"""Local media verification.

A metadata media value is usable when it is either the name of a file
present in the media directory (with a recognized audio/video extension)
or an external http(s) URL.
"""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlsplit

from lingmedia.media.extensions import file_extension, is_media_extension

logger = logging.getLogger(__name__)


def is_external_url(value: str) -> bool:
    """Check whether a media value is an http(s) URL with a host."""
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


class MediaVerifier:
    """Checks media values against one media directory.

    The directory listing is read on first use and cached for the
    verifier's lifetime, which is one batch run.
    """

    def __init__(self, media_dir: Path) -> None:
        self._media_dir = media_dir
        self._listing: frozenset[str] | None = None

    @property
    def media_dir(self) -> Path:
        """Directory holding local media files."""
        return self._media_dir

    @property
    def listing(self) -> frozenset[str]:
        """Names of the entries in the media directory."""
        if self._listing is None:
            self._listing = self._read_listing()
        return self._listing

    def _read_listing(self) -> frozenset[str]:
        try:
            names = frozenset(entry.name for entry in self._media_dir.iterdir())
        except FileNotFoundError:
            logger.warning("Media directory %s does not exist", self._media_dir)
            return frozenset()
        logger.debug("Read %d entries from %s", len(names), self._media_dir)
        return names

    def verify(self, filename: str | None) -> bool:
        """Check whether a media value can be used as-is.

        Args:
            filename: A local media filename or an external URL.

        Returns:
            True if the value names an existing local media file or is an
            external URL; False otherwise, including for empty values.
        """
        if not filename:
            return False
        if is_external_url(filename):
            return True
        if is_media_extension(file_extension(filename)):
            return filename in self.listing
        return False

    def read_videourl(self, filename: str) -> str:
        """Return the external URL stored in a .videourl placeholder.

        Raises:
            OSError: If the placeholder cannot be read.
        """
        return (self._media_dir / filename).read_text(encoding="utf-8").strip()

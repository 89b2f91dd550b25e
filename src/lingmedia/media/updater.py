"""Fill in the audio/video fields of a timed document's metadata record."""

from __future__ import annotations

import logging
from collections.abc import Iterable, MutableMapping, Sequence
from typing import Any

from lingmedia.media.candidates import build_candidates, find_first_valid
from lingmedia.media.extensions import (
    TARGET_MEDIA_EXTENSIONS,
    MediaKind,
    classify_extension,
    filename_from_path,
    is_videourl,
)
from lingmedia.media.fallback import FallbackPolicy
from lingmedia.media.report import MissingMediaReport
from lingmedia.media.verifier import MediaVerifier, is_external_url

logger = logging.getLogger(__name__)


def partition_linked_media(
    linked_media_paths: Iterable[str],
) -> dict[MediaKind, list[str]]:
    """Split linked media paths into filenames per media kind.

    Only the filename portion is kept. Extensions are matched
    case-insensitively; paths with other extensions are dropped.
    """
    by_kind: dict[MediaKind, list[str]] = {kind: [] for kind in MediaKind}
    for path in linked_media_paths:
        filename = filename_from_path(path)
        if "." not in filename:
            continue
        kind = classify_extension(filename[filename.rindex(".") :].lower())
        if kind is not None:
            by_kind[kind].append(filename)
    return by_kind


class MediaUpdater:
    """Resolves media for one document at a time.

    Each media kind ends up either kept (already valid), freshly resolved
    locally or remotely, or cleared. Misses go to the shared report.
    """

    def __init__(
        self,
        verifier: MediaVerifier,
        fallback: FallbackPolicy,
        report: MissingMediaReport,
    ) -> None:
        self._verifier = verifier
        self._fallback = fallback
        self._report = report

    @property
    def report(self) -> MissingMediaReport:
        return self._report

    def search(
        self,
        document_filename: str,
        kind: MediaKind,
        linked_filenames: Sequence[str],
    ) -> str | None:
        """Find usable media of one kind for a document.

        Tries linked filenames, then names derived from the document
        filename, first locally and then through the fallback policy. A
        .videourl placeholder that cannot be read does not count as a hit.

        Returns:
            The value to store, or None if nothing was found (in which
            case the attempted candidates are added to the report).
        """
        logger.info("%s is missing %s", document_filename, kind.value)
        candidates = build_candidates(
            linked_filenames, document_filename, TARGET_MEDIA_EXTENSIONS[kind]
        )

        to_stored = self._video_value if kind is MediaKind.VIDEO else None
        resolved = find_first_valid(candidates, self._verifier, to_stored)
        if resolved is None and self._fallback.enabled:
            resolved = self._fallback.resolve(
                document_filename, kind, candidates, to_stored
            )

        if resolved is not None:
            logger.info("Found %s for %s: %s", kind.value, document_filename, resolved)
        else:
            logger.info("No %s found for %s", kind.value, document_filename)
            self._report.add_missing(document_filename, kind, candidates)
        return resolved

    def _video_value(self, filename: str) -> str | None:
        """Return what to store for a verified video value.

        A local .videourl placeholder is replaced by the URL it contains;
        a remote URL ending in .videourl is kept as-is.
        """
        if not is_videourl(filename) or is_external_url(filename):
            return filename
        try:
            return self._verifier.read_videourl(filename)
        except OSError as e:
            logger.warning("Could not read video URL file %s: %s", filename, e)
            return None

    def update_media(
        self,
        document_filename: str,
        story_id: str,
        record: MutableMapping[str, Any],
        linked_media_paths: Iterable[str],
    ) -> None:
        """Ensure a timed document's record links to usable media.

        Only call this for documents that carry timestamps. The record is
        marked timed, existing media values are kept if they still verify,
        and missing ones are searched for. A document left with neither
        audio nor video is demoted to untimed.

        Args:
            document_filename: Filename of the FLEx or ELAN document.
            story_id: Story ID of the document.
            record: Metadata record, updated in place.
            linked_media_paths: Media paths linked from the document.
        """
        record["timed"] = True
        media = record.setdefault("media", {})

        working: dict[MediaKind, bool] = {}
        for kind in MediaKind:
            current = media.get(kind.value) or ""
            value: str | None = current if self._verifier.verify(current) else None
            if value is not None and kind is MediaKind.VIDEO:
                value = self._video_value(value)
            working[kind] = value is not None
            media[kind.value] = value or ""

        if all(working.values()):
            logger.debug("Story %s already has working audio and video", story_id)
            return

        linked = partition_linked_media(linked_media_paths)
        for kind in MediaKind:
            if working[kind]:
                continue
            value = self.search(document_filename, kind, linked[kind])
            if value is not None:
                working[kind] = True
                media[kind.value] = value

        if not any(working.values()):
            logger.info("Story %s has no usable media; marking untimed", story_id)
            record["timed"] = False

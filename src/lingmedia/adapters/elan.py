"""Metadata extraction for ELAN annotation documents."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Any

from lingmedia.adapters.common import attrs, first, new_metadata_record
from lingmedia.media.extensions import filename_from_path

if TYPE_CHECKING:
    from lingmedia.index import MetadataIndex
    from lingmedia.media.updater import MediaUpdater

logger = logging.getLogger(__name__)

SOURCE_FILETYPE = "ELAN"


def get_speakers(adoc: dict[str, Any]) -> list[str]:
    """Return the unique tier participants in first-seen order."""
    speakers: dict[str, None] = {}
    for tier in adoc.get("TIER") or []:
        participant = attrs(tier).get("PARTICIPANT")
        if participant:
            speakers[participant] = None
    return list(speakers)


def get_elan_media_paths(adoc: dict[str, Any]) -> list[str]:
    """Return the media URLs from the document header.

    Files converted ELAN -> FLEx -> ELAN carry no media descriptors.
    """
    header = first(adoc.get("HEADER")) or {}
    return [
        attrs(descriptor)["MEDIA_URL"]
        for descriptor in header.get("MEDIA_DESCRIPTOR") or []
    ]


def improve_elan_index_data(
    path: str,
    story_id: str,
    adoc: dict[str, Any],
    *,
    index: MetadataIndex,
    updater: MediaUpdater,
    today: date | None = None,
) -> dict[str, Any]:
    """Build the updated metadata record for an ELAN annotation document.

    ELAN documents are always time-aligned, so media resolution always runs.

    Args:
        path: Path of the ELAN document.
        story_id: Story ID of the document.
        adoc: The parsed ANNOTATION_DOCUMENT element.
        index: Metadata index holding any prior record.
        updater: Media updater.
        today: Upload date for new records (defaults to today).

    Returns:
        The metadata record, based on the prior index entry if any.
    """
    filename = filename_from_path(path)
    metadata = index.get(story_id)
    if metadata is None:
        logger.debug("Story %s not in index; creating record", story_id)
        metadata = new_metadata_record(
            path,
            story_id,
            timed=True,
            source_filetype=SOURCE_FILETYPE,
            today=today,
        )

    metadata["speakers"] = get_speakers(adoc)
    updater.update_media(filename, story_id, metadata, get_elan_media_paths(adoc))
    return metadata

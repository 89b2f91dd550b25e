"""Metadata extraction for FLEx interlinear texts.

Documents arrive as the generic tree produced by the XML parser: each
element is a dict of child lists, attributes live under "$" and text
content under "_".
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Any

from lingmedia.adapters.common import (
    DEFAULT_KEY,
    attrs,
    first,
    new_metadata_record,
)
from lingmedia.media.extensions import filename_from_path

if TYPE_CHECKING:
    from lingmedia.index import MetadataIndex
    from lingmedia.media.updater import MediaUpdater

logger = logging.getLogger(__name__)

SOURCE_FILETYPE = "FLEx"


def document_has_timestamps(itext: dict[str, Any]) -> bool:
    """Check whether any phrase of an interlinear text is time-aligned."""
    paragraphs = first(itext.get("paragraphs"))
    if not paragraphs:
        return False
    for paragraph in paragraphs.get("paragraph") or []:
        phrases = first(paragraph.get("phrases"))
        if not phrases:
            continue
        for phrase in phrases.get("phrase") or []:
            if attrs(phrase).get("begin-time-offset") is not None:
                return True
    return False


def get_titles_and_sources(
    itext: dict[str, Any],
) -> tuple[dict[str, str], dict[str, str]]:
    """Collect per-language titles and sources from the text's items."""
    titles: dict[str, str] = {}
    sources: dict[str, str] = {}
    for item in itext.get("item") or []:
        item_attrs = attrs(item)
        lang = item_attrs.get("lang")
        if item_attrs.get("type") == "title":
            titles[lang] = item.get("_", "")
        elif item_attrs.get("type") == "source":
            sources[lang] = item.get("_", "")
    return titles, sources


def get_languages(itext: dict[str, Any]) -> list[str]:
    """Return the language codes declared by the text.

    Texts freshly exported from ELAN have no languages element.
    """
    languages = first(itext.get("languages"))
    if not languages:
        return []
    return [attrs(language)["lang"] for language in languages.get("language") or []]


def get_flex_media_filenames(itext: dict[str, Any]) -> list[str]:
    """Return the media locations linked from the text."""
    media_files = first(itext.get("media-files"))
    if not media_files:
        return []
    return [attrs(media)["location"] for media in media_files.get("media") or []]


def improve_flex_index_data(
    path: str,
    story_id: str,
    itext: dict[str, Any],
    *,
    index: MetadataIndex,
    updater: MediaUpdater,
    today: date | None = None,
) -> dict[str, Any]:
    """Build the updated metadata record for a FLEx interlinear text.

    Args:
        path: Path of the FLEx document.
        story_id: Story ID of the document.
        itext: The parsed interlinear-text element.
        index: Metadata index holding any prior record.
        updater: Media updater, used only for time-aligned texts.
        today: Upload date for new records (defaults to today).

    Returns:
        The metadata record, based on the prior index entry if any.
    """
    has_timestamps = document_has_timestamps(itext)
    titles, sources = get_titles_and_sources(itext)

    metadata = index.get(story_id)
    if metadata is None:
        logger.debug("Story %s not in index; creating record", story_id)
        metadata = new_metadata_record(
            path,
            story_id,
            timed=has_timestamps,
            source_filetype=SOURCE_FILETYPE,
            today=today,
        )

    titles[DEFAULT_KEY] = metadata.get("title", {}).get(DEFAULT_KEY, "")
    sources[DEFAULT_KEY] = metadata.get("source", {}).get(DEFAULT_KEY, "")
    metadata["title"] = titles
    metadata["source"] = sources
    metadata["languages"] = get_languages(itext)

    if has_timestamps:
        updater.update_media(
            filename_from_path(path),
            story_id,
            metadata,
            get_flex_media_filenames(itext),
        )
    return metadata

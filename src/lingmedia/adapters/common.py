"""Shared helpers for the FLEx and ELAN metadata adapters."""

from __future__ import annotations

from datetime import date
from typing import Any

from lingmedia.index import STORY_ID_KEY
from lingmedia.media.extensions import filename_from_path

DEFAULT_KEY = "_default"


def upload_date(today: date | None = None) -> str:
    """Format a date as M/D/YYYY without zero padding."""
    today = today or date.today()
    return f"{today.month}/{today.day}/{today.year}"


def title_from_filename(filename: str) -> str:
    """Return the filename without its last extension."""
    if "." not in filename:
        return filename
    return filename[: filename.rindex(".")]


def new_metadata_record(
    path: str,
    story_id: str,
    *,
    timed: bool,
    source_filetype: str,
    today: date | None = None,
) -> dict[str, Any]:
    """Build the starter record for a document missing from the index."""
    return {
        "timed": timed,
        STORY_ID_KEY: story_id,
        "title": {DEFAULT_KEY: title_from_filename(filename_from_path(path))},
        "media": {"audio": "", "video": ""},
        "languages": [],
        "date_created": "",
        "date_uploaded": upload_date(today),
        "source": {DEFAULT_KEY: ""},
        "description": "",
        "genre": "",
        "author": "",
        "glosser": "",
        "speakers": [],
        "xml_file_name": path,
        "source_filetype": source_filetype,
    }


def attrs(node: Any) -> dict[str, Any]:
    """Return the XML attributes of a parsed node ("$" key), or {}."""
    if isinstance(node, dict):
        return node.get("$") or {}
    return {}


def first(nodes: Any) -> Any:
    """Return the first element of a parsed child list, or None."""
    if isinstance(nodes, list) and nodes:
        return nodes[0]
    return None

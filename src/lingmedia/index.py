"""Metadata index access.

The index is a JSON object mapping story IDs to metadata records. Records
are validated on load so a hand-edited index with a mistyped media field
fails loudly instead of producing confusing resolution results.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

logger = logging.getLogger(__name__)

STORY_ID_KEY = "story ID"


class IndexLoadError(Exception):
    """Raised when the metadata index cannot be read or is malformed."""

    def __init__(self, message: str, story_id: str | None = None) -> None:
        self.message = message
        self.story_id = story_id
        super().__init__(message)


class MediaFieldsModel(BaseModel):
    """Pydantic model for the media section of a record."""

    model_config = ConfigDict(extra="allow")

    audio: str = ""
    video: str = ""

    @field_validator("audio", "video", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class IndexEntryModel(BaseModel):
    """Pydantic model for one metadata record.

    Only the fields media resolution relies on are typed; everything else
    passes through untouched.
    """

    model_config = ConfigDict(extra="allow")

    timed: bool = False
    media: MediaFieldsModel = MediaFieldsModel()
    title: dict[str, str] = {}
    source: dict[str, str] = {}
    languages: list[str] = []
    speakers: list[str] = []


def validate_entry(story_id: str, raw: Any) -> dict[str, Any]:
    """Validate one raw index entry and return it unchanged.

    Validation only checks types; defaults are not filled in, so records
    the resolver never touches are written back exactly as they were read.

    Raises:
        IndexLoadError: If the entry does not match IndexEntryModel.
    """
    if not isinstance(raw, dict):
        raise IndexLoadError(
            f"Index entry {story_id!r} must be an object, got {type(raw).__name__}",
            story_id=story_id,
        )
    try:
        IndexEntryModel.model_validate(raw)
    except ValidationError as e:
        raise IndexLoadError(
            f"Invalid index entry {story_id!r}: {e}", story_id=story_id
        ) from e
    return dict(raw)


class MetadataIndex:
    """In-memory view of the metadata index keyed by story ID."""

    def __init__(self, entries: dict[str, dict[str, Any]] | None = None) -> None:
        self._entries: dict[str, dict[str, Any]] = dict(entries or {})

    @classmethod
    def load(cls, path: Path) -> MetadataIndex:
        """Load and validate an index file.

        A missing file is an empty index.

        Raises:
            IndexLoadError: If the file is not valid JSON or an entry is
                malformed.
        """
        if not path.exists():
            logger.info("Index file %s not found; starting empty", path)
            return cls()
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise IndexLoadError(f"Cannot read index file {path}: {e}") from e
        if not isinstance(raw, dict):
            raise IndexLoadError(f"Index file {path} must contain a JSON object")

        entries = {
            story_id: validate_entry(story_id, entry)
            for story_id, entry in raw.items()
        }
        logger.debug("Loaded %d index entries from %s", len(entries), path)
        return cls(entries)

    def dump(self, path: Path) -> None:
        """Write the index as pretty-printed JSON."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(self._entries, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )

    def get(self, story_id: str) -> dict[str, Any] | None:
        """Return a copy of the record for story_id, or None."""
        entry = self._entries.get(story_id)
        return copy.deepcopy(entry) if entry is not None else None

    def put(self, story_id: str, record: dict[str, Any]) -> None:
        self._entries[story_id] = record

    def __contains__(self, story_id: object) -> bool:
        return story_id in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return copy.deepcopy(self._entries)

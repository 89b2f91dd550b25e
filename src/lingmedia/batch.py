"""Batch media resolution session.

A session owns everything shared across the documents of one batch run:
the cached media directory listing, the remote client and the
missing-media report. Documents are processed strictly one at a time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from lingmedia.adapters.elan import improve_elan_index_data
from lingmedia.adapters.flex import (
    document_has_timestamps,
    improve_flex_index_data,
)
from lingmedia.config.models import LingmediaConfig
from lingmedia.index import MetadataIndex
from lingmedia.logging.context import document_context
from lingmedia.media.extensions import filename_from_path
from lingmedia.media.fallback import FallbackPolicy
from lingmedia.media.remote import RemoteMediaClient
from lingmedia.media.report import MissingMediaReport
from lingmedia.media.updater import MediaUpdater
from lingmedia.media.verifier import MediaVerifier

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Summary of a batch run."""

    documents: int = 0
    timed: int = 0
    demoted: list[str] = field(default_factory=list)


class ResolutionSession:
    """Runs media resolution over a batch of documents."""

    def __init__(
        self,
        config: LingmediaConfig,
        index: MetadataIndex | None = None,
        *,
        remote: RemoteMediaClient | None = None,
        today: date | None = None,
    ) -> None:
        self.config = config
        self.index = index if index is not None else MetadataIndex()
        self.report = MissingMediaReport()
        self.result = BatchResult()
        self.verifier = MediaVerifier(config.media.media_dir)
        self.remote = remote or RemoteMediaClient(
            config.fallback.remote_base_url,
            timeout=config.remote.timeout_seconds,
            follow_redirects=config.remote.follow_redirects,
        )
        self.updater = MediaUpdater(
            self.verifier,
            FallbackPolicy(config.fallback, self.remote, self.report),
            self.report,
        )
        self._today = today

    def __enter__(self) -> ResolutionSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.remote.close()

    def _record(
        self, story_id: str, was_timed: bool, metadata: dict[str, Any]
    ) -> None:
        self.result.documents += 1
        if metadata.get("timed"):
            self.result.timed += 1
        elif was_timed:
            self.result.demoted.append(story_id)
        self.index.put(story_id, metadata)

    def process_flex(
        self, path: str, story_id: str, itext: dict[str, Any]
    ) -> dict[str, Any]:
        """Update and store the record for a parsed FLEx text."""
        with document_context(story_id, filename_from_path(path)):
            metadata = improve_flex_index_data(
                path,
                story_id,
                itext,
                index=self.index,
                updater=self.updater,
                today=self._today,
            )
            self._record(story_id, document_has_timestamps(itext), metadata)
        return metadata

    def process_elan(
        self, path: str, story_id: str, adoc: dict[str, Any]
    ) -> dict[str, Any]:
        """Update and store the record for a parsed ELAN document."""
        with document_context(story_id, filename_from_path(path)):
            metadata = improve_elan_index_data(
                path,
                story_id,
                adoc,
                index=self.index,
                updater=self.updater,
                today=self._today,
            )
            self._record(story_id, True, metadata)
        return metadata

    def recheck(self, story_id: str) -> dict[str, Any]:
        """Re-run media resolution for a record already in the index.

        Untimed records are left as they are. Timed records are resolved
        against their current media values and names derived from their
        source document, without re-reading the document itself.

        Raises:
            KeyError: If story_id is not in the index.
        """
        metadata = self.index.get(story_id)
        if metadata is None:
            raise KeyError(story_id)
        path = metadata.get("xml_file_name") or story_id
        filename = filename_from_path(path)
        was_timed = bool(metadata.get("timed"))
        with document_context(story_id, filename):
            if was_timed:
                self.updater.update_media(filename, story_id, metadata, [])
            self._record(story_id, was_timed, metadata)
        return metadata

    def recheck_all(self) -> BatchResult:
        """Re-run media resolution for every record in the index."""
        for story_id in list(self.index):
            self.recheck(story_id)
        logger.info(
            "Checked %d documents: %d timed, %d demoted, %d report entries",
            self.result.documents,
            self.result.timed,
            len(self.result.demoted),
            len(self.report),
        )
        return self.result

"""Media resolution engine.

This package locates audio/video assets for interlinear-text documents:
- extensions: media kinds and recognized file extensions
- verifier: local existence and URL checks
- candidates: candidate filename generation and local resolution
- remote: blocking HEAD probes against remote storage
- fallback: MISSING_MEDIA policy for remote hits
- report: missing-media bookkeeping for a batch
- updater: metadata record mutation
"""

from lingmedia.media.candidates import build_candidates, find_first_valid
from lingmedia.media.extensions import TARGET_MEDIA_EXTENSIONS, MediaKind
from lingmedia.media.fallback import FallbackPolicy
from lingmedia.media.remote import RemoteMatch, RemoteMediaClient
from lingmedia.media.report import (
    MissingMediaEntry,
    MissingMediaReport,
    RemoteSubstitutionEntry,
)
from lingmedia.media.updater import MediaUpdater, partition_linked_media
from lingmedia.media.verifier import MediaVerifier, is_external_url

__all__ = [
    "TARGET_MEDIA_EXTENSIONS",
    "FallbackPolicy",
    "MediaKind",
    "MediaUpdater",
    "MediaVerifier",
    "MissingMediaEntry",
    "MissingMediaReport",
    "RemoteMatch",
    "RemoteMediaClient",
    "RemoteSubstitutionEntry",
    "build_candidates",
    "find_first_valid",
    "is_external_url",
    "partition_linked_media",
]

"""Remote fallback policy for media missing from the local store."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from lingmedia.config.models import FallbackConfig, FallbackMode

if TYPE_CHECKING:
    from lingmedia.media.extensions import MediaKind
    from lingmedia.media.remote import RemoteMediaClient
    from lingmedia.media.report import MissingMediaReport

logger = logging.getLogger(__name__)


class FallbackPolicy:
    """Decides what a remote hit resolves to under the configured mode.

    - DISABLED: never probes remote storage.
    - IGNORE: a remote hit resolves to the bare filename, as if it were
      local, and is recorded in the report for follow-up.
    - LINK: a remote hit resolves to its remote URL.
    """

    def __init__(
        self,
        config: FallbackConfig,
        remote: RemoteMediaClient,
        report: MissingMediaReport,
    ) -> None:
        self._config = config
        self._remote = remote
        self._report = report

    @property
    def enabled(self) -> bool:
        return self._config.mode.remote_enabled

    def resolve(
        self,
        document: str,
        kind: MediaKind,
        candidates: Sequence[str],
        accept: Callable[[str], str | None] | None = None,
    ) -> str | None:
        """Resolve candidates that were not found locally.

        Args:
            document: Filename of the document being resolved.
            kind: Media kind being searched for.
            candidates: Candidate filenames in probe order.
            accept: Maps the value a remote hit resolves to onto the value
                to store. A hit it maps to None is passed over and the
                search continues with the remaining candidates.

        Returns:
            The value to store in the metadata record, or None.
        """
        mode = self._config.mode
        if mode is FallbackMode.DISABLED:
            return None

        logger.info("Looking in remote storage for %s %s", document, kind.value)
        remaining = list(candidates)
        while remaining:
            match = self._remote.search(remaining)
            if not match.found:
                return None

            value = match.filename if mode is FallbackMode.IGNORE else match.remote_url
            stored = accept(value) if accept is not None else value
            if stored is not None:
                if mode is FallbackMode.IGNORE:
                    self._report.add_remote_substitution(
                        document, kind, match.filename, match.remote_url
                    )
                return stored

            logger.info("Remote %s for %s is not usable", value, document)
            remaining = remaining[remaining.index(match.filename) + 1 :]
        return None

"""Remote media existence checks.

This module provides a small blocking HTTP client that probes a remote
media store with HEAD requests. It is only consulted when a document's
media is missing locally and the remote fallback is enabled.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteMatch:
    """Result of a remote media search.

    Both fields are None when no candidate exists remotely.
    """

    filename: str | None = None
    remote_url: str | None = None

    @property
    def found(self) -> bool:
        """True if a candidate was found in remote storage."""
        return self.filename is not None

    @classmethod
    def empty(cls) -> RemoteMatch:
        """Create a result for a search with no hit."""
        return cls()


class RemoteMediaClient:
    """HTTP client for probing a remote media store.

    Probes run one at a time and block until answered, so a document's
    resolution is settled before the next document starts.
    """

    def __init__(
        self,
        base_url: str | None,
        timeout: float = 10.0,
        *,
        follow_redirects: bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Base URL of the remote media store (REMOTE_MEDIA_PATH).
            timeout: Timeout per probe in seconds.
            follow_redirects: Follow redirects before judging the status.
            transport: Optional httpx transport, used by tests.
        """
        self._base_url = base_url
        self._timeout = timeout
        self._follow_redirects = follow_redirects
        self._transport = transport
        self._client: httpx.Client | None = None

    def __enter__(self) -> RemoteMediaClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._timeout,
                follow_redirects=self._follow_redirects,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def url_for(self, filename: str) -> str:
        """Build the remote URL for a media filename.

        Raises:
            ValueError: If no base URL is configured.
        """
        if not isinstance(self._base_url, str) or not self._base_url:
            raise ValueError("No remote media base URL configured")
        return f"{self._base_url.rstrip('/')}/{filename}"

    def exists(self, url: str) -> bool:
        """Check whether a remote URL exists without fetching its body.

        Returns:
            True if the HEAD request answered with a status below 400.

        Raises:
            httpx.HTTPError: If the request fails at the transport level.
            httpx.InvalidURL: If the URL cannot be parsed.
        """
        response = self._get_client().head(url)
        logger.debug("HEAD %s -> %d", url, response.status_code)
        return not response.is_error

    def search(self, candidates: Iterable[str]) -> RemoteMatch:
        """Find the first candidate that exists in remote storage.

        A transport failure or an unusable URL for one candidate is logged
        and treated as a miss for that candidate only. A missing or
        malformed base URL is logged and yields an empty result.

        Args:
            candidates: Filenames in probe order.

        Returns:
            RemoteMatch for the first hit, or an empty RemoteMatch.
        """
        if not isinstance(self._base_url, str) or not self._base_url:
            logger.warning(
                "Cannot search remote storage: unsupported value %r for "
                "REMOTE_MEDIA_PATH",
                self._base_url,
            )
            return RemoteMatch.empty()
        try:
            httpx.URL(self._base_url)
        except httpx.InvalidURL as e:
            logger.warning(
                "Cannot search remote storage: invalid REMOTE_MEDIA_PATH %r: %s",
                self._base_url,
                e,
            )
            return RemoteMatch.empty()

        for filename in candidates:
            remote_url = self.url_for(filename)
            try:
                found = self.exists(remote_url)
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                logger.warning("Remote media probe failed for %s: %s", remote_url, e)
                continue
            if found:
                return RemoteMatch(filename=filename, remote_url=remote_url)
        return RemoteMatch.empty()

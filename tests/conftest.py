"""Shared test fixtures for lingmedia."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from lingmedia.config.models import FallbackConfig, FallbackMode
from lingmedia.media.fallback import FallbackPolicy
from lingmedia.media.remote import RemoteMediaClient
from lingmedia.media.report import MissingMediaReport
from lingmedia.media.updater import MediaUpdater
from lingmedia.media.verifier import MediaVerifier

REMOTE_BASE = "https://media.example.org/stories"


@pytest.fixture
def media_dir(tmp_path: Path) -> Path:
    """Create an empty media directory."""
    path = tmp_path / "media_files"
    path.mkdir()
    return path


@pytest.fixture
def add_media(media_dir: Path) -> Callable[..., Path]:
    """Return a helper that creates files in the media directory."""

    def _add(name: str, content: str = "") -> Path:
        path = media_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _add


@pytest.fixture
def verifier(media_dir: Path) -> MediaVerifier:
    return MediaVerifier(media_dir)


@pytest.fixture
def report() -> MissingMediaReport:
    return MissingMediaReport()


class ProbeRecorder:
    """httpx transport handler that answers HEAD requests from a set of URLs."""

    def __init__(
        self,
        existing: set[str] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.existing = existing or set()
        self.failing = failing or set()
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        if url in self.failing:
            raise httpx.ConnectError("connection refused", request=request)
        if url in self.existing:
            return httpx.Response(200)
        return httpx.Response(404)

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]


@pytest.fixture
def probes() -> ProbeRecorder:
    return ProbeRecorder()


@pytest.fixture
def remote_client(probes: ProbeRecorder) -> RemoteMediaClient:
    client = RemoteMediaClient(REMOTE_BASE, transport=httpx.MockTransport(probes))
    yield client
    client.close()


@pytest.fixture
def make_updater(
    verifier: MediaVerifier,
    report: MissingMediaReport,
    remote_client: RemoteMediaClient,
) -> Callable[..., MediaUpdater]:
    """Return a factory for MediaUpdater with a given fallback mode."""

    def _make(
        mode: FallbackMode = FallbackMode.DISABLED,
        remote: RemoteMediaClient | None = None,
    ) -> MediaUpdater:
        config = FallbackConfig(mode=mode, remote_base_url=REMOTE_BASE)
        policy = FallbackPolicy(config, remote or remote_client, report)
        return MediaUpdater(verifier, policy, report)

    return _make

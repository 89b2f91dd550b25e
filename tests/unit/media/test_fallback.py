"""Tests for the remote fallback policy."""

from unittest.mock import MagicMock

from lingmedia.config.models import FallbackConfig, FallbackMode
from lingmedia.media.extensions import MediaKind
from lingmedia.media.fallback import FallbackPolicy
from lingmedia.media.remote import RemoteMatch, RemoteMediaClient
from lingmedia.media.report import MissingMediaReport, RemoteSubstitutionEntry

BASE = "https://media.example.org/stories"
CANDIDATES = ("talk.mp4", "talk.videourl")


def make_policy(mode: FallbackMode, match: RemoteMatch, report: MissingMediaReport):
    remote = MagicMock(spec=RemoteMediaClient)
    remote.search.return_value = match
    policy = FallbackPolicy(FallbackConfig(mode, BASE), remote, report)
    return policy, remote


class TestDisabled:
    """Fallback disabled never probes."""

    def test_returns_none_without_probe(self, report):
        policy, remote = make_policy(
            FallbackMode.DISABLED, RemoteMatch("talk.mp4", f"{BASE}/talk.mp4"), report
        )
        assert not policy.enabled
        assert policy.resolve("talk.eaf", MediaKind.VIDEO, CANDIDATES) is None
        remote.search.assert_not_called()
        assert len(report) == 0


class TestIgnoreMode:
    """IGNORE uses the bare filename and reports the substitution."""

    def test_hit_resolves_to_filename(self, report):
        policy, remote = make_policy(
            FallbackMode.IGNORE, RemoteMatch("talk.mp4", f"{BASE}/talk.mp4"), report
        )
        assert policy.resolve("talk.eaf", MediaKind.VIDEO, CANDIDATES) == "talk.mp4"
        remote.search.assert_called_once_with(list(CANDIDATES))
        assert report.entries == (
            RemoteSubstitutionEntry(
                "talk.eaf", MediaKind.VIDEO, "talk.mp4", f"{BASE}/talk.mp4"
            ),
        )

    def test_miss_adds_nothing(self, report):
        policy, _ = make_policy(FallbackMode.IGNORE, RemoteMatch.empty(), report)
        assert policy.resolve("talk.eaf", MediaKind.VIDEO, CANDIDATES) is None
        assert len(report) == 0


class TestLinkMode:
    """LINK stores the remote URL."""

    def test_hit_resolves_to_url(self, report):
        policy, _ = make_policy(
            FallbackMode.LINK, RemoteMatch("talk.mp4", f"{BASE}/talk.mp4"), report
        )
        result = policy.resolve("talk.eaf", MediaKind.VIDEO, CANDIDATES)
        assert result == f"{BASE}/talk.mp4"
        assert len(report) == 0

    def test_miss(self, report):
        policy, _ = make_policy(FallbackMode.LINK, RemoteMatch.empty(), report)
        assert policy.resolve("talk.eaf", MediaKind.VIDEO, CANDIDATES) is None


class TestAccept:
    """Remote hits the caller cannot use are passed over."""

    def test_rejected_hit_continues_with_remaining(self, report):
        remote = MagicMock(spec=RemoteMediaClient)
        remote.search.side_effect = [
            RemoteMatch("a.videourl", f"{BASE}/a.videourl"),
            RemoteMatch("b.videourl", f"{BASE}/b.videourl"),
        ]
        policy = FallbackPolicy(
            FallbackConfig(FallbackMode.IGNORE, BASE), remote, report
        )
        candidates = ("a.videourl", "b.videourl", "c.videourl")

        result = policy.resolve(
            "talk.eaf",
            MediaKind.VIDEO,
            candidates,
            lambda value: None if value.startswith("a.") else f"url:{value}",
        )

        assert result == "url:b.videourl"
        assert remote.search.call_args_list[1].args == (
            ["b.videourl", "c.videourl"],
        )
        assert [e.filename for e in report.substitutions] == ["b.videourl"]

    def test_all_rejected(self, report):
        policy, remote = make_policy(
            FallbackMode.IGNORE, RemoteMatch("a.videourl", f"{BASE}/a.videourl"), report
        )
        result = policy.resolve(
            "talk.eaf", MediaKind.VIDEO, ("a.videourl",), lambda value: None
        )
        assert result is None
        assert remote.search.call_count == 1
        assert len(report) == 0

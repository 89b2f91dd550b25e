"""Tests for candidate generation and local resolution."""

from lingmedia.media.candidates import (
    build_candidates,
    filename_stems,
    find_first_valid,
)
from lingmedia.media.verifier import MediaVerifier


class TestFilenameStems:
    """Tests for filename_stems."""

    def test_double_extension(self):
        assert filename_stems("doc.postflex.flextext") == ("doc.postflex", "doc")

    def test_single_extension(self):
        assert filename_stems("doc.eaf") == ("doc", "doc")

    def test_no_extension(self):
        assert filename_stems("doc") == ("doc", "doc")


class TestBuildCandidates:
    """Tests for build_candidates."""

    def test_linked_first_then_stems_per_extension(self):
        result = build_candidates(
            ["a.mp4"], "doc.postflex.flextext", (".mp4", ".videourl")
        )
        assert result == (
            "a.mp4",
            "doc.postflex.mp4",
            "doc.mp4",
            "doc.postflex.videourl",
            "doc.videourl",
        )

    def test_duplicates_removed_keeping_first(self):
        result = build_candidates(
            ["doc.mp3", "doc.mp3", "x.wav"], "doc.eaf", (".mp3", ".wav")
        )
        assert result == ("doc.mp3", "x.wav", "doc.wav")

    def test_does_not_mutate_linked_list(self):
        linked = ["a.mp3"]
        build_candidates(linked, "doc.eaf", (".mp3", ".wav"))
        assert linked == ["a.mp3"]

    def test_deterministic(self):
        args = (["b.mp4", "a.mp4"], "x.y.flextext", (".mp4", ".videourl"))
        assert build_candidates(*args) == build_candidates(*args)


class TestFindFirstValid:
    """Tests for find_first_valid."""

    def test_earliest_listed_wins(self, verifier: MediaVerifier, add_media):
        add_media("doc.mp4")
        add_media("a.mp4")
        assert find_first_valid(["a.mp4", "doc.mp4"], verifier) == "a.mp4"

    def test_skips_missing(self, verifier: MediaVerifier, add_media):
        add_media("doc.mp4")
        assert find_first_valid(["a.mp4", "doc.mp4"], verifier) == "doc.mp4"

    def test_none_when_nothing_matches(self, verifier: MediaVerifier):
        assert find_first_valid(["a.mp4", "doc.mp4"], verifier) is None

    def test_empty_candidates(self, verifier: MediaVerifier):
        assert find_first_valid([], verifier) is None

    def test_resolve_maps_accepted_candidate(self, verifier: MediaVerifier, add_media):
        add_media("a.videourl")
        result = find_first_valid(["a.videourl"], verifier, lambda name: f"url:{name}")
        assert result == "url:a.videourl"

    def test_resolve_none_passes_over_candidate(
        self, verifier: MediaVerifier, add_media
    ):
        add_media("a.videourl")
        add_media("b.videourl")
        result = find_first_valid(
            ["a.videourl", "b.videourl"],
            verifier,
            lambda name: None if name.startswith("a") else name,
        )
        assert result == "b.videourl"

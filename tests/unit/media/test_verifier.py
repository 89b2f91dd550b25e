"""Tests for local media verification."""

from pathlib import Path

import pytest

from lingmedia.media.verifier import MediaVerifier, is_external_url


class TestIsExternalUrl:
    """Tests for is_external_url."""

    @pytest.mark.parametrize(
        "value",
        [
            "https://www.youtube.com/watch?v=abc123",
            "http://example.org/talk.mp4",
            "HTTPS://EXAMPLE.ORG/a",
        ],
    )
    def test_http_urls(self, value):
        assert is_external_url(value)

    @pytest.mark.parametrize(
        "value",
        ["", "talk.mp4", "http", "https://", "ftp://example.org/a.mp3", "xxxxhttp"],
    )
    def test_non_urls(self, value):
        assert not is_external_url(value)


class TestMediaVerifier:
    """Tests for MediaVerifier.verify."""

    def test_existing_audio_file(self, verifier: MediaVerifier, add_media):
        add_media("story.mp3")
        assert verifier.verify("story.mp3") is True

    def test_existing_video_file(self, verifier: MediaVerifier, add_media):
        add_media("story.mp4")
        assert verifier.verify("story.mp4") is True

    def test_absent_media_file(self, verifier: MediaVerifier, add_media):
        add_media("other.mp3")
        assert verifier.verify("story.mp3") is False

    def test_match_is_case_sensitive(self, verifier: MediaVerifier, add_media):
        add_media("Story.mp3")
        assert verifier.verify("story.mp3") is False

    def test_uppercase_extension_is_not_media(
        self, verifier: MediaVerifier, add_media
    ):
        add_media("story.MP3")
        assert verifier.verify("story.MP3") is False

    def test_url_is_valid_without_filesystem(self, tmp_path: Path):
        verifier = MediaVerifier(tmp_path / "does-not-exist")
        assert verifier.verify("https://youtu.be/abc") is True

    def test_url_with_media_extension_is_valid(self, verifier: MediaVerifier):
        assert verifier.verify("https://example.org/talk.mp4") is True

    @pytest.mark.parametrize("value", ["", None])
    def test_empty_values(self, verifier: MediaVerifier, value):
        assert verifier.verify(value) is False

    def test_other_extension(self, verifier: MediaVerifier, add_media):
        add_media("notes.txt")
        assert verifier.verify("notes.txt") is False

    def test_missing_directory_is_empty(self, tmp_path: Path, caplog):
        verifier = MediaVerifier(tmp_path / "missing")
        assert verifier.verify("story.mp3") is False
        assert "does not exist" in caplog.text

    def test_listing_is_cached(self, verifier: MediaVerifier, add_media, media_dir):
        assert verifier.verify("late.mp3") is False
        add_media("late.mp3")
        assert verifier.verify("late.mp3") is False
        assert MediaVerifier(media_dir).verify("late.mp3") is True


class TestReadVideourl:
    """Tests for MediaVerifier.read_videourl."""

    def test_returns_stripped_content(self, verifier: MediaVerifier, add_media):
        add_media("talk.videourl", "https://youtu.be/abc\n")
        assert verifier.read_videourl("talk.videourl") == "https://youtu.be/abc"

    def test_missing_file_raises(self, verifier: MediaVerifier):
        with pytest.raises(OSError):
            verifier.read_videourl("nope.videourl")

"""Candidate filename generation and local resolution."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lingmedia.media.verifier import MediaVerifier


def filename_stems(document_filename: str) -> tuple[str, str]:
    """Return the long and short stems of a document filename.

    The long stem drops the last extension ("a.postflex.flextext" ->
    "a.postflex"); the short stem drops everything from the first dot
    ("a"), which matches media named after double-extension exports.
    A name without a dot is its own stem.
    """
    if "." not in document_filename:
        return document_filename, document_filename
    return (
        document_filename[: document_filename.rindex(".")],
        document_filename[: document_filename.index(".")],
    )


def build_candidates(
    linked_filenames: Iterable[str],
    document_filename: str,
    extensions: Sequence[str],
) -> tuple[str, ...]:
    """Build the ordered, de-duplicated filenames worth testing.

    Linked filenames come first, then for each extension the long-stem
    guess followed by the short-stem guess.

    Args:
        linked_filenames: Media filenames linked from the document
            (directory components already stripped).
        document_filename: Filename of the FLEx or ELAN document.
        extensions: Extensions for the media kind, with leading dots.

    Returns:
        Candidates in probe order; the first occurrence of a name wins.
    """
    long_stem, short_stem = filename_stems(document_filename)
    raw = list(linked_filenames)
    for extension in extensions:
        raw.append(long_stem + extension)
        raw.append(short_stem + extension)
    return tuple(dict.fromkeys(raw))


def find_first_valid(
    candidates: Iterable[str],
    verifier: MediaVerifier,
    resolve: Callable[[str], str | None] | None = None,
) -> str | None:
    """Return the value for the first candidate the verifier accepts.

    Args:
        candidates: Filenames in probe order.
        verifier: Verifier for the local media directory.
        resolve: Maps an accepted candidate to the value to store. A
            candidate it maps to None is passed over.

    Returns:
        The value to store, or None if no candidate qualifies.
    """
    for candidate in candidates:
        if not verifier.verify(candidate):
            continue
        value = resolve(candidate) if resolve is not None else candidate
        if value is not None:
            return value
    return None

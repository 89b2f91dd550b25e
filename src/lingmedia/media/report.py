"""Missing-media report for a batch run.

The report is an append-only log shared by every document of one batch.
It records media that could not be found anywhere, and media that was
only found remotely but is being used under its local filename.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from lingmedia.media.extensions import MediaKind


@dataclass(frozen=True)
class MissingMediaEntry:
    """Media that no candidate resolved for."""

    document: str
    kind: MediaKind
    candidates: tuple[str, ...]

    def describe(self) -> str:
        return f"{self.document} ({self.kind.value}): {', '.join(self.candidates)}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "missing",
            "document": self.document,
            "kind": self.kind.value,
            "candidates": list(self.candidates),
        }


@dataclass(frozen=True)
class RemoteSubstitutionEntry:
    """Media found only remotely but recorded under its bare filename."""

    document: str
    kind: MediaKind
    filename: str
    remote_url: str

    def describe(self) -> str:
        return f"{self.filename} (at {self.remote_url})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "remote",
            "document": self.document,
            "kind": self.kind.value,
            "filename": self.filename,
            "remote_url": self.remote_url,
        }


ReportEntry = MissingMediaEntry | RemoteSubstitutionEntry


class MissingMediaReport:
    """Append-only list of missing-media entries for one batch."""

    def __init__(self) -> None:
        self._entries: list[ReportEntry] = []

    def add_missing(
        self, document: str, kind: MediaKind, candidates: Sequence[str]
    ) -> MissingMediaEntry:
        """Record that none of the candidates could be found."""
        entry = MissingMediaEntry(document, kind, tuple(candidates))
        self._entries.append(entry)
        return entry

    def add_remote_substitution(
        self, document: str, kind: MediaKind, filename: str, remote_url: str
    ) -> RemoteSubstitutionEntry:
        """Record a remote hit that is used under its local filename."""
        entry = RemoteSubstitutionEntry(document, kind, filename, remote_url)
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> tuple[ReportEntry, ...]:
        return tuple(self._entries)

    @property
    def missing(self) -> list[MissingMediaEntry]:
        return [e for e in self._entries if isinstance(e, MissingMediaEntry)]

    @property
    def substitutions(self) -> list[RemoteSubstitutionEntry]:
        return [e for e in self._entries if isinstance(e, RemoteSubstitutionEntry)]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ReportEntry]:
        return iter(self._entries)

    def lines(self) -> list[str]:
        """Human-readable lines in append order."""
        return [entry.describe() for entry in self._entries]

    def to_list(self) -> list[dict[str, Any]]:
        """JSON-serializable entries in append order."""
        return [entry.to_dict() for entry in self._entries]

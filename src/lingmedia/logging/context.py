"""Document context for structured logging.

Uses contextvars to carry the story ID and document filename being
resolved, so every log record emitted during one document's resolution
can be attributed to it.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_story_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "story_id", default=None
)
_document: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "document", default=None
)


def set_document_context(story_id: str, document: str | None = None) -> None:
    """Set the current document context.

    Args:
        story_id: Story ID of the document being processed.
        document: Filename of the FLEx or ELAN document, or None.
    """
    _story_id.set(story_id)
    _document.set(document)


def clear_document_context() -> None:
    """Clear the current document context."""
    _story_id.set(None)
    _document.set(None)


def get_document_context() -> tuple[str | None, str | None]:
    """Get current document context.

    Returns:
        Tuple of (story_id, document), either may be None.
    """
    return _story_id.get(), _document.get()


@contextmanager
def document_context(
    story_id: str, document: str | None = None
) -> Generator[None, None, None]:
    """Context manager for per-document processing context.

    Sets the context on entry and restores the previous one on exit.

    Example:
        with document_context("a1b2", "story.flextext"):
            logger.info("Resolving media")  # record carries story_id
    """
    old_story_id = _story_id.get()
    old_document = _document.get()
    try:
        set_document_context(story_id, document)
        yield
    finally:
        _story_id.set(old_story_id)
        _document.set(old_document)


class DocumentContextFilter(logging.Filter):
    """Logging filter that injects document context into log records.

    Adds story_id and document attributes, plus a compact document_tag
    like "[story.flextext] " for the text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        story_id, document = get_document_context()

        record.story_id = story_id
        record.document = document

        if document:
            record.document_tag = f"[{document}] "
        elif story_id:
            record.document_tag = f"[{story_id}] "
        else:
            record.document_tag = ""

        return True  # Never filter out records

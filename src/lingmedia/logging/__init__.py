"""Structured logging module for lingmedia.

Provides configurable logging with JSON format support and file rotation.
Includes per-document context so batch progress can be attributed.
"""

from lingmedia.logging.config import configure_logging
from lingmedia.logging.context import (
    DocumentContextFilter,
    clear_document_context,
    document_context,
    get_document_context,
    set_document_context,
)
from lingmedia.logging.handlers import JSONFormatter

__all__ = [
    "DocumentContextFilter",
    "JSONFormatter",
    "clear_document_context",
    "configure_logging",
    "document_context",
    "get_document_context",
    "set_document_context",
]

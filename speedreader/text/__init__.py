"""Structured text container, cursor and builder."""

from speedreader.text.builder import StructuredTextBuilder
from speedreader.text.structured_text import (
    StructuredText,
    TextCursor,
    count_fragments,
    find_container,
)

__all__ = [
    "StructuredText",
    "StructuredTextBuilder",
    "TextCursor",
    "count_fragments",
    "find_container",
]

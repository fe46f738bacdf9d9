"""Data models for the Speed Reader engine."""

from speedreader.models.fragment import (
    Delimiter,
    PivotCalculationMethod,
    TextFragment,
)
from speedreader.models.structured import (
    Chapter,
    ChapterDraft,
    IndexedFragment,
    Paragraph,
)
from speedreader.models.tokenized import TokenizedChapter

__all__ = [
    "Chapter",
    "ChapterDraft",
    "Delimiter",
    "IndexedFragment",
    "Paragraph",
    "PivotCalculationMethod",
    "TextFragment",
    "TokenizedChapter",
]

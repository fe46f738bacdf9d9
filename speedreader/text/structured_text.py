"""Read-only chapter/paragraph/fragment structure with global-index navigation."""

from __future__ import annotations

import logging
from bisect import bisect_left
from collections.abc import Iterator, Sequence
from typing import Protocol

from speedreader.models.fragment import TextFragment
from speedreader.models.structured import (
    Chapter,
    ChapterDraft,
    IndexedFragment,
    Paragraph,
)

logger = logging.getLogger(__name__)


class _IndexRange(Protocol):
    @property
    def last_fragment_number(self) -> int: ...


def find_container(containers: Sequence[_IndexRange], index: int) -> int | None:
    """Locate the container holding a global fragment index.

    Containers must be sorted by global index, which holds for the chapters
    of a text and for the paragraphs of a chapter.

    Args:
        containers: Chapters or paragraphs in text order.
        index: Global fragment index.

    Returns:
        Position of the first container whose last fragment number is
        ``>= index``, or None if every container ends before ``index``.
    """
    position = bisect_left(
        containers, index, key=lambda container: container.last_fragment_number
    )
    if position == len(containers):
        return None
    return position


def count_fragments(chapters: Sequence[Chapter] | Sequence[ChapterDraft]) -> int:
    """Number of fragments, taken from the last non-empty paragraph."""
    for chapter in reversed(chapters):
        for paragraph in reversed(chapter.paragraphs):
            if paragraph.fragments:
                return paragraph.last_fragment_number + 1
    return 0


class TextCursor:
    """Forward cursor over every fragment of a text, in global order.

    The cursor tracks three positions: chapter, paragraph within that
    chapter and fragment within that paragraph. Once the chapter position
    runs past the last chapter the cursor is terminal and the other two
    positions are meaningless.
    """

    def __init__(self, chapters: Sequence[Chapter], chapter_position: int = 0) -> None:
        self._chapters = chapters
        self._chapter_position = chapter_position
        self._paragraph_position = 0
        self._fragment_position = 0

    @property
    def positions(self) -> tuple[int, int, int]:
        return self._chapter_position, self._paragraph_position, self._fragment_position

    def is_terminal(self) -> bool:
        return self._chapter_position >= len(self._chapters)

    def current(self) -> IndexedFragment:
        """Return the fragment under the cursor.

        Raises:
            IndexError: If the cursor is terminal.
        """
        if self.is_terminal():
            raise IndexError("Cursor is past the last fragment")
        chapter = self._chapters[self._chapter_position]
        paragraph = chapter.paragraphs[self._paragraph_position]
        return paragraph.fragments[self._fragment_position]

    def advance(self) -> None:
        """Move to the next fragment; a terminal cursor stays terminal."""
        if self.is_terminal():
            return

        chapter = self._chapters[self._chapter_position]
        self._fragment_position += 1
        if self._fragment_position < len(chapter.paragraphs[self._paragraph_position].fragments):
            return

        self._fragment_position = 0
        self._paragraph_position += 1
        if self._paragraph_position < len(chapter.paragraphs):
            return

        self._paragraph_position = 0
        self._chapter_position += 1

    def same_position(self, other: TextCursor) -> bool:
        """Compare two cursors; all terminal cursors are equal."""
        if self.is_terminal() or other.is_terminal():
            return self.is_terminal() and other.is_terminal()
        return self.positions == other.positions


class StructuredText:
    """Finalized text: chapters of paragraphs of indexed fragments.

    Instances are produced by ``StructuredTextBuilder.finalize()`` and are
    not mutated afterwards, so any number of readers may query them.
    Lookups binary-search the chapters, then the paragraphs of the chapter,
    by last fragment number.
    """

    def __init__(self, chapters: Sequence[Chapter] = ()) -> None:
        self._chapters: tuple[Chapter, ...] = tuple(chapters)

    @property
    def chapters(self) -> tuple[Chapter, ...]:
        return self._chapters

    def chapters_count(self) -> int:
        return len(self._chapters)

    def total_fragments_count(self) -> int:
        return count_fragments(self._chapters)

    def is_empty(self) -> bool:
        return self.total_fragments_count() == 0

    def __len__(self) -> int:
        return self.total_fragments_count()

    def __iter__(self) -> Iterator[IndexedFragment]:
        cursor = self.begin()
        while not cursor.is_terminal():
            yield cursor.current()
            cursor.advance()

    def begin(self) -> TextCursor:
        return TextCursor(self._chapters)

    def end(self) -> TextCursor:
        return TextCursor(self._chapters, chapter_position=len(self._chapters))

    # ── Lookup ───────────────────────────────────────────────────────────

    def _locate(self, index: int) -> tuple[Chapter, int, int] | None:
        chapter_position = find_container(self._chapters, index)
        if chapter_position is None:
            logger.warning("Fragment index %d is past the end of the text", index)
            return None

        chapter = self._chapters[chapter_position]
        paragraph_position = find_container(chapter.paragraphs, index)
        if paragraph_position is None:
            logger.warning(
                "Fragment index %d not found in chapter %r", index, chapter.name
            )
            return None

        return chapter, chapter_position, paragraph_position

    def fragment(self, index: int) -> TextFragment | None:
        """Return the fragment at a global index.

        Args:
            index: Global fragment index.

        Returns:
            The fragment, or None if no fragment has that index.
        """
        located = self._locate(index)
        if located is None:
            return None

        chapter, _, paragraph_position = located
        paragraph: Paragraph = chapter.paragraphs[paragraph_position]
        fragment_position = bisect_left(
            paragraph.fragments, index, key=lambda item: item.index
        )
        if (
            fragment_position == len(paragraph.fragments)
            or paragraph.fragments[fragment_position].index != index
        ):
            logger.warning("Fragment index %d not found", index)
            return None

        return paragraph.fragments[fragment_position].fragment

    def chapter_index_of(self, index: int) -> int | None:
        """Position of the chapter containing a global index, if any."""
        located = self._locate(index)
        return None if located is None else located[1]

    # ── Boundary navigation ──────────────────────────────────────────────

    def previous_chapter_start_index(self, current_index: int) -> int:
        """Start of the preceding chapter, or of the first chapter when already there."""
        located = self._locate(current_index)
        if located is None:
            return current_index

        _, chapter_position, _ = located
        if chapter_position > 0:
            chapter_position -= 1
        return self._chapters[chapter_position].first_fragment_number

    def next_chapter_start_index(self, current_index: int) -> int:
        """Start of the following chapter; ``current_index`` in the last chapter."""
        located = self._locate(current_index)
        if located is None:
            return current_index

        _, chapter_position, _ = located
        if chapter_position + 1 < len(self._chapters):
            return self._chapters[chapter_position + 1].first_fragment_number
        return current_index

    def previous_paragraph_start_index(self, current_index: int) -> int:
        """Start of the preceding paragraph of the same chapter.

        In the first paragraph of a chapter this is the start of that
        paragraph; navigation never crosses into the previous chapter.
        """
        located = self._locate(current_index)
        if located is None:
            return current_index

        chapter, _, paragraph_position = located
        if paragraph_position > 0:
            paragraph_position -= 1
        return chapter.paragraphs[paragraph_position].first_fragment_number

    def next_paragraph_start_index(self, current_index: int) -> int:
        """Start of the following paragraph of the same chapter, else ``current_index``."""
        located = self._locate(current_index)
        if located is None:
            return current_index

        chapter, _, paragraph_position = located
        if paragraph_position + 1 < len(chapter.paragraphs):
            return chapter.paragraphs[paragraph_position + 1].first_fragment_number
        return current_index

    # ── Sentence navigation ──────────────────────────────────────────────

    def _walk_forward(self, index: int) -> Iterator[IndexedFragment]:
        located = self._locate(index)
        if located is None:
            return
        _, chapter_position, paragraph_position = located
        for chapter in self._chapters[chapter_position:]:
            for paragraph in chapter.paragraphs[paragraph_position:]:
                for item in paragraph.fragments:
                    if item.index >= index:
                        yield item
            paragraph_position = 0

    def _walk_backward(self, index: int) -> Iterator[IndexedFragment]:
        located = self._locate(index)
        if located is None:
            return
        _, chapter_position, paragraph_position = located
        for chapter in reversed(self._chapters[: chapter_position + 1]):
            paragraphs = chapter.paragraphs
            if paragraph_position is not None:
                paragraphs = paragraphs[: paragraph_position + 1]
                paragraph_position = None
            for paragraph in reversed(paragraphs):
                for item in reversed(paragraph.fragments):
                    if item.index <= index:
                        yield item

    def _sentence_start(self, index: int) -> int:
        for item in self._walk_backward(index - 1):
            if item.fragment.is_end_of_sentence:
                return item.index + 1
        return 0

    def previous_sentence_start_index(self, current_index: int) -> int:
        """Start of the current sentence, or of the previous one when already at a start."""
        if self.fragment(current_index) is None:
            return current_index

        start = self._sentence_start(current_index)
        if start < current_index or start == 0:
            return start
        return self._sentence_start(start - 1)

    def next_sentence_start_index(self, current_index: int) -> int:
        """First fragment after the end of the current sentence, else ``current_index``."""
        if self.fragment(current_index) is None:
            return current_index

        last_index = self.total_fragments_count() - 1
        for item in self._walk_forward(current_index):
            if item.fragment.is_end_of_sentence:
                return item.index + 1 if item.index < last_index else current_index
        return current_index

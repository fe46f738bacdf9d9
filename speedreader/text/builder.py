"""Load-phase writer that assembles a StructuredText."""

import logging
from collections.abc import Iterable

from speedreader.models.fragment import TextFragment
from speedreader.models.structured import (
    Chapter,
    ChapterDraft,
    IndexedFragment,
    Paragraph,
)
from speedreader.text.structured_text import StructuredText, count_fragments

logger = logging.getLogger(__name__)


class StructuredTextBuilder:
    """Accumulates chapters while a text is being loaded.

    The builder is the only writer: chapters are appended (whole or
    incrementally through the draft returned by ``add_empty_chapter``),
    then ``finalize()`` strips empty containers, checks the global index
    sequence and returns a frozen ``StructuredText``.

    Callers that append ready-made ``IndexedFragment`` objects are
    responsible for their indices. ``add_paragraph`` numbers its fragments
    after the last fragment already in the builder.
    """

    def __init__(self) -> None:
        self._chapters: list[ChapterDraft] = []

    @property
    def chapters(self) -> list[ChapterDraft]:
        return self._chapters

    @property
    def next_fragment_index(self) -> int:
        return self.total_fragments_count()

    def add_chapter(
        self,
        chapter: Chapter | ChapterDraft | str,
        paragraphs: Iterable[Paragraph] | None = None,
    ) -> ChapterDraft:
        """Append a fully formed chapter.

        Args:
            chapter: A chapter, or the name of a chapter to create.
            paragraphs: Paragraphs of the new chapter when ``chapter`` is a name.

        Returns:
            The appended chapter draft.
        """
        if isinstance(chapter, str):
            draft = ChapterDraft(name=chapter, paragraphs=list(paragraphs or []))
        elif paragraphs is not None:
            raise ValueError("paragraphs can only be given together with a chapter name")
        elif isinstance(chapter, ChapterDraft):
            draft = chapter
        else:
            draft = ChapterDraft(name=chapter.name, paragraphs=list(chapter.paragraphs))

        self._chapters.append(draft)
        return draft

    def add_empty_chapter(self, name: str) -> ChapterDraft:
        """Append a chapter with no paragraphs and return it for filling in."""
        draft = ChapterDraft(name=name)
        self._chapters.append(draft)
        return draft

    def add_paragraph(
        self, chapter: ChapterDraft, fragments: Iterable[TextFragment]
    ) -> Paragraph:
        """Append a paragraph to ``chapter``, numbering its fragments.

        Numbering continues after the last fragment in the builder, including
        paragraphs appended directly through a chapter draft. Empty fragments
        are skipped so they never take up an index.

        Args:
            chapter: Chapter draft, normally the last one added.
            fragments: Fragments in reading order.

        Returns:
            The new paragraph (possibly empty).
        """
        start = self.total_fragments_count()
        indexed = [
            IndexedFragment(fragment=fragment, index=start + offset)
            for offset, fragment in enumerate(f for f in fragments if not f.is_empty)
        ]
        paragraph = Paragraph(fragments=tuple(indexed))
        chapter.paragraphs.append(paragraph)
        return paragraph

    def clear(self) -> None:
        self._chapters.clear()

    def remove_empty_items(self) -> None:
        """Drop paragraphs without fragments, then chapters without paragraphs."""
        for chapter in self._chapters:
            chapter.paragraphs = [p for p in chapter.paragraphs if p.fragments]
        self._chapters = [c for c in self._chapters if c.paragraphs]

    def total_fragments_count(self) -> int:
        return count_fragments(self._chapters)

    def finalize(self) -> StructuredText:
        """Normalize the collected chapters and freeze them into a StructuredText.

        Returns:
            A StructuredText built from frozen copies of the chapters.

        Raises:
            ValueError: If global indices do not run 0, 1, 2, ... in order.
        """
        self.remove_empty_items()
        self._validate_indices()

        text = StructuredText(
            [
                Chapter(name=draft.name, paragraphs=tuple(draft.paragraphs))
                for draft in self._chapters
            ]
        )
        logger.info(
            "Finalized text: %d chapters, %d fragments",
            text.chapters_count(),
            text.total_fragments_count(),
        )
        return text

    def _validate_indices(self) -> None:
        expected = 0
        for chapter in self._chapters:
            for paragraph in chapter.paragraphs:
                for item in paragraph.fragments:
                    if item.index != expected:
                        raise ValueError(
                            f"Fragment index {item.index} in chapter "
                            f"'{chapter.name}' breaks the sequence "
                            f"(expected {expected})"
                        )
                    expected += 1

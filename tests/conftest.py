"""Shared fixtures for structured text tests."""

from collections.abc import Callable

import pytest

from speedreader.models import Delimiter, TextFragment
from speedreader.text import StructuredText, StructuredTextBuilder


def _make_fragments(*words: str) -> list[TextFragment]:
    return [TextFragment(word=w, delimiter=Delimiter.SPACE) for w in words]


def _build_text(layout: list[tuple[str, list[int]]]) -> StructuredText:
    """Build a text from (chapter name, [paragraph sizes]) pairs.

    Words are named ``w<global index>`` so lookups are easy to check.
    """
    builder = StructuredTextBuilder()
    for name, sizes in layout:
        chapter = builder.add_empty_chapter(name)
        for size in sizes:
            start = builder.next_fragment_index
            builder.add_paragraph(
                chapter, _make_fragments(*(f"w{start + i}" for i in range(size)))
            )
    return builder.finalize()


@pytest.fixture
def text_factory() -> Callable[[list[tuple[str, list[int]]]], StructuredText]:
    return _build_text


@pytest.fixture
def two_chapters() -> StructuredText:
    # Ch1: 0-4, Ch2: 5-9
    return _build_text([("Ch1", [5]), ("Ch2", [5])])


@pytest.fixture
def book() -> StructuredText:
    # Intro: 0-2 | 3-4 ; Middle: 5-14 | 15-19 | 20 ; End: 21-23
    return _build_text(
        [
            ("Intro", [3, 2]),
            ("Middle", [10, 5, 1]),
            ("End", [3]),
        ]
    )

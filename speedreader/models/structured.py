"""Chapter, paragraph and indexed fragment records."""

from pydantic import BaseModel, ConfigDict, Field

from speedreader.models.fragment import TextFragment


class IndexedFragment(BaseModel):
    """A fragment paired with its position in the flattened text."""

    model_config = ConfigDict(frozen=True)

    fragment: TextFragment
    index: int = Field(ge=0)  # Global, zero-based


class Paragraph(BaseModel):
    """Ordered run of indexed fragments.

    The first/last accessors require a non-empty paragraph.
    """

    model_config = ConfigDict(frozen=True)

    fragments: tuple[IndexedFragment, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.fragments

    @property
    def first_fragment_number(self) -> int:
        return self.fragments[0].index

    @property
    def last_fragment_number(self) -> int:
        return self.fragments[-1].index


class _ChapterRanges:
    """Fragment range accessors shared by finalized and draft chapters."""

    @property
    def is_empty(self) -> bool:
        return not self.paragraphs

    @property
    def first_fragment_number(self) -> int:
        return self.paragraphs[0].first_fragment_number

    @property
    def last_fragment_number(self) -> int:
        return self.paragraphs[-1].last_fragment_number

    @property
    def fragments_count(self) -> int:
        return sum(len(paragraph.fragments) for paragraph in self.paragraphs)


class Chapter(_ChapterRanges, BaseModel):
    """A named, ordered sequence of paragraphs, as held by a finalized text."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    paragraphs: tuple[Paragraph, ...] = ()


class ChapterDraft(_ChapterRanges, BaseModel):
    """Mutable chapter handed out by the builder while a text is loading."""

    name: str = ""
    paragraphs: list[Paragraph] = Field(default_factory=list)

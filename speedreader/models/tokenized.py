"""Intermediate tokenizer output consumed by the loader."""

from pydantic import BaseModel, Field

from speedreader.models.fragment import TextFragment


class TokenizedChapter(BaseModel):
    """A chapter as produced by the tokenizer, before global indexing.

    Each paragraph is a list of fragments in reading order.
    """

    name: str = ""
    paragraphs: list[list[TextFragment]] = Field(default_factory=list)

    @property
    def fragments_count(self) -> int:
        return sum(len(paragraph) for paragraph in self.paragraphs)

"""Tests for plain text tokenizing."""

import pytest

from speedreader.config import TokenizerConfig
from speedreader.ingestion.tokenizer import TextTokenizer, classify_delimiter
from speedreader.models import Delimiter


@pytest.fixture
def tokenizer() -> TextTokenizer:
    return TextTokenizer(config=TokenizerConfig())


class TestClassifyDelimiter:
    @pytest.mark.parametrize(
        ("punctuation", "expected"),
        [
            ("", Delimiter.SPACE),
            (".", Delimiter.PERIOD),
            ("...", Delimiter.ELLIPSIS),
            ("…", Delimiter.ELLIPSIS),
            ("?!", Delimiter.QUESTION_MARK),
            ("!", Delimiter.EXCLAMATION_MARK),
            (";", Delimiter.SEMICOLON),
            (":", Delimiter.COLON),
            (",", Delimiter.COMMA),
            ('",', Delimiter.COMMA),
            ('."', Delimiter.PERIOD),
            ("—", Delimiter.DASH),
            (")", Delimiter.BRACKET),
            ("”", Delimiter.QUOTE),
            ("*", Delimiter.SPACE),
        ],
    )
    def test_classification(self, punctuation: str, expected: Delimiter) -> None:
        assert classify_delimiter(punctuation) == expected


class TestTokenizeParagraph:
    def test_words_and_punctuation(self, tokenizer: TextTokenizer) -> None:
        fragments = tokenizer.tokenize_paragraph('He said, "Stop."')
        assert [(f.word, f.punctuation) for f in fragments] == [
            ("He", ""),
            ("said", ","),
            ('"Stop', '."'),
        ]
        assert [f.delimiter for f in fragments] == [
            Delimiter.SPACE,
            Delimiter.COMMA,
            Delimiter.PERIOD,
        ]

    def test_last_fragment_without_punctuation_ends_with_newline(
        self, tokenizer: TextTokenizer
    ) -> None:
        fragments = tokenizer.tokenize_paragraph("A heading line")
        assert fragments[-1].delimiter == Delimiter.NEWLINE
        assert fragments[-1].is_end_of_sentence

    def test_standalone_punctuation_attaches_to_previous_word(
        self, tokenizer: TextTokenizer
    ) -> None:
        fragments = tokenizer.tokenize_paragraph("wait — what")
        assert [f.text for f in fragments] == ["wait—", "what"]
        assert fragments[0].delimiter == Delimiter.DASH

    def test_leading_punctuation_attaches_to_next_word(
        self, tokenizer: TextTokenizer
    ) -> None:
        fragments = tokenizer.tokenize_paragraph("« Bonjour »")
        assert [(f.word, f.punctuation) for f in fragments] == [("«Bonjour", "»")]

    def test_hyphenated_and_contracted_words_stay_whole(
        self, tokenizer: TextTokenizer
    ) -> None:
        fragments = tokenizer.tokenize_paragraph("don't well-known")
        assert [f.word for f in fragments] == ["don't", "well-known"]

    def test_punctuation_only_paragraph(self, tokenizer: TextTokenizer) -> None:
        fragments = tokenizer.tokenize_paragraph("* * *")
        assert len(fragments) == 1
        assert fragments[0].word == ""
        assert fragments[0].punctuation == "***"

    def test_blank_paragraph(self, tokenizer: TextTokenizer) -> None:
        assert tokenizer.tokenize_paragraph("   \n ") == []


class TestTokenizeText:
    def test_text_without_headings_is_one_chapter(self, tokenizer: TextTokenizer) -> None:
        chapters = tokenizer.tokenize("First paragraph here.\n\nSecond one.")
        assert len(chapters) == 1
        assert chapters[0].name == ""
        assert len(chapters[0].paragraphs) == 2

    def test_single_newlines_do_not_split_paragraphs(self, tokenizer: TextTokenizer) -> None:
        chapters = tokenizer.tokenize("a wrapped\nline of text")
        assert len(chapters[0].paragraphs) == 1
        assert chapters[0].fragments_count == 5

    def test_chapter_headings(self, tokenizer: TextTokenizer) -> None:
        text = (
            "Preface words.\n\n"
            "Chapter 1: The Start\n\n"
            "Once upon a time.\n\n"
            "It went on.\n\n"
            "CHAPTER II\n"
            "The end."
        )
        chapters = tokenizer.tokenize(text)
        assert [c.name for c in chapters] == ["", "Chapter 1: The Start", "CHAPTER II"]
        assert [len(c.paragraphs) for c in chapters] == [1, 2, 1]

    def test_heading_at_start_leaves_empty_default_chapter(
        self, tokenizer: TextTokenizer
    ) -> None:
        chapters = tokenizer.tokenize("Chapter 1\n\nText.")
        assert chapters[0].paragraphs == []
        assert chapters[1].name == "Chapter 1"

    def test_sentence_starting_with_part_is_not_a_heading(
        self, tokenizer: TextTokenizer
    ) -> None:
        chapters = tokenizer.tokenize("Part of the river was frozen.")
        assert len(chapters) == 1

    def test_short_line_inside_paragraph_is_not_a_heading(
        self, tokenizer: TextTokenizer
    ) -> None:
        chapters = tokenizer.tokenize("She said it was hard.\nPart two.\nThen she left.")
        assert len(chapters) == 1
        assert chapters[0].fragments_count == 10

    def test_heading_needs_a_number(self, tokenizer: TextTokenizer) -> None:
        chapters = tokenizer.tokenize("He paused.\n\nBook it.\n\nPart two.")
        assert len(chapters) == 1
        assert len(chapters[0].paragraphs) == 3

    def test_roman_numeral_heading_after_blank_line(self, tokenizer: TextTokenizer) -> None:
        chapters = tokenizer.tokenize("He paused.\n\nPart IV. The Return\nWords.")
        assert [c.name for c in chapters] == ["", "Part IV. The Return"]

    def test_default_chapter_name_override(self, tokenizer: TextTokenizer) -> None:
        chapters = tokenizer.tokenize(
            "Words.\n\nChapter 2\n\nMore.", default_chapter_name="Moby Dick"
        )
        assert [c.name for c in chapters] == ["Moby Dick", "Chapter 2"]

    def test_windows_newlines(self, tokenizer: TextTokenizer) -> None:
        chapters = tokenizer.tokenize("One.\r\n\r\nTwo.")
        assert len(chapters[0].paragraphs) == 2

    def test_paragraph_per_line(self) -> None:
        tokenizer = TextTokenizer(config=TokenizerConfig(paragraph_per_line=True))
        chapters = tokenizer.tokenize("line one\nline two\n\nline three")
        assert len(chapters[0].paragraphs) == 3

    def test_default_chapter_name(self) -> None:
        tokenizer = TextTokenizer(config=TokenizerConfig(default_chapter_name="Untitled"))
        assert tokenizer.tokenize("Words.")[0].name == "Untitled"

"""Plain text segmentation into chapters, paragraphs and fragments."""

import logging
import re

from speedreader.config import TokenizerConfig
from speedreader.models.fragment import Delimiter, TextFragment
from speedreader.models.tokenized import TokenizedChapter

logger = logging.getLogger(__name__)

# Everything up to the last word character, then the trailing punctuation
WORD_RE = re.compile(r"^(.*\w)(\W*)$", re.DOTALL)

PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")

DASHES = "-‐‑‒–—―"
BRACKETS = "()[]{}<>"
QUOTES = "\"'‘’‚‛“”„«»"

# Checked in order: the first class present in the punctuation wins.
DELIMITER_PRIORITY: list[tuple[Delimiter, str]] = [
    (Delimiter.QUESTION_MARK, "?"),
    (Delimiter.EXCLAMATION_MARK, "!"),
    (Delimiter.PERIOD, "."),
    (Delimiter.SEMICOLON, ";"),
    (Delimiter.COLON, ":"),
    (Delimiter.COMMA, ","),
    (Delimiter.DASH, DASHES),
    (Delimiter.BRACKET, BRACKETS),
    (Delimiter.QUOTE, QUOTES),
]


def classify_delimiter(punctuation: str) -> Delimiter:
    """Map trailing punctuation to a delimiter class.

    Args:
        punctuation: Punctuation that follows a word, e.g. ``'",'``.

    Returns:
        The delimiter; ``SPACE`` when nothing recognizable follows the word.
    """
    if "..." in punctuation or "…" in punctuation:
        return Delimiter.ELLIPSIS
    for delimiter, chars in DELIMITER_PRIORITY:
        if any(ch in punctuation for ch in chars):
            return delimiter
    return Delimiter.SPACE


class TextTokenizer:
    """Splits raw text into chapters of paragraphs of fragments.

    Chapters start at heading lines matching ``chapter_pattern``; the
    heading becomes the chapter name and text before the first heading
    forms a chapter named ``default_chapter_name``. Paragraphs are
    separated by blank lines (or by every line break when
    ``paragraph_per_line`` is set).

    Args:
        config: TokenizerConfig with the chapter pattern and paragraph mode.
    """

    def __init__(self, config: TokenizerConfig) -> None:
        self._config = config
        self._chapter_re = re.compile(
            config.chapter_pattern, re.MULTILINE | re.IGNORECASE
        )

    def tokenize(
        self, text: str, default_chapter_name: str | None = None
    ) -> list[TokenizedChapter]:
        """Tokenize a whole text.

        Args:
            text: Raw text, any newline convention.
            default_chapter_name: Name for the text before the first heading;
                the configured name when None.

        Returns:
            Chapters in text order. Chapters and paragraphs may be empty;
            the builder strips them when finalizing.
        """
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        headings = list(self._chapter_re.finditer(text))

        chapters = [
            TokenizedChapter(
                name=(
                    self._config.default_chapter_name
                    if default_chapter_name is None
                    else default_chapter_name
                ),
                paragraphs=self._split_paragraphs(
                    text[: headings[0].start()] if headings else text
                ),
            )
        ]

        for i, heading in enumerate(headings):
            end = headings[i + 1].start() if i + 1 < len(headings) else len(text)
            chapters.append(
                TokenizedChapter(
                    name=heading.group().strip(),
                    paragraphs=self._split_paragraphs(text[heading.end() : end]),
                )
            )

        logger.debug(
            "Tokenized %d chapters (%d headings)", len(chapters), len(headings)
        )
        return chapters

    def _split_paragraphs(self, text: str) -> list[list[TextFragment]]:
        if self._config.paragraph_per_line:
            blocks = text.split("\n")
        else:
            blocks = PARAGRAPH_BREAK_RE.split(text)

        paragraphs = []
        for block in blocks:
            fragments = self.tokenize_paragraph(block)
            if fragments:
                paragraphs.append(fragments)
        return paragraphs

    def tokenize_paragraph(self, paragraph: str) -> list[TextFragment]:
        """Split one paragraph into fragments.

        Tokens without any word character are glued to the previous
        fragment's punctuation, or to the start of the next word at the
        beginning of a paragraph.

        Args:
            paragraph: Paragraph text; internal line breaks count as spaces.

        Returns:
            Fragments in reading order, the last one ending with a newline
            delimiter unless it carries its own punctuation.
        """
        pieces: list[list[str]] = []  # [word, punctuation]
        prefix = ""

        for token in paragraph.split():
            match = WORD_RE.match(token)
            if match is None:
                if pieces:
                    pieces[-1][1] += token
                else:
                    prefix += token
                continue
            pieces.append([prefix + match.group(1), match.group(2)])
            prefix = ""

        if prefix:
            pieces.append(["", prefix])

        fragments = []
        for i, (word, punctuation) in enumerate(pieces):
            delimiter = classify_delimiter(punctuation)
            if i == len(pieces) - 1 and not punctuation:
                delimiter = Delimiter.NEWLINE
            fragments.append(
                TextFragment(word=word, punctuation=punctuation, delimiter=delimiter)
            )
        return fragments

"""Text fragment model and pivot letter selection."""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict


class Delimiter(str, Enum):
    """Punctuation or whitespace class that terminated a fragment."""

    NONE = "none"
    SPACE = "space"
    NEWLINE = "newline"
    DASH = "dash"
    BRACKET = "bracket"
    QUOTE = "quote"
    COMMA = "comma"
    COLON = "colon"
    SEMICOLON = "semicolon"
    PERIOD = "period"
    ELLIPSIS = "ellipsis"
    EXCLAMATION_MARK = "exclamation_mark"
    QUESTION_MARK = "question_mark"

    @property
    def label(self) -> str:
        """Human-readable name of the delimiter."""
        return DELIMITER_LABELS[self]


DELIMITER_LABELS: dict[Delimiter, str] = {
    Delimiter.NONE: "No delimiter",
    Delimiter.SPACE: "Space",
    Delimiter.NEWLINE: "Newline",
    Delimiter.DASH: "Dash",
    Delimiter.BRACKET: "Bracket",
    Delimiter.QUOTE: "Quote",
    Delimiter.COMMA: "Comma",
    Delimiter.COLON: "Colon",
    Delimiter.SEMICOLON: "Semicolon",
    Delimiter.PERIOD: "Period",
    Delimiter.ELLIPSIS: "Ellipsis",
    Delimiter.EXCLAMATION_MARK: "Exclamation mark",
    Delimiter.QUESTION_MARK: "Question mark",
}

END_OF_SENTENCE_DELIMITERS: frozenset[Delimiter] = frozenset(
    {
        Delimiter.PERIOD,
        Delimiter.QUESTION_MARK,
        Delimiter.EXCLAMATION_MARK,
        Delimiter.NEWLINE,
        Delimiter.ELLIPSIS,
    }
)


class PivotCalculationMethod(str, Enum):
    """Strategy for choosing the highlighted letter of a word."""

    MAGIC = "magic"
    MIDDLE = "middle"
    QUARTER = "quarter"
    SQUARE_ROOT = "square_root"
    CUBIC_ROOT = "cubic_root"
    LOGARITHM = "logarithm"
    HALF = "half"  # truncating length // 2, also the fallback


def _round_half_away(value: float) -> int:
    # Only ever called with non-negative values
    return math.floor(value + 0.5)


def _magic_offset(word_length: int) -> int:
    if word_length == 0:
        return -1
    if word_length == 1:
        return 0  # First letter
    if word_length <= 5:
        return 1  # Second letter
    if word_length <= 9:
        return 2
    if word_length <= 13:
        return 3
    return 4


_REAL_FORMULAS = {
    PivotCalculationMethod.MIDDLE: lambda n: n / 2.0,
    PivotCalculationMethod.QUARTER: lambda n: n / 4.0,
    PivotCalculationMethod.SQUARE_ROOT: math.sqrt,
    PivotCalculationMethod.CUBIC_ROOT: lambda n: n ** (1.0 / 3.0),
    PivotCalculationMethod.LOGARITHM: math.log2,
}


def pivot_offset(method: PivotCalculationMethod, word_length: int) -> int:
    """Return the pivot position relative to the first alphanumeric character.

    Args:
        method: Calculation strategy.
        word_length: Number of alphanumeric characters in the word.

    Returns:
        Zero-based offset, or -1 when the word has nothing to highlight.
    """
    if word_length <= 0:
        return -1
    if method == PivotCalculationMethod.MAGIC:
        return _magic_offset(word_length)

    formula = _REAL_FORMULAS.get(method)
    if formula is None:
        return max(word_length // 2 - 1, 0)
    return max(_round_half_away(formula(word_length)) - 1, 0)


class TextFragment(BaseModel):
    """One displayable unit: a word, its trailing punctuation and delimiter.

    Fragments are immutable. ``text`` is what the reader sees; the
    delimiter drives pacing (longer pauses at sentence ends).
    """

    model_config = ConfigDict(frozen=True)

    word: str = ""
    punctuation: str = ""
    delimiter: Delimiter = Delimiter.NONE

    @property
    def text(self) -> str:
        return self.word + self.punctuation

    @property
    def is_end_of_sentence(self) -> bool:
        return self.delimiter in END_OF_SENTENCE_DELIMITERS

    @property
    def is_empty(self) -> bool:
        return not self.word and not self.punctuation

    def pivot_letter_index(
        self, method: PivotCalculationMethod = PivotCalculationMethod.MAGIC
    ) -> int:
        """Index into ``word`` of the letter to highlight.

        Leading quotes and other non-alphanumeric characters are skipped.
        If the chosen position lands on punctuation inside the word it is
        moved one step towards the middle of the word.

        Args:
            method: Pivot calculation strategy.

        Returns:
            Character index into ``word``, or -1 if there is no letter to
            highlight.
        """
        word_start_index = 0
        word_length = 0
        word_started = False
        for ch in self.word:
            if ch.isalnum():
                word_started = True
                word_length += 1
            elif not word_started:
                word_start_index += 1

        offset = pivot_offset(method, word_length)
        if offset == -1:
            return -1

        pivot_index = word_start_index + offset
        if word_length > 1 and not self.word[pivot_index].isalnum():
            half = word_length // 2
            if pivot_index < half:
                return pivot_index + 1
            # Ties move left as well
            return pivot_index - 1
        return pivot_index

    def split_pivot(
        self, method: PivotCalculationMethod = PivotCalculationMethod.MAGIC
    ) -> tuple[str, str, str]:
        """Split ``word`` around its pivot letter for highlighted display.

        Returns:
            ``(before, pivot, after)``; ``pivot`` is empty when the word has
            no letter to highlight, in which case ``before`` holds the word.
        """
        index = self.pivot_letter_index(method)
        if index == -1:
            return self.word, "", ""
        return self.word[:index], self.word[index], self.word[index + 1 :]

"""Loads plain text into a finalized StructuredText."""

import logging
from pathlib import Path

import chardet

from speedreader.config import LoaderConfig
from speedreader.ingestion.tokenizer import TextTokenizer
from speedreader.text.builder import StructuredTextBuilder
from speedreader.text.structured_text import StructuredText

logger = logging.getLogger(__name__)


class TextLoader:
    """Reads a text, tokenizes it and builds the navigable structure.

    Args:
        config: LoaderConfig with encoding detection and tokenizer settings.
    """

    def __init__(self, config: LoaderConfig) -> None:
        self._config = config
        self._tokenizer = TextTokenizer(config.tokenizer)

    def load_text(self, text: str, title: str | None = None) -> StructuredText:
        """Build a StructuredText from raw text.

        Args:
            text: The text to read.
            title: Name of the chapter holding text before the first
                heading; the configured default chapter name when None.

        Returns:
            Finalized StructuredText; empty if the text has no words.
        """
        builder = StructuredTextBuilder()
        for tokenized in self._tokenizer.tokenize(text, default_chapter_name=title):
            chapter = builder.add_empty_chapter(tokenized.name)
            for fragments in tokenized.paragraphs:
                builder.add_paragraph(chapter, fragments)

        return builder.finalize()

    def load_file(
        self, file_path: str | Path, title: str | None = None
    ) -> StructuredText:
        """Read a plain text file and build a StructuredText from it.

        Args:
            file_path: Path to the text file.
            title: Passed on to ``load_text``.

        Returns:
            Finalized StructuredText.

        Raises:
            FileNotFoundError: If file_path does not exist.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        text = self._read_text(path)
        structured = self.load_text(text, title=title)
        logger.info(
            "Loaded %s: %d chapters, %d fragments",
            path.name,
            structured.chapters_count(),
            structured.total_fragments_count(),
        )
        return structured

    def _read_text(self, file_path: Path) -> str:
        """Read a text file with encoding detection.

        Tries UTF-8 first, then the chardet guess. A guess below
        ``min_encoding_confidence`` is only tried after the configured
        fallback encoding.

        Args:
            file_path: Path to the text file.

        Returns:
            The file content as a string.
        """
        try:
            return file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            pass

        raw_bytes = file_path.read_bytes()
        detected = chardet.detect(raw_bytes)
        fallback = self._config.fallback_encoding
        encoding = detected.get("encoding") or fallback
        confidence = detected.get("confidence") or 0.0

        candidates = [encoding, fallback]
        if confidence < self._config.min_encoding_confidence:
            logger.warning(
                "Low confidence encoding detection for %s: %s (%.0f%%), trying %s first",
                file_path,
                encoding,
                confidence * 100,
                fallback,
            )
            candidates.reverse()

        for candidate in candidates:
            try:
                return raw_bytes.decode(candidate)
            except (UnicodeDecodeError, LookupError):
                logger.debug("Could not decode %s as %s", file_path, candidate)

        logger.error("Failed to decode file: %s", file_path)
        return raw_bytes.decode("utf-8", errors="replace")

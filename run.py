"""Entry point: load a text file and print its chapter outline."""

import logging
import sys
from pathlib import Path

from speedreader.config import load_config
from speedreader.ingestion import TextLoader


def main() -> None:
    """Load the text named on the command line and print its outline."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    if len(sys.argv) != 2:
        print("usage: python run.py <text file>", file=sys.stderr)
        sys.exit(2)

    config = load_config()
    text = TextLoader(config.loader).load_file(
        sys.argv[1], title=Path(sys.argv[1]).stem
    )

    for number, chapter in enumerate(text.chapters, start=1):
        print(f"{number:3}. {chapter.name or '(untitled)'}: {chapter.fragments_count} words")

    wpm = config.reader.reading_speed_wpm
    total = text.total_fragments_count()
    print(f"{total} words, about {total / wpm:.1f} minutes at {wpm} WPM")


if __name__ == "__main__":
    main()

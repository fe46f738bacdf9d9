"""Text ingestion: tokenizing and loading."""

from speedreader.ingestion.loader import TextLoader
from speedreader.ingestion.tokenizer import TextTokenizer, classify_delimiter

__all__ = ["TextLoader", "TextTokenizer", "classify_delimiter"]

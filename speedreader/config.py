"""Configuration loader for the Speed Reader engine."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from speedreader.models.fragment import PivotCalculationMethod


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Speed Reader"
    version: str = "1.0.0"


class ReaderConfig(BaseModel):
    """Settings handed to the playback loop and the renderer."""

    reading_speed_wpm: int = Field(default=300, ge=100, le=800)
    pivot_method: PivotCalculationMethod = PivotCalculationMethod.MAGIC


class TokenizerConfig(BaseModel):
    """Plain text segmentation configuration."""

    # A heading is a line of its own, after a blank line or at the very start,
    # and numbers its section with digits or roman numerals.
    chapter_pattern: str = (
        r"(?:\A|\n[ \t]*\n)[ \t]*(?:chapter|part|book)[ \t]+(?:\d+|[ivxlcdm]+)\b"
        r"[ \t]*(?:[:.—-].*)?$"
    )
    default_chapter_name: str = ""
    paragraph_per_line: bool = False


class LoaderConfig(BaseModel):
    """Text file loading configuration."""

    min_encoding_confidence: float = Field(default=0.7, ge=0.0, le=1.0)
    fallback_encoding: str = "windows-1252"
    tokenizer: TokenizerConfig = Field(default_factory=TokenizerConfig)


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    reader: ReaderConfig = Field(default_factory=ReaderConfig)
    loader: LoaderConfig = Field(default_factory=LoaderConfig)


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file, encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

    # Environment overrides go through validation like the YAML values
    reader_data = dict(yaml_data.get("reader") or {})
    if wpm := os.getenv("SPEEDREADER_WPM"):
        reader_data["reading_speed_wpm"] = wpm
    if method := os.getenv("SPEEDREADER_PIVOT_METHOD"):
        reader_data["pivot_method"] = method
    if reader_data:
        yaml_data["reader"] = reader_data

    return AppConfig(**yaml_data)

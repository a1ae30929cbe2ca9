"""Shared helpers: id generation, start time parsing, CSV codec, speaker extraction."""

from .csv_codec import (
    build_csv,
    escape_csv_field,
    format_csv_row,
    parse_csv,
    parse_csv_line,
    split_csv_records,
    unprotect_csv_field,
)
from .ids import generate_session_id, generate_speaker_id, slugify
from .speaker_extraction import ExtractedSpeaker, extract_speaker_names, extract_speakers
from .timezone import (
    format_iso_utc,
    parse_iso_datetime,
    partition_key_for,
    start_time_sort_key,
)

__all__ = [
    # CSV codec
    "build_csv",
    "escape_csv_field",
    "format_csv_row",
    "parse_csv",
    "parse_csv_line",
    "split_csv_records",
    "unprotect_csv_field",

    # Row keys
    "generate_session_id",
    "generate_speaker_id",
    "slugify",

    # Speaker extraction
    "ExtractedSpeaker",
    "extract_speaker_names",
    "extract_speakers",

    # Start times
    "format_iso_utc",
    "parse_iso_datetime",
    "partition_key_for",
    "start_time_sort_key",
]

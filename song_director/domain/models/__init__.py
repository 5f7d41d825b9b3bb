"""Domain models for Song Director."""

from song_director.domain.models.song_section import (
    CLEAR_MARKER,
    SECTION_DIGITS,
    SECTION_LETTERS,
    ZERO_WIDTH_SPACE,
    SectionMutation,
    SectionSnapshot,
    SongSection,
)

__all__ = [
    "CLEAR_MARKER",
    "SECTION_DIGITS",
    "SECTION_LETTERS",
    "ZERO_WIDTH_SPACE",
    "SectionMutation",
    "SectionSnapshot",
    "SongSection",
]

"""Song section value objects.

A song section is what the director broadcasts to the band: either nothing
(the clear marker) or one section letter, optionally numbered with a single
digit, e.g. "V", "V2", "C".

Rules:
1. Letters come from a fixed set of eight section types
2. A number is only meaningful while a letter is set
3. Numbering an already numbered section REPLACES the digit
"""

from __future__ import annotations

from dataclasses import dataclass

# Marker used when no section is selected
CLEAR_MARKER = "-"

# Section types selectable from the director page
SECTION_LETTERS: frozenset[str] = frozenset("CVBPWEXR")

SECTION_DIGITS: frozenset[str] = frozenset("0123456789")

# Display text for a clear section; keeps vertical space in the UI
ZERO_WIDTH_SPACE = "\u200b"


@dataclass(frozen=True)
class SongSection:
    """Immutable song section signal.

    Attributes:
        letter: Section letter, or None when cleared.
        number: Single digit suffix (0-9), or None.
    """

    letter: str | None = None
    number: int | None = None

    def __post_init__(self) -> None:
        """Validate the letter/number invariant."""
        if self.letter is not None and self.letter not in SECTION_LETTERS:
            raise ValueError(f"letter must be one of {sorted(SECTION_LETTERS)}")
        if self.number is not None:
            if self.letter is None:
                raise ValueError("number requires a section letter")
            if not 0 <= self.number <= 9:
                raise ValueError(f"number must be a single digit, got {self.number}")

    @classmethod
    def cleared(cls) -> SongSection:
        """Return the clear section."""
        return cls()

    @property
    def is_clear(self) -> bool:
        return self.letter is None

    def with_letter(self, letter: str) -> SongSection:
        """Return a section with the given letter and no number."""
        return SongSection(letter=letter)

    def with_number(self, number: int) -> SongSection:
        """Return this section numbered with the given digit.

        A clear section cannot be numbered; it is returned unchanged.
        """
        if self.is_clear:
            return self
        return SongSection(letter=self.letter, number=number)

    def display_text(self) -> str:
        """Text shown on screens (zero-width space when clear)."""
        if self.is_clear:
            return ZERO_WIDTH_SPACE
        return str(self)

    def __str__(self) -> str:
        if self.letter is None:
            return CLEAR_MARKER
        if self.number is None:
            return self.letter
        return f"{self.letter}{self.number}"


@dataclass(frozen=True)
class SectionSnapshot:
    """A section together with the revision it was committed at.

    Attributes:
        section: The song section.
        revision: Count of committed mutations when the section was current.
    """

    section: SongSection
    revision: int

    @classmethod
    def initial(cls) -> SectionSnapshot:
        return cls(section=SongSection.cleared(), revision=0)

    def is_newer_than(self, baseline_revision: int) -> bool:
        """Whether a client holding baseline_revision is behind this snapshot.

        A baseline ahead of the revision is not stale; revisions never
        move backwards for a waiter.
        """
        return self.revision > baseline_revision


@dataclass(frozen=True)
class SectionMutation:
    """Result of a store mutation.

    Attributes:
        snapshot: Section and revision after the call.
        applied: False when the call was a no-op (revision unchanged).
    """

    snapshot: SectionSnapshot
    applied: bool

"""Unit tests for the song section value objects."""

import pytest

from song_director.domain.models import (
    CLEAR_MARKER,
    SECTION_LETTERS,
    ZERO_WIDTH_SPACE,
    SectionMutation,
    SectionSnapshot,
    SongSection,
)


class TestSongSectionConstruction:
    """Tests for SongSection invariants."""

    def test_default_is_clear(self) -> None:
        section = SongSection()

        assert section.is_clear
        assert section.letter is None
        assert section.number is None

    def test_cleared_equals_default(self) -> None:
        assert SongSection.cleared() == SongSection()

    @pytest.mark.parametrize("letter", sorted(SECTION_LETTERS))
    def test_accepts_every_section_letter(self, letter: str) -> None:
        section = SongSection(letter=letter)

        assert section.letter == letter
        assert not section.is_clear

    @pytest.mark.parametrize("letter", ["Q", "v", "", "VV", "1"])
    def test_rejects_unknown_letter(self, letter: str) -> None:
        with pytest.raises(ValueError, match="letter must be one of"):
            SongSection(letter=letter)

    def test_rejects_number_without_letter(self) -> None:
        with pytest.raises(ValueError, match="requires a section letter"):
            SongSection(number=3)

    @pytest.mark.parametrize("number", [-1, 10, 42])
    def test_rejects_number_outside_single_digit(self, number: int) -> None:
        with pytest.raises(ValueError, match="single digit"):
            SongSection(letter="V", number=number)

    def test_is_immutable(self) -> None:
        section = SongSection(letter="C")

        with pytest.raises(AttributeError):
            section.letter = "V"  # type: ignore[misc]


class TestSongSectionTransitions:
    """Tests for with_letter / with_number."""

    def test_with_letter_drops_number(self) -> None:
        section = SongSection(letter="V", number=2).with_letter("C")

        assert section == SongSection(letter="C")

    def test_with_letter_from_clear(self) -> None:
        assert SongSection().with_letter("B") == SongSection(letter="B")

    def test_with_number_numbers_letter(self) -> None:
        assert SongSection(letter="V").with_number(2) == SongSection(letter="V", number=2)

    def test_with_number_replaces_existing_digit(self) -> None:
        section = SongSection(letter="V", number=2).with_number(9)

        assert section == SongSection(letter="V", number=9)

    def test_with_number_on_clear_is_unchanged(self) -> None:
        section = SongSection()

        assert section.with_number(5) is section


class TestSongSectionText:
    """Tests for string and display forms."""

    def test_str_forms(self) -> None:
        assert str(SongSection()) == CLEAR_MARKER
        assert str(SongSection(letter="V")) == "V"
        assert str(SongSection(letter="V", number=2)) == "V2"

    def test_display_text_for_clear_is_zero_width_space(self) -> None:
        assert SongSection().display_text() == ZERO_WIDTH_SPACE
        assert SongSection().display_text() == "\u200b"

    def test_display_text_for_section(self) -> None:
        assert SongSection(letter="X", number=0).display_text() == "X0"


class TestSectionSnapshot:
    """Tests for SectionSnapshot."""

    def test_initial_is_clear_at_revision_zero(self) -> None:
        snapshot = SectionSnapshot.initial()

        assert snapshot.section.is_clear
        assert snapshot.revision == 0

    def test_same_revision_is_not_newer(self) -> None:
        snapshot = SectionSnapshot(section=SongSection(letter="V"), revision=4)

        assert not snapshot.is_newer_than(4)

    def test_older_baseline_is_stale(self) -> None:
        snapshot = SectionSnapshot(section=SongSection(letter="V"), revision=4)

        assert snapshot.is_newer_than(3)

    def test_baseline_ahead_of_revision_is_not_newer(self) -> None:
        snapshot = SectionSnapshot.initial()

        assert not snapshot.is_newer_than(17)

    def test_mutation_carries_snapshot_and_flag(self) -> None:
        snapshot = SectionSnapshot.initial()
        mutation = SectionMutation(snapshot=snapshot, applied=False)

        assert mutation.snapshot is snapshot
        assert mutation.applied is False

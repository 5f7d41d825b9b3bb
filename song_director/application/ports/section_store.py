"""Section store protocol.

Application port for the single shared song section and for notifying
long-poll waiters when it changes.
"""

from __future__ import annotations

from typing import Protocol

from song_director.domain.models import SectionMutation, SectionSnapshot


class SectionStoreProtocol(Protocol):
    """Protocol for section store operations."""

    async def get(self) -> SectionSnapshot:
        """Get the current section and revision as one snapshot."""
        ...

    async def set_letter(self, letter: str) -> SectionMutation:
        """Select a section letter (drops any number) and notify waiters."""
        ...

    async def append_digit(self, digit: int) -> SectionMutation:
        """Number the current section; no-op when the section is clear."""
        ...

    async def clear(self) -> SectionMutation:
        """Clear the section; no-op when already clear."""
        ...

    async def wait_for_change(
        self, baseline_revision: int, timeout_seconds: float
    ) -> SectionSnapshot | None:
        """Wait for a revision above baseline, or None on timeout."""
        ...

    def get_active_waiter_count(self) -> int:
        """Get the number of active waiters."""
        ...

"""In-memory section store with long-poll change notification.

Holds the one shared song section plus its revision counter and wakes
long-poll waiters when a mutation commits. State lives for the process
lifetime only.

Developer Golden Rules:
1. Use asyncio.Event for efficient waiting (no busy-wait)
2. Check-and-register under the SAME lock that guards mutation
3. Clean up waiters on timeout or cancellation
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from song_director.application.ports.section_store import SectionStoreProtocol
from song_director.domain.models import SectionMutation, SectionSnapshot, SongSection
from song_director.infrastructure.observability.logging import get_logger_for_service


@dataclass
class NotificationWave:
    """One generation of waiters sharing a single wake-up event.

    Attributes:
        event: Set once when the next mutation commits.
        snapshot: The committed snapshot, filled in just before the event fires.
    """

    event: asyncio.Event = field(default_factory=asyncio.Event)
    snapshot: SectionSnapshot | None = None


class InMemorySectionStore(SectionStoreProtocol):
    """Authoritative holder of the current section and revision.

    Every mutation commits under ``_lock``; committing fires the current
    notification wave and installs a fresh one. ``wait_for_change`` reads
    the revision and picks up the wave under the same lock, so a waiter
    either sees the new revision immediately or is part of the wave the
    next commit fires.

    Attributes:
        _snapshot: Current section and revision.
        _wave: Wave that the next commit will fire.
        _lock: Async lock serializing commits and waiter registration.
        _waiter_count: Number of active waiters.
    """

    def __init__(self, initial: SectionSnapshot | None = None) -> None:
        """Initialize the store.

        Args:
            initial: Starting snapshot, clear at revision 0 by default.
        """
        self._snapshot = initial or SectionSnapshot.initial()
        self._wave = NotificationWave()
        self._lock = asyncio.Lock()
        self._waiter_count = 0
        self._log = get_logger_for_service("InMemorySectionStore", component="store")

    async def get(self) -> SectionSnapshot:
        """Get the current section and revision.

        Returns:
            The current snapshot; section and revision are never torn.
        """
        async with self._lock:
            return self._snapshot

    async def set_letter(self, letter: str) -> SectionMutation:
        """Select a section letter, dropping any number.

        Always commits, even when the same letter is already selected.

        Args:
            letter: A letter from the section alphabet.

        Returns:
            The applied mutation.

        Raises:
            ValueError: If the letter is outside the alphabet.
        """
        async with self._lock:
            section = self._snapshot.section.with_letter(letter)
            return self._commit(section)

    async def append_digit(self, digit: int) -> SectionMutation:
        """Number the current section, replacing any previous number.

        A clear section stays clear; the revision is not bumped and no
        waiter is woken.

        Args:
            digit: Single digit 0-9.

        Returns:
            The mutation, with applied=False when the section was clear.
        """
        async with self._lock:
            current = self._snapshot.section
            if current.is_clear:
                return SectionMutation(snapshot=self._snapshot, applied=False)
            return self._commit(current.with_number(digit))

    async def clear(self) -> SectionMutation:
        """Clear the section.

        Returns:
            The mutation, with applied=False when already clear.
        """
        async with self._lock:
            current = self._snapshot.section
            if current.is_clear:
                return SectionMutation(snapshot=self._snapshot, applied=False)
            return self._commit(current.cleared())

    async def wait_for_change(
        self, baseline_revision: int, timeout_seconds: float
    ) -> SectionSnapshot | None:
        """Wait for a revision above the client's baseline.

        A baseline ahead of the current revision keeps waiting through
        commits that do not pass it, so a waiter never sees a revision
        below its baseline.

        Args:
            baseline_revision: Revision the client last observed.
            timeout_seconds: Maximum time to wait.

        Returns:
            The snapshot that woke the waiter, or None on timeout.
        """
        async with self._lock:
            if self._snapshot.is_newer_than(baseline_revision):
                return self._snapshot
            if timeout_seconds <= 0:
                return None
            # Grab the wave while holding the lock
            wave = self._wave

        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout_seconds

        # Wait for change outside of lock
        self._waiter_count += 1
        try:
            while True:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    return None
                try:
                    await asyncio.wait_for(wave.event.wait(), timeout=remaining)
                except TimeoutError:
                    return None
                if wave.snapshot is not None and wave.snapshot.is_newer_than(
                    baseline_revision
                ):
                    return wave.snapshot
                async with self._lock:
                    if self._snapshot.is_newer_than(baseline_revision):
                        return self._snapshot
                    wave = self._wave
        finally:
            self._waiter_count -= 1

    def get_active_waiter_count(self) -> int:
        """Get the number of active waiters.

        Returns:
            Count of long-poll requests currently suspended.
        """
        return self._waiter_count

    def _commit(self, section: SongSection) -> SectionMutation:
        """Install a new section, bump the revision and fire the wave.

        Caller must hold ``_lock``.
        """
        self._snapshot = SectionSnapshot(
            section=section, revision=self._snapshot.revision + 1
        )
        wave = self._wave
        wave.snapshot = self._snapshot
        wave.event.set()
        self._wave = NotificationWave()

        self._log.debug(
            "section_committed",
            section=str(self._snapshot.section),
            revision=self._snapshot.revision,
            waiters=self._waiter_count,
        )
        return SectionMutation(snapshot=self._snapshot, applied=True)

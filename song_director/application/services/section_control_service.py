"""Section control service.

Validates untrusted control input from director pages and maps it onto
section store operations. Also fronts the store's long-poll wait so routes
only ever talk to this service.

Developer Golden Rules:
1. VALIDATE FIRST - Reject bad letters/digits before touching the store
2. NO PARTIAL WRITES - A rejected input leaves section and revision as they were
3. NUMBERS REPLACE - Appending a digit overwrites any existing digit
"""

from __future__ import annotations

from song_director.application.ports.section_metrics import SectionMetricsProtocol
from song_director.application.ports.section_store import SectionStoreProtocol
from song_director.domain.errors import InvalidSectionInputError
from song_director.domain.models import (
    SECTION_DIGITS,
    SECTION_LETTERS,
    SectionSnapshot,
)
from song_director.infrastructure.observability.logging import get_logger_for_service

# Default long-poll window in seconds
DEFAULT_LONGPOLL_TIMEOUT_SECONDS = 25.0


class SectionControlService:
    """Mutation handlers and change waiting for the shared song section.

    Attributes:
        _store: The single section store owned by the application.
        _metrics: Optional metrics sink for mutation counters.
        _longpoll_timeout_seconds: Wait window used when callers pass none.
    """

    def __init__(
        self,
        store: SectionStoreProtocol,
        metrics: SectionMetricsProtocol | None = None,
        longpoll_timeout_seconds: float = DEFAULT_LONGPOLL_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the service.

        Args:
            store: Section store to read and mutate.
            metrics: Optional metrics collector.
            longpoll_timeout_seconds: Default long-poll wait window.
        """
        self._store = store
        self._metrics = metrics
        self._longpoll_timeout_seconds = longpoll_timeout_seconds
        self._log = get_logger_for_service("SectionControlService", component="control")

    @property
    def longpoll_timeout_seconds(self) -> float:
        return self._longpoll_timeout_seconds

    async def current(self) -> SectionSnapshot:
        """Return the current section snapshot."""
        return await self._store.get()

    async def select_letter(self, raw_letter: str) -> SectionSnapshot:
        """Select a section letter.

        Args:
            raw_letter: Untrusted form value, must be exactly one valid letter.

        Returns:
            Snapshot after the change.

        Raises:
            InvalidSectionInputError: If the letter is not in the alphabet.
        """
        if raw_letter not in SECTION_LETTERS:
            self._record("select_letter", "rejected")
            self._log.warning("section_letter_rejected", value=raw_letter)
            raise InvalidSectionInputError(
                "section_type",
                raw_letter,
                reason=f"expected one of {''.join(sorted(SECTION_LETTERS))}",
            )

        snapshot = (await self._store.set_letter(raw_letter)).snapshot
        self._record("select_letter", "applied")
        self._log.info(
            "section_letter_selected",
            section=str(snapshot.section),
            revision=snapshot.revision,
        )
        return snapshot

    async def append_digit(self, raw_digit: str) -> SectionSnapshot:
        """Number the current section with a single digit.

        Has no effect (and is not an error) while the section is clear.

        Args:
            raw_digit: Untrusted form value, must be exactly one of 0-9.

        Returns:
            Snapshot after the call (unchanged when the section was clear).

        Raises:
            InvalidSectionInputError: If the value is not a single digit.
        """
        if raw_digit not in SECTION_DIGITS:
            self._record("append_digit", "rejected")
            self._log.warning("section_digit_rejected", value=raw_digit)
            raise InvalidSectionInputError(
                "section_number", raw_digit, reason="expected a single digit 0-9"
            )

        mutation = await self._store.append_digit(int(raw_digit))
        snapshot = mutation.snapshot
        if not mutation.applied:
            self._record("append_digit", "ignored")
            self._log.debug("section_digit_ignored", digit=raw_digit)
            return snapshot

        self._record("append_digit", "applied")
        self._log.info(
            "section_digit_appended",
            section=str(snapshot.section),
            revision=snapshot.revision,
        )
        return snapshot

    async def clear(self) -> SectionSnapshot:
        """Clear the section (no-op when already clear)."""
        mutation = await self._store.clear()
        snapshot = mutation.snapshot
        if not mutation.applied:
            self._record("clear", "ignored")
            self._log.debug("section_clear_ignored", revision=snapshot.revision)
            return snapshot

        self._record("clear", "applied")
        self._log.info("section_cleared", revision=snapshot.revision)
        return snapshot

    async def wait_for_change(
        self, baseline_revision: int, timeout_seconds: float | None = None
    ) -> SectionSnapshot | None:
        """Wait until the section moves past a client's revision.

        Args:
            baseline_revision: Revision the client currently displays.
            timeout_seconds: Wait window, defaults to the configured one.

        Returns:
            New snapshot, or None when the window elapsed without a change.
        """
        timeout = (
            timeout_seconds
            if timeout_seconds is not None
            else self._longpoll_timeout_seconds
        )
        return await self._store.wait_for_change(
            baseline_revision=baseline_revision, timeout_seconds=timeout
        )

    def get_active_waiter_count(self) -> int:
        return self._store.get_active_waiter_count()

    def _record(self, operation: str, result: str) -> None:
        if self._metrics is not None:
            self._metrics.increment_section_mutations(operation, result)

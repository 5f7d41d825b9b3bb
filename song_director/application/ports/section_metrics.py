"""Section metrics port definition.

Lets the control service and long-poll routes record operational counters
without depending on the Prometheus implementation.
"""

from __future__ import annotations

from typing import Protocol


class SectionMetricsProtocol(Protocol):
    """Protocol for section traffic metrics."""

    def increment_section_mutations(self, operation: str, result: str) -> None:
        """Count a mutation attempt.

        Args:
            operation: select_letter, append_digit or clear.
            result: applied, ignored or rejected.
        """
        ...

    def increment_longpoll_requests(self, outcome: str) -> None:
        """Count a finished long-poll (immediate, changed, timeout, disconnected)."""
        ...

    def observe_longpoll_wait(self, duration: float, outcome: str) -> None:
        """Record how long a long-poll was held open."""
        ...

"""Long-poll helper shared by the fragment and JSON change routes.

Races the section wait against the ASGI ``http.disconnect`` message so a
client that goes away releases its waiter immediately instead of holding
it until the window elapses.

Developer Golden Rules:
1. NO BUSY-WAIT - Both sides of the race block on an awaitable
2. CANCEL THE LOSER - Whichever side finishes first cancels the other
3. COUNT EVERY OUTCOME - immediate, changed, timeout or disconnected
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass

from starlette.requests import Request
from structlog import get_logger

from song_director.application.ports.section_metrics import SectionMetricsProtocol
from song_director.application.services.section_control_service import (
    SectionControlService,
)
from song_director.domain.models import SectionSnapshot

OUTCOME_IMMEDIATE = "immediate"
OUTCOME_CHANGED = "changed"
OUTCOME_TIMEOUT = "timeout"
OUTCOME_DISCONNECTED = "disconnected"

logger = get_logger()


@dataclass(frozen=True)
class LongPollResult:
    """What a long-poll ended with.

    Attributes:
        snapshot: New snapshot, or None on timeout or disconnect.
        outcome: One of immediate, changed, timeout, disconnected.
    """

    snapshot: SectionSnapshot | None
    outcome: str


async def _wait_for_disconnect(request: Request) -> None:
    """Block until the client closes the connection."""
    while True:
        message = await request.receive()
        if message["type"] == "http.disconnect":
            return


async def wait_for_section_change(
    request: Request,
    service: SectionControlService,
    baseline_revision: int | None,
    metrics: SectionMetricsProtocol,
) -> LongPollResult:
    """Wait for the section to move past the client's revision.

    Args:
        request: The long-poll request, watched for disconnects.
        service: Section control service.
        baseline_revision: Revision the client shows; None means the client
            has nothing yet and gets the current state at once.
        metrics: Metrics sink for outcome counters.

    Returns:
        LongPollResult with the snapshot and outcome.
    """
    start_time = time.monotonic()

    current = await service.current()
    if baseline_revision is None or current.is_newer_than(baseline_revision):
        result = LongPollResult(snapshot=current, outcome=OUTCOME_IMMEDIATE)
        _record(metrics, result, start_time)
        return result

    wait_task = asyncio.ensure_future(service.wait_for_change(baseline_revision))
    disconnect_task = asyncio.ensure_future(_wait_for_disconnect(request))
    try:
        done, _ = await asyncio.wait(
            {wait_task, disconnect_task}, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        pending = [t for t in (wait_task, disconnect_task) if not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    if wait_task in done:
        snapshot = wait_task.result()
        outcome = OUTCOME_CHANGED if snapshot is not None else OUTCOME_TIMEOUT
        result = LongPollResult(snapshot=snapshot, outcome=outcome)
    else:
        logger.debug(
            "longpoll_client_disconnected",
            baseline_revision=baseline_revision,
        )
        result = LongPollResult(snapshot=None, outcome=OUTCOME_DISCONNECTED)

    _record(metrics, result, start_time)
    return result


def _record(
    metrics: SectionMetricsProtocol, result: LongPollResult, start_time: float
) -> None:
    duration = time.monotonic() - start_time
    metrics.increment_longpoll_requests(result.outcome)
    metrics.observe_longpoll_wait(duration, result.outcome)

"""Unit tests for the long-poll helper's disconnect race."""

import asyncio
from unittest.mock import MagicMock

import pytest
from starlette.requests import Request
from starlette.types import Message

from song_director.api.longpoll import (
    OUTCOME_CHANGED,
    OUTCOME_DISCONNECTED,
    OUTCOME_IMMEDIATE,
    OUTCOME_TIMEOUT,
    wait_for_section_change,
)
from song_director.application.services import SectionControlService
from song_director.infrastructure.adapters import InMemorySectionStore


def _request(disconnected: asyncio.Event) -> Request:
    """Build a request whose client disconnects when the event is set."""
    body_sent = False

    async def receive() -> Message:
        nonlocal body_sent
        if not body_sent:
            body_sent = True
            return {"type": "http.request", "body": b"", "more_body": False}
        await disconnected.wait()
        return {"type": "http.disconnect"}

    scope = {
        "type": "http",
        "method": "GET",
        "path": "/view/section",
        "headers": [],
        "query_string": b"",
    }
    return Request(scope, receive=receive)


@pytest.fixture
def service(section_store: InMemorySectionStore) -> SectionControlService:
    return SectionControlService(store=section_store, longpoll_timeout_seconds=0.2)


@pytest.fixture
def metrics() -> MagicMock:
    return MagicMock()


class TestWaitForSectionChange:
    """Tests for wait_for_section_change."""

    @pytest.mark.asyncio
    async def test_no_baseline_is_immediate(
        self, service: SectionControlService, metrics: MagicMock
    ) -> None:
        result = await wait_for_section_change(
            _request(asyncio.Event()), service, None, metrics
        )

        assert result.outcome == OUTCOME_IMMEDIATE
        assert result.snapshot is not None
        metrics.increment_longpoll_requests.assert_called_once_with(OUTCOME_IMMEDIATE)

    @pytest.mark.asyncio
    async def test_timeout(
        self, service: SectionControlService, metrics: MagicMock
    ) -> None:
        result = await wait_for_section_change(
            _request(asyncio.Event()), service, 0, metrics
        )

        assert result.outcome == OUTCOME_TIMEOUT
        assert result.snapshot is None
        duration, outcome = metrics.observe_longpoll_wait.call_args.args
        assert outcome == OUTCOME_TIMEOUT
        assert duration >= 0.15

    @pytest.mark.asyncio
    async def test_change_wins_race(
        self, service: SectionControlService, metrics: MagicMock
    ) -> None:
        task = asyncio.create_task(
            wait_for_section_change(_request(asyncio.Event()), service, 0, metrics)
        )
        for _ in range(100):
            if service.get_active_waiter_count() == 1:
                break
            await asyncio.sleep(0.01)

        await service.select_letter("C")
        result = await asyncio.wait_for(task, timeout=1.0)

        assert result.outcome == OUTCOME_CHANGED
        assert result.snapshot is not None
        assert str(result.snapshot.section) == "C"

    @pytest.mark.asyncio
    async def test_disconnect_releases_waiter(
        self, section_store: InMemorySectionStore, metrics: MagicMock
    ) -> None:
        service = SectionControlService(
            store=section_store, longpoll_timeout_seconds=30.0
        )
        disconnected = asyncio.Event()
        task = asyncio.create_task(
            wait_for_section_change(_request(disconnected), service, 0, metrics)
        )
        for _ in range(100):
            if service.get_active_waiter_count() == 1:
                break
            await asyncio.sleep(0.01)
        assert service.get_active_waiter_count() == 1

        disconnected.set()
        result = await asyncio.wait_for(task, timeout=1.0)

        assert result.outcome == OUTCOME_DISCONNECTED
        assert result.snapshot is None
        assert service.get_active_waiter_count() == 0
        metrics.increment_longpoll_requests.assert_called_once_with(OUTCOME_DISCONNECTED)

"""
Pytest configuration and shared fixtures for song director tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async function mocking
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
- Build a fresh app per test with create_app(); asyncio primitives in the
  section store bind to the event loop that first waits on them
"""

from collections.abc import Iterator

import pytest
from fastapi import FastAPI

from song_director.bootstrap.metrics import reset_metrics
from song_director.config import TEST_DIRECTOR_CONFIG, DirectorConfig
from song_director.infrastructure.adapters import InMemorySectionStore


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from song_director import __version__

    return __version__


@pytest.fixture(autouse=True)
def reset_metrics_singletons() -> Iterator[None]:
    """Give every test its own metrics registry."""
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture
def test_config() -> DirectorConfig:
    """Config with a one-second long-poll window."""
    return TEST_DIRECTOR_CONFIG


@pytest.fixture
def section_store() -> InMemorySectionStore:
    """Fresh clear store at revision 0."""
    return InMemorySectionStore()


@pytest.fixture
def app(test_config: DirectorConfig) -> FastAPI:
    """Fully wired application with the test config."""
    from song_director.api.main import create_app

    return create_app(test_config)

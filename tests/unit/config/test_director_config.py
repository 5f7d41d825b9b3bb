"""Unit tests for DirectorConfig."""

import pytest

from song_director.config import (
    DEFAULT_DIRECTOR_CONFIG,
    MAX_LONGPOLL_TIMEOUT_SECONDS,
    MIN_LONGPOLL_TIMEOUT_SECONDS,
    TEST_DIRECTOR_CONFIG,
    DirectorConfig,
)

_ENV_VARS = (
    "DIRECTOR_HOST",
    "DIRECTOR_PORT",
    "DIRECTOR_LONGPOLL_TIMEOUT",
    "ENVIRONMENT",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestDefaults:
    """Tests for default values."""

    def test_defaults(self) -> None:
        config = DirectorConfig()

        assert config.host == "0.0.0.0"
        assert config.port == 3000
        assert config.longpoll_timeout_seconds == 25.0
        assert config.environment == "development"

    def test_default_config_constant(self) -> None:
        assert DEFAULT_DIRECTOR_CONFIG == DirectorConfig()

    def test_test_config_uses_short_window(self) -> None:
        assert TEST_DIRECTOR_CONFIG.longpoll_timeout_seconds == MIN_LONGPOLL_TIMEOUT_SECONDS

    def test_is_frozen(self) -> None:
        with pytest.raises(AttributeError):
            DirectorConfig().port = 8080  # type: ignore[misc]


class TestValidation:
    """Tests for range checks."""

    @pytest.mark.parametrize("port", [0, -1, 65536])
    def test_rejects_bad_port(self, port: int) -> None:
        with pytest.raises(ValueError, match="port"):
            DirectorConfig(port=port)

    @pytest.mark.parametrize(
        "timeout",
        [0.0, MIN_LONGPOLL_TIMEOUT_SECONDS - 0.5, MAX_LONGPOLL_TIMEOUT_SECONDS + 1],
    )
    def test_rejects_timeout_outside_range(self, timeout: float) -> None:
        with pytest.raises(ValueError, match="longpoll_timeout_seconds"):
            DirectorConfig(longpoll_timeout_seconds=timeout)

    @pytest.mark.parametrize(
        "timeout", [MIN_LONGPOLL_TIMEOUT_SECONDS, MAX_LONGPOLL_TIMEOUT_SECONDS]
    )
    def test_accepts_range_bounds(self, timeout: float) -> None:
        assert DirectorConfig(longpoll_timeout_seconds=timeout).longpoll_timeout_seconds == timeout


class TestFromEnvironment:
    """Tests for environment overrides."""

    def test_uses_defaults_when_unset(self, clean_env: pytest.MonkeyPatch) -> None:
        assert DirectorConfig.from_environment() == DirectorConfig()

    def test_reads_overrides(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("DIRECTOR_HOST", "127.0.0.1")
        clean_env.setenv("DIRECTOR_PORT", "8080")
        clean_env.setenv("DIRECTOR_LONGPOLL_TIMEOUT", "10.5")
        clean_env.setenv("ENVIRONMENT", "production")

        config = DirectorConfig.from_environment()

        assert config.host == "127.0.0.1"
        assert config.port == 8080
        assert config.longpoll_timeout_seconds == 10.5
        assert config.environment == "production"

    def test_unparseable_numbers_fall_back_to_defaults(
        self, clean_env: pytest.MonkeyPatch
    ) -> None:
        clean_env.setenv("DIRECTOR_PORT", "not-a-port")
        clean_env.setenv("DIRECTOR_LONGPOLL_TIMEOUT", "soon")

        config = DirectorConfig.from_environment()

        assert config.port == 3000
        assert config.longpoll_timeout_seconds == 25.0

    def test_out_of_range_timeout_fails_startup(
        self, clean_env: pytest.MonkeyPatch
    ) -> None:
        clean_env.setenv("DIRECTOR_LONGPOLL_TIMEOUT", "600")

        with pytest.raises(ValueError):
            DirectorConfig.from_environment()

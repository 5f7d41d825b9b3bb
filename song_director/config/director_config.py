"""Server configuration for the song director.

Defines the listening address and long-poll window with environment
variable overrides.

Environment Variables:
- DIRECTOR_HOST: Interface to bind (default: 0.0.0.0)
- DIRECTOR_PORT: Listening port (default: 3000)
- DIRECTOR_LONGPOLL_TIMEOUT: Long-poll wait window in seconds (default: 25.0)
- ENVIRONMENT: production or development (default: development)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

# Allowed range for the long-poll window
MIN_LONGPOLL_TIMEOUT_SECONDS = 1.0
MAX_LONGPOLL_TIMEOUT_SECONDS = 120.0


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed float value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class DirectorConfig:
    """Configuration for the song director server.

    Attributes:
        host: Interface the HTTP server binds to.
        port: TCP port the HTTP server listens on.
        longpoll_timeout_seconds: How long a long-poll waits for a change
                                  before answering "no change".
        environment: production (JSON logs) or development (console logs).
    """

    host: str = "0.0.0.0"
    port: int = 3000
    longpoll_timeout_seconds: float = 25.0
    environment: str = "development"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not 0 < self.port < 65536:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")
        if not (
            MIN_LONGPOLL_TIMEOUT_SECONDS
            <= self.longpoll_timeout_seconds
            <= MAX_LONGPOLL_TIMEOUT_SECONDS
        ):
            raise ValueError(
                f"longpoll_timeout_seconds must be between "
                f"{MIN_LONGPOLL_TIMEOUT_SECONDS} and {MAX_LONGPOLL_TIMEOUT_SECONDS}, "
                f"got {self.longpoll_timeout_seconds}"
            )

    @classmethod
    def from_environment(cls) -> "DirectorConfig":
        """Create config from environment variables with defaults.

        Returns:
            DirectorConfig with values from environment or defaults.
        """
        return cls(
            host=os.environ.get("DIRECTOR_HOST", "0.0.0.0"),
            port=_get_int_env("DIRECTOR_PORT", 3000),
            longpoll_timeout_seconds=_get_float_env("DIRECTOR_LONGPOLL_TIMEOUT", 25.0),
            environment=os.environ.get("ENVIRONMENT", "development"),
        )


# Default production config
DEFAULT_DIRECTOR_CONFIG = DirectorConfig()

# Testing config with a short long-poll window
TEST_DIRECTOR_CONFIG = DirectorConfig(
    host="127.0.0.1",
    port=3001,
    longpoll_timeout_seconds=1.0,
)

"""Configuration module for Song Director.

Available Configurations:
- DirectorConfig: Listening address and long-poll window
"""

from song_director.config.director_config import (
    DEFAULT_DIRECTOR_CONFIG,
    MAX_LONGPOLL_TIMEOUT_SECONDS,
    MIN_LONGPOLL_TIMEOUT_SECONDS,
    TEST_DIRECTOR_CONFIG,
    DirectorConfig,
)

__all__ = [
    "DirectorConfig",
    "DEFAULT_DIRECTOR_CONFIG",
    "TEST_DIRECTOR_CONFIG",
    "MAX_LONGPOLL_TIMEOUT_SECONDS",
    "MIN_LONGPOLL_TIMEOUT_SECONDS",
]

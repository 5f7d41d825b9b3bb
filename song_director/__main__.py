"""Run the song director server.

Usage:
    python -m song_director
    song-director
"""

from __future__ import annotations

import uvicorn
from structlog import get_logger

from song_director import __version__
from song_director.api.main import create_app
from song_director.bootstrap.logging import configure_structlog
from song_director.config import DirectorConfig

logger = get_logger()


def main() -> None:
    """Start uvicorn with configuration from the environment."""
    config = DirectorConfig.from_environment()
    configure_structlog(environment=config.environment)

    logger.info(
        "song_director_listening",
        version=__version__,
        address=f"http://{config.host}:{config.port}",
    )
    uvicorn.run(create_app(config), host=config.host, port=config.port)


if __name__ == "__main__":
    main()

"""Infrastructure adapters implementing application ports."""

from song_director.infrastructure.adapters.in_memory_section_store import (
    InMemorySectionStore,
    NotificationWave,
)
from song_director.infrastructure.adapters.jinja_section_renderer import (
    JinjaSectionRenderer,
)

__all__: list[str] = [
    "InMemorySectionStore",
    "JinjaSectionRenderer",
    "NotificationWave",
]

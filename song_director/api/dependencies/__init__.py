"""FastAPI dependency providers."""

from song_director.api.dependencies.section import (
    get_section_boot_id,
    get_section_control_service,
    get_section_renderer,
)

__all__ = [
    "get_section_boot_id",
    "get_section_control_service",
    "get_section_renderer",
]

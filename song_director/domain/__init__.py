"""
Domain layer - Pure logic for Song Director.

This layer contains:
- The song section value object and its alphabet
- Revision-stamped snapshots of the shared section
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure, or api.
Only stdlib and typing imports are allowed.
"""

from song_director.domain.errors import InvalidSectionInputError, TemplateRenderError
from song_director.domain.exceptions import SongDirectorError
from song_director.domain.models import SectionSnapshot, SongSection

__all__: list[str] = [
    "InvalidSectionInputError",
    "SectionSnapshot",
    "SongDirectorError",
    "SongSection",
    "TemplateRenderError",
]

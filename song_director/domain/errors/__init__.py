"""Domain errors for Song Director.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from SongDirectorError.
"""

from song_director.domain.errors.rendering import TemplateRenderError
from song_director.domain.errors.section import InvalidSectionInputError

__all__: list[str] = ["InvalidSectionInputError", "TemplateRenderError"]

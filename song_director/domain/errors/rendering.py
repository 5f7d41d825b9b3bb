"""Rendering errors for section pages and fragments."""

from song_director.domain.exceptions import SongDirectorError


class TemplateRenderError(SongDirectorError):
    """Raised when a page or fragment template cannot be rendered.

    Attributes:
        template_name: Template that failed.
    """

    def __init__(self, template_name: str, cause: str) -> None:
        self.template_name = template_name
        super().__init__(f"error rendering template {template_name}: {cause}")

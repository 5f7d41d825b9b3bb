"""Jinja2 renderer for director, viewer and fragment HTML.

Templates ship inside the package (``song_director/templates``) and
are loaded once per renderer. Rendering failures surface as
TemplateRenderError so the API can answer with a plain 500.
"""

from __future__ import annotations

import jinja2

from song_director.application.ports.section_renderer import SectionRendererProtocol
from song_director.domain.errors import TemplateRenderError
from song_director.domain.models import SECTION_DIGITS, SectionSnapshot

CONTROLLER_TEMPLATE = "controller.html"
VIEWER_TEMPLATE = "viewer.html"
FRAGMENT_TEMPLATE = "fragments/section_display.html"

# Button order on the director page
LETTER_ORDER = ("C", "V", "B", "P", "W", "E", "X", "R")


class JinjaSectionRenderer(SectionRendererProtocol):
    """Render section snapshots with Jinja2 templates."""

    def __init__(
        self, environment: jinja2.Environment | None = None, boot_id: str = ""
    ) -> None:
        """Initialize the renderer.

        Args:
            environment: Custom Jinja2 environment (tests), defaults to the
                packaged templates with HTML autoescaping.
            boot_id: Store instance ID written into every fragment so pages
                can tell when the server restarted.
        """
        self._boot_id = boot_id
        self._env = environment or jinja2.Environment(
            loader=jinja2.PackageLoader("song_director", "templates"),
            autoescape=jinja2.select_autoescape(["html"]),
            undefined=jinja2.StrictUndefined,
        )

    def render_controller(self, snapshot: SectionSnapshot) -> str:
        return self._render(
            CONTROLLER_TEMPLATE,
            snapshot,
            section_letters=LETTER_ORDER,
            section_digits=sorted(SECTION_DIGITS),
        )

    def render_viewer(self, snapshot: SectionSnapshot) -> str:
        return self._render(VIEWER_TEMPLATE, snapshot)

    def render_fragment(self, snapshot: SectionSnapshot) -> str:
        return self._render(FRAGMENT_TEMPLATE, snapshot)

    def _render(self, template_name: str, snapshot: SectionSnapshot, **context: object) -> str:
        try:
            template = self._env.get_template(template_name)
            return template.render(
                song_section=snapshot.section.display_text(),
                revision=snapshot.revision,
                boot_id=self._boot_id,
                **context,
            )
        except jinja2.TemplateError as e:
            raise TemplateRenderError(template_name, str(e)) from e

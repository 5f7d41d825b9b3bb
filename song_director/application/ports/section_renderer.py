"""Section renderer protocol.

Turns section snapshots into the HTML served to director and viewer pages.
"""

from __future__ import annotations

from typing import Protocol

from song_director.domain.models import SectionSnapshot


class SectionRendererProtocol(Protocol):
    """Protocol for rendering section pages and fragments."""

    def render_controller(self, snapshot: SectionSnapshot) -> str:
        """Render the director (control) page."""
        ...

    def render_viewer(self, snapshot: SectionSnapshot) -> str:
        """Render the passive viewer page."""
        ...

    def render_fragment(self, snapshot: SectionSnapshot) -> str:
        """Render the section display fragment shared by both pages."""
        ...

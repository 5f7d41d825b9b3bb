"""Section dependencies for FastAPI.

The application factory stores the wired section components on
``app.state``; these providers hand them to route handlers so tests can
substitute them with ``app.dependency_overrides``.
"""

from __future__ import annotations

from fastapi import Request

from song_director.application.ports.section_renderer import SectionRendererProtocol
from song_director.application.services.section_control_service import (
    SectionControlService,
)


def get_section_control_service(request: Request) -> SectionControlService:
    """Get the section control service for the running application.

    Raises:
        RuntimeError: If the application was built without section wiring.
    """
    service = getattr(request.app.state, "section_service", None)
    if service is None:
        raise RuntimeError("Section control service not configured")
    return service


def get_section_renderer(request: Request) -> SectionRendererProtocol:
    """Get the section renderer for the running application.

    Raises:
        RuntimeError: If the application was built without section wiring.
    """
    renderer = getattr(request.app.state, "section_renderer", None)
    if renderer is None:
        raise RuntimeError("Section renderer not configured")
    return renderer


def get_section_boot_id(request: Request) -> str:
    """Get the boot ID of the running section store.

    Raises:
        RuntimeError: If the application was built without section wiring.
    """
    boot_id = getattr(request.app.state, "section_boot_id", None)
    if boot_id is None:
        raise RuntimeError("Section boot ID not configured")
    return boot_id

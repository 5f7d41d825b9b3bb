"""HTML pages and the viewer long-poll fragment.

Endpoints:
    GET /               director page with section buttons
    GET /view           passive viewer page
    GET /view/section   fragment long-poll, 204 on timeout
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, Response

from song_director.api.dependencies.section import (
    get_section_boot_id,
    get_section_control_service,
    get_section_renderer,
)
from song_director.api.longpoll import wait_for_section_change
from song_director.api.routes.section import resolve_baseline, section_headers
from song_director.application.ports.section_renderer import SectionRendererProtocol
from song_director.application.services.section_control_service import (
    SectionControlService,
)
from song_director.infrastructure.monitoring.metrics import get_metrics_collector

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse, summary="Director page")
async def controller_page(
    service: SectionControlService = Depends(get_section_control_service),
    renderer: SectionRendererProtocol = Depends(get_section_renderer),
    boot_id: str = Depends(get_section_boot_id),
) -> HTMLResponse:
    snapshot = await service.current()
    return HTMLResponse(
        content=renderer.render_controller(snapshot),
        headers=section_headers(snapshot.revision, boot_id),
    )


@router.get("/view", response_class=HTMLResponse, summary="Viewer page")
async def viewer_page(
    service: SectionControlService = Depends(get_section_control_service),
    renderer: SectionRendererProtocol = Depends(get_section_renderer),
    boot_id: str = Depends(get_section_boot_id),
) -> HTMLResponse:
    snapshot = await service.current()
    return HTMLResponse(
        content=renderer.render_viewer(snapshot),
        headers=section_headers(snapshot.revision, boot_id),
    )


@router.get(
    "/view/section",
    response_class=HTMLResponse,
    responses={204: {"description": "No change within the long-poll window"}},
    summary="Long-poll for the section fragment",
)
async def longpoll_section_fragment(
    request: Request,
    revision: int | None = Query(
        None,
        ge=0,
        description="Revision of the fragment the page shows",
    ),
    boot: str | None = Query(
        None,
        description="Boot ID of the fragment the page shows",
    ),
    service: SectionControlService = Depends(get_section_control_service),
    renderer: SectionRendererProtocol = Depends(get_section_renderer),
    boot_id: str = Depends(get_section_boot_id),
) -> Response:
    """Hold the request until the section moves past the page's revision.

    A fragment from a previous server process (different boot ID) is
    replaced at once.

    Returns:
        200 with the new fragment, or 204 when the window elapsed (the
        page keeps its fragment and polls again).
    """
    result = await wait_for_section_change(
        request,
        service,
        resolve_baseline(revision, boot, boot_id),
        get_metrics_collector(),
    )
    if result.snapshot is None:
        return Response(status_code=204, headers=section_headers(revision, boot_id))
    return HTMLResponse(
        content=renderer.render_fragment(result.snapshot),
        headers=section_headers(result.snapshot.revision, boot_id),
    )

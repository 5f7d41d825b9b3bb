"""Section control and state endpoints.

Director pages send mutations here; every mutation answers with the
re-rendered section fragment so the sender's own display updates from the
response. Programmatic clients can read the state as JSON and long-poll
for changes.

Endpoints:
    PUT    /section/type      form field section_type (one letter)
    PUT    /section/number    form field section_number (one digit)
    DELETE /section           clear the section
    GET    /section           JSON state
    GET    /section/changes   JSON long-poll, 304 on timeout

Revisions restart at 0 with every process. Section responses carry the
store's boot ID; a long-poll whose ``boot`` differs from it is answered
as if it had no revision at all.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, Response

from song_director.api.dependencies.section import (
    get_section_boot_id,
    get_section_control_service,
    get_section_renderer,
)
from song_director.api.longpoll import wait_for_section_change
from song_director.api.models.section import (
    SectionErrorResponse,
    SectionStateResponse,
)
from song_director.application.ports.section_renderer import SectionRendererProtocol
from song_director.application.services.section_control_service import (
    SectionControlService,
)
from song_director.domain.errors import InvalidSectionInputError
from song_director.domain.models import SectionSnapshot
from song_director.infrastructure.monitoring.metrics import get_metrics_collector

# Response header carrying the revision a response was rendered at
SECTION_REVISION_HEADER = "X-Section-Revision"

# Response header carrying the store's boot ID
SECTION_BOOT_HEADER = "X-Section-Boot"

router = APIRouter(tags=["section"])


def section_headers(revision: int | None, boot_id: str) -> dict[str, str]:
    """Headers attached to every section response."""
    headers = {
        SECTION_BOOT_HEADER: boot_id,
        "Cache-Control": "no-cache",
    }
    if revision is not None:
        headers[SECTION_REVISION_HEADER] = str(revision)
    return headers


def resolve_baseline(revision: int | None, boot: str | None, boot_id: str) -> int | None:
    """Baseline revision for a long-poll.

    Args:
        revision: Revision the client shows.
        boot: Boot ID the client's revision came from; empty or None when
            the client did not send one.
        boot_id: Boot ID of the running store.

    Returns:
        The revision, or None when it belongs to another process.
    """
    if boot and boot != boot_id:
        return None
    return revision


def _invalid_input(request: Request, error: InvalidSectionInputError) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail={
            "type": "urn:song-director:error:invalid-section-input",
            "title": "Invalid Section Input",
            "status": 400,
            "detail": str(error),
            "instance": str(request.url),
        },
    )


def _fragment_response(
    renderer: SectionRendererProtocol, snapshot: SectionSnapshot, boot_id: str
) -> HTMLResponse:
    return HTMLResponse(
        content=renderer.render_fragment(snapshot),
        headers=section_headers(snapshot.revision, boot_id),
    )


def _state_response(snapshot: SectionSnapshot, boot_id: str) -> Response:
    return Response(
        content=SectionStateResponse.from_snapshot(snapshot).model_dump_json(),
        media_type="application/json",
        headers=section_headers(snapshot.revision, boot_id),
    )


@router.put(
    "/section/type",
    response_class=HTMLResponse,
    responses={400: {"model": SectionErrorResponse}},
    summary="Select a section letter",
)
async def select_section_type(
    request: Request,
    section_type: str = Form(""),
    service: SectionControlService = Depends(get_section_control_service),
    renderer: SectionRendererProtocol = Depends(get_section_renderer),
    boot_id: str = Depends(get_section_boot_id),
) -> HTMLResponse:
    """Select a section letter and drop any number.

    Returns:
        The re-rendered section fragment.

    Raises:
        HTTPException: 400 when the letter is not a section letter.
    """
    try:
        snapshot = await service.select_letter(section_type)
    except InvalidSectionInputError as e:
        raise _invalid_input(request, e) from None
    return _fragment_response(renderer, snapshot, boot_id)


@router.put(
    "/section/number",
    response_class=HTMLResponse,
    responses={400: {"model": SectionErrorResponse}},
    summary="Number the current section",
)
async def select_section_number(
    request: Request,
    section_number: str = Form(""),
    service: SectionControlService = Depends(get_section_control_service),
    renderer: SectionRendererProtocol = Depends(get_section_renderer),
    boot_id: str = Depends(get_section_boot_id),
) -> HTMLResponse:
    """Append a digit to the current section.

    Ignored while the section is clear; the unchanged fragment is returned.

    Raises:
        HTTPException: 400 when the value is not a single digit.
    """
    try:
        snapshot = await service.append_digit(section_number)
    except InvalidSectionInputError as e:
        raise _invalid_input(request, e) from None
    return _fragment_response(renderer, snapshot, boot_id)


@router.delete(
    "/section",
    response_class=HTMLResponse,
    summary="Clear the section",
)
async def clear_section(
    service: SectionControlService = Depends(get_section_control_service),
    renderer: SectionRendererProtocol = Depends(get_section_renderer),
    boot_id: str = Depends(get_section_boot_id),
) -> HTMLResponse:
    """Clear the section and return the blank fragment."""
    snapshot = await service.clear()
    return _fragment_response(renderer, snapshot, boot_id)


@router.get(
    "/section",
    response_model=SectionStateResponse,
    summary="Current section state",
)
async def get_section(
    service: SectionControlService = Depends(get_section_control_service),
    boot_id: str = Depends(get_section_boot_id),
) -> Response:
    """Return the current section as JSON."""
    return _state_response(await service.current(), boot_id)


@router.get(
    "/section/changes",
    response_model=SectionStateResponse,
    responses={
        304: {"description": "No change within the long-poll window"},
    },
    summary="Long-poll for section changes",
)
async def longpoll_section_changes(
    request: Request,
    revision: int | None = Query(
        None,
        ge=0,
        description="Revision the client last saw; omit to get the current state",
    ),
    boot: str | None = Query(
        None,
        description="X-Section-Boot value the revision was read under",
    ),
    service: SectionControlService = Depends(get_section_control_service),
    boot_id: str = Depends(get_section_boot_id),
) -> Response:
    """Wait until the section moves past the client's revision.

    Flow:
    1. No revision, a revision from another boot, or a revision behind
       the current one: answer now
    2. Otherwise hold the request until a later revision commits
    3. On timeout: return HTTP 304 Not Modified
    """
    result = await wait_for_section_change(
        request,
        service,
        resolve_baseline(revision, boot, boot_id),
        get_metrics_collector(),
    )
    if result.snapshot is None:
        return Response(status_code=304, headers=section_headers(revision, boot_id))
    return _state_response(result.snapshot, boot_id)

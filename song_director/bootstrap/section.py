"""Bootstrap wiring for the section store, control service and renderer.

The application owns exactly one store; ``build_section_components``
creates it together with the service and renderer that share it, and the
API keeps the result on ``app.state``.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4

from song_director.application.ports.section_metrics import SectionMetricsProtocol
from song_director.application.ports.section_renderer import SectionRendererProtocol
from song_director.application.ports.section_store import SectionStoreProtocol
from song_director.application.services.section_control_service import (
    SectionControlService,
)
from song_director.config import DirectorConfig
from song_director.infrastructure.adapters import (
    InMemorySectionStore,
    JinjaSectionRenderer,
)


@dataclass(frozen=True)
class SectionComponents:
    """Everything the HTTP layer needs to serve sections.

    Attributes:
        store: The single shared section store.
        service: Control service wrapping the store.
        renderer: HTML renderer for pages and fragments.
        boot_id: Identifies this store instance; a client holding another
            boot ID has revisions from a previous process.
    """

    store: SectionStoreProtocol
    service: SectionControlService
    renderer: SectionRendererProtocol
    boot_id: str


def build_section_components(
    config: DirectorConfig,
    metrics: SectionMetricsProtocol | None = None,
    store: SectionStoreProtocol | None = None,
    renderer: SectionRendererProtocol | None = None,
) -> SectionComponents:
    """Create the store, control service and renderer.

    Args:
        config: Server configuration (long-poll window).
        metrics: Optional metrics collector for mutation counters.
        store: Custom store (tests), defaults to a fresh in-memory store.
        renderer: Custom renderer (tests), defaults to packaged templates.

    Returns:
        Wired SectionComponents.
    """
    boot_id = uuid4().hex
    section_store = store or InMemorySectionStore()
    service = SectionControlService(
        store=section_store,
        metrics=metrics,
        longpoll_timeout_seconds=config.longpoll_timeout_seconds,
    )
    return SectionComponents(
        store=section_store,
        service=service,
        renderer=renderer or JinjaSectionRenderer(boot_id=boot_id),
        boot_id=boot_id,
    )


__all__ = ["SectionComponents", "build_section_components"]

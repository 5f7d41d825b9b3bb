"""Application ports - Abstract interfaces for infrastructure adapters.

Available ports:
- SectionStoreProtocol: Shared section state with change notification
- SectionRendererProtocol: Page and fragment rendering
- SectionMetricsProtocol: Operational counters for section traffic
"""

from song_director.application.ports.section_metrics import SectionMetricsProtocol
from song_director.application.ports.section_renderer import SectionRendererProtocol
from song_director.application.ports.section_store import SectionStoreProtocol

__all__: list[str] = [
    "SectionMetricsProtocol",
    "SectionRendererProtocol",
    "SectionStoreProtocol",
]

"""Application services - Use case orchestration.

Available services:
- SectionControlService: Validated section mutations and long-poll waiting
"""

from song_director.application.services.section_control_service import (
    DEFAULT_LONGPOLL_TIMEOUT_SECONDS,
    SectionControlService,
)

__all__: list[str] = ["DEFAULT_LONGPOLL_TIMEOUT_SECONDS", "SectionControlService"]

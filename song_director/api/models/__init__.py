"""API request/response models."""

from song_director.api.models.health import HealthResponse
from song_director.api.models.section import (
    SectionErrorResponse,
    SectionStateResponse,
)

__all__: list[str] = [
    "HealthResponse",
    "SectionErrorResponse",
    "SectionStateResponse",
]

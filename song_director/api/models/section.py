"""Section API response models.

JSON views of the shared song section for programmatic clients. HTML
pages and fragments are rendered by the section renderer instead.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from song_director.domain.models import SectionSnapshot


class SectionStateResponse(BaseModel):
    """Current section state.

    Attributes:
        section: Compact form, "-" when clear, else "V" or "V2".
        display: Text shown on screens (zero-width space when clear).
        revision: Revision the state was read at.
    """

    model_config = ConfigDict(frozen=True)

    section: str = Field(description="Section in compact form ('-' when clear)")
    display: str = Field(description="Display text (zero-width space when clear)")
    revision: int = Field(ge=0, description="Monotonic change counter")

    @classmethod
    def from_snapshot(cls, snapshot: SectionSnapshot) -> SectionStateResponse:
        return cls(
            section=str(snapshot.section),
            display=snapshot.section.display_text(),
            revision=snapshot.revision,
        )


class SectionErrorResponse(BaseModel):
    """RFC 7807 problem detail for rejected section input.

    Attributes:
        type: URI identifying the problem type.
        title: Short summary.
        status: HTTP status code.
        detail: Explanation of this occurrence.
        instance: Request URL.
    """

    type: str
    title: str
    status: int
    detail: str
    instance: str

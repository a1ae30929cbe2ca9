"""
Read-Side View Models

Public JSON shapes returned by the API. Views are built from domain models
(or operation results) and serialized with ``to_response()``, which emits
camelCase keys and drops unset optional fields.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .domain_models import Session, Speaker


class _ResponseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True
    )

    def to_response(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(by_alias=True, exclude_none=True)


class SessionView(_ResponseModel):
    """Public shape of a session; id and session_id both carry the row key."""

    id: str
    session_id: str
    video_id: str = ""
    title: str = ""
    description: str = ""
    url: str = ""
    start_time: str = ""
    duration: int = 0

    @classmethod
    def from_session(cls, session: Session) -> 'SessionView':
        return cls(
            id=session.row_key,
            session_id=session.row_key,
            video_id=session.video_id,
            title=session.title,
            description=session.description,
            url=session.url,
            start_time=session.start_time,
            duration=session.duration
        )


class SpeakerView(_ResponseModel):
    """Public shape of a speaker."""

    id: str
    name: str = ""
    title: str = ""
    company: str = ""
    bio: str = ""
    headshot_file: str = ""
    linkedin: str = ""
    twitter: str = ""
    session_ids: List[str] = Field(default_factory=list)

    @classmethod
    def from_speaker(cls, speaker: Speaker) -> 'SpeakerView':
        return cls(
            id=speaker.row_key,
            name=speaker.name,
            title=speaker.title,
            company=speaker.company,
            bio=speaker.bio,
            headshot_file=speaker.headshot_file,
            linkedin=speaker.linkedin,
            twitter=speaker.twitter,
            session_ids=list(speaker.session_ids)
        )


# =============================================================================
# Operation results
# =============================================================================

class ImportResult(_ResponseModel):
    """Outcome of a CSV schedule import."""

    message: str = "Import completed"
    created: int = 0
    updated: int = 0
    errors: List[str] = Field(default_factory=list)


class ExtractedSpeakerSummary(_ResponseModel):
    """One speaker touched by an extraction run; sessions is a count."""

    name: str
    action: str
    sessions: int


class ExtractionResult(_ResponseModel):
    """Outcome of extracting speakers from the schedule."""

    message: str = "Speaker extraction completed"
    created: int = 0
    updated: int = 0
    speakers: List[ExtractedSpeakerSummary] = Field(default_factory=list)


class PlaylistVideoResult(_ResponseModel):
    """Per-video outcome of a playlist import."""

    video_id: Optional[str] = None
    title: str = ""
    status: str
    session_id: Optional[str] = None
    start_time: Optional[str] = None
    reason: Optional[str] = None


class PlaylistImportResult(_ResponseModel):
    """Outcome of a playlist import."""

    message: str = "Playlist import completed"
    created: int = 0
    skipped: int = 0
    errors: List[str] = Field(default_factory=list)
    videos: List[PlaylistVideoResult] = Field(default_factory=list)

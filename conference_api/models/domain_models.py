"""
Domain Models for the Conference API

Core entities stored in the table store:
1. Session - one scheduled video in the VideoSchedule table
2. Speaker - one person in the Speakers table

Field names are snake_case in Python and camelCase in storage and JSON; the
alias generator keeps the two in step.
"""

import re
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .base import TableEntityMixin, TableMeta

SPEAKER_PARTITION = "speaker"

_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


def parse_duration(value: Any) -> int:
    """Coerce a duration in minutes to a non-negative int.

    Strings use their leading integer ('45 min' -> 45); anything unparsable
    is 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return max(int(value), 0)
    match = _LEADING_INTEGER.match(str(value))
    if not match:
        return 0
    return max(int(match.group(1)), 0)


def default_video_url(video_id: str) -> str:
    """YouTube watch URL for a video id."""
    return f"https://www.youtube.com/watch?v={video_id}"


# =============================================================================
# Session Domain
# =============================================================================

class Session(TableEntityMixin, BaseModel):
    """
    One scheduled video.

    partition_key is the UTC date of start_time; row_key is the session id
    and never changes after creation.
    """

    partition_key: str = Field(..., description="UTC date of start_time (YYYY-MM-DD)")
    row_key: str = Field(..., description="Session id")
    video_id: str = Field(default="", description="YouTube video id")
    title: str = Field(default="", description="Session title")
    description: str = Field(default="", description="Free text, may contain newlines and URLs")
    url: str = Field(default="", description="Watch URL")
    start_time: str = Field(default="", description="ISO 8601 start time as given by the client")
    duration: int = Field(default=0, description="Duration in minutes")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True
    )

    @field_validator('video_id', 'title', 'description', 'url', 'start_time', mode='before')
    @classmethod
    def validate_text(cls, v):
        """Missing text attributes read back as empty strings."""
        return "" if v is None else v

    @field_validator('duration', mode='before')
    @classmethod
    def validate_duration(cls, v):
        return parse_duration(v)

    @property
    def session_id(self) -> str:
        return self.row_key


# =============================================================================
# Speaker Domain
# =============================================================================

class Speaker(TableEntityMixin, BaseModel):
    """
    One speaker profile.

    All speakers share the constant partition "speaker", so a speaker is
    addressable by row key alone. session_ids is stored as a JSON array
    string.
    """

    partition_key: str = Field(default=SPEAKER_PARTITION, description="Constant partition")
    row_key: str = Field(..., description="Speaker id (name slug + random suffix)")
    name: str = Field(default="", description="Display name")
    title: str = Field(default="", description="Job title")
    company: str = Field(default="", description="Company")
    bio: str = Field(default="", description="Biography")
    headshot_file: str = Field(default="", description="Headshot image file name")
    linkedin: str = Field(default="", description="LinkedIn profile URL")
    twitter: str = Field(default="", description="Twitter/X handle or URL")
    session_ids: List[str] = Field(default_factory=list, description="Ordered session ids")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True
    )

    @field_validator('name', 'title', 'company', 'bio', 'headshot_file', 'linkedin', 'twitter', mode='before')
    @classmethod
    def validate_text(cls, v):
        """Missing text attributes read back as empty strings."""
        return "" if v is None else v

    @field_validator('session_ids', mode='before')
    @classmethod
    def validate_session_ids(cls, v):
        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            raise ValueError("sessionIds must be a list of session ids")
        return [str(session_id) for session_id in v]

    @property
    def speaker_id(self) -> str:
        return self.row_key

    class Meta(TableMeta):
        json_fields = ("sessionIds",)

"""
Write-Side DTOs (Data Transfer Objects)

Request bodies for create/update operations, validated before anything
touches the table store. Keys arrive camelCase (``videoId``, ``startTime``)
and are exposed as snake_case attributes.

Update DTOs leave every field optional; a field that is None is treated as
absent and keeps the stored value.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..exceptions import ValidationError
from ..utils.timezone import parse_iso_datetime
from .domain_models import parse_duration

DtoT = TypeVar('DtoT', bound=BaseModel)

_MISSING_ERROR_TYPES = {'missing', 'string_too_short'}


def _check_start_time(value: Optional[str]) -> Optional[str]:
    """Trim a start time and reject values that do not parse."""
    if value is None:
        return None
    value = value.strip()
    if value and parse_iso_datetime(value) is None:
        raise ValueError(f'Invalid startTime "{value}"')
    return value


def parse_dto(dto_class: Type[DtoT], data: Dict[str, Any]) -> DtoT:
    """
    Validate a request body into a DTO.

    Args:
        dto_class: DTO model class
        data: Decoded JSON body

    Returns:
        Validated DTO instance

    Raises:
        ValidationError: Body is not an object, a required field is missing,
            or a field value is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return dto_class.model_validate(data)
    except PydanticValidationError as e:
        errors = {
            ".".join(str(part) for part in error['loc']): error['msg']
            for error in e.errors()
        }
        missing = [
            str(error['loc'][0]) for error in e.errors()
            if error['type'] in _MISSING_ERROR_TYPES and error['loc']
        ]
        if missing:
            message = f"Missing required fields: {', '.join(missing)}"
        else:
            first = e.errors()[0]
            message = first['msg'].removeprefix("Value error, ")
        raise ValidationError(message, errors=errors, original_error=e) from e


class _RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True
    )


# =============================================================================
# Sessions
# =============================================================================

class SessionCreate(_RequestModel):
    """Body of POST /api/schedule."""

    video_id: str = Field(..., min_length=1, description="YouTube video id")
    title: str = Field(..., min_length=1, description="Session title")
    start_time: str = Field(..., min_length=1, description="ISO 8601 start time")
    description: Optional[str] = Field(None, description="Free text description")
    url: Optional[str] = Field(None, description="Watch URL, defaults to the YouTube URL of video_id")
    duration: int = Field(0, description="Duration in minutes")

    @field_validator('start_time')
    @classmethod
    def validate_start_time(cls, v: str) -> str:
        """Start time must parse as ISO 8601."""
        v = _check_start_time(v)
        if not v:
            raise ValueError("startTime is required")
        return v

    @field_validator('duration', mode='before')
    @classmethod
    def validate_duration(cls, v: Any) -> int:
        return parse_duration(v)


class SessionUpdate(_RequestModel):
    """
    Body of PUT /api/schedule/{id}.

    video_id, title, url and start_time replace the stored value only when
    non-empty; description and duration whenever they are given.
    """

    video_id: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    start_time: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[int] = None

    @field_validator('start_time')
    @classmethod
    def validate_start_time(cls, v: Optional[str]) -> Optional[str]:
        return _check_start_time(v)

    @field_validator('duration', mode='before')
    @classmethod
    def validate_duration(cls, v: Any) -> Optional[int]:
        if v is None:
            return None
        return parse_duration(v)


class PlaylistImportRequest(_RequestModel):
    """Body of POST /api/schedule?action=playlist."""

    playlist_id: str = Field(..., min_length=1, description="YouTube playlist id")
    api_key: Optional[str] = Field(None, description="YouTube Data API key, defaults to YOUTUBE_API_KEY")
    start_date: Optional[str] = Field(None, description="Start of the first slot; videos are laid out back-to-back")
    session_duration: int = Field(30, ge=1, description="Slot length in minutes")

    @field_validator('playlist_id')
    @classmethod
    def validate_playlist_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("playlistId is required")
        return v

    @field_validator('start_date')
    @classmethod
    def validate_start_date(cls, v: Optional[str]) -> Optional[str]:
        v = _check_start_time(v)
        return v or None

    @field_validator('session_duration', mode='before')
    @classmethod
    def validate_session_duration(cls, v: Any) -> Any:
        return 30 if v is None or v == "" else v


# =============================================================================
# Speakers
# =============================================================================

class SpeakerCreate(_RequestModel):
    """Body of POST /api/speakers."""

    name: str = Field(..., min_length=1, description="Display name")
    title: Optional[str] = None
    company: Optional[str] = None
    bio: Optional[str] = None
    headshot_file: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    session_ids: Optional[List[str]] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name is required")
        return v


class SpeakerUpdate(_RequestModel):
    """
    Body of PUT /api/speakers/{id}.

    name replaces the stored value only when non-empty; the other text fields
    whenever they are given; session_ids when a list is given.
    """

    name: Optional[str] = None
    title: Optional[str] = None
    company: Optional[str] = None
    bio: Optional[str] = None
    headshot_file: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    session_ids: Optional[List[str]] = None

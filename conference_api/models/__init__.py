# Base mixins and table metadata
from .base import (
    TableEntityMixin,
    TableMeta,
)

# Core domain models
from .domain_models import (
    SPEAKER_PARTITION,
    Session,
    Speaker,
    default_video_url,
    parse_duration,
)

# Read-side views
from .views import (
    ExtractedSpeakerSummary,
    ExtractionResult,
    ImportResult,
    PlaylistImportResult,
    PlaylistVideoResult,
    SessionView,
    SpeakerView,
)

# Write-side DTOs
from .dtos import (
    PlaylistImportRequest,
    SessionCreate,
    SessionUpdate,
    SpeakerCreate,
    SpeakerUpdate,
    parse_dto,
)

__all__ = [
    # Base mixins and table metadata
    "TableEntityMixin",
    "TableMeta",

    # Domain models
    "SPEAKER_PARTITION",
    "Session",
    "Speaker",
    "default_video_url",
    "parse_duration",

    # Views
    "ExtractedSpeakerSummary",
    "ExtractionResult",
    "ImportResult",
    "PlaylistImportResult",
    "PlaylistVideoResult",
    "SessionView",
    "SpeakerView",

    # DTOs
    "PlaylistImportRequest",
    "SessionCreate",
    "SessionUpdate",
    "SpeakerCreate",
    "SpeakerUpdate",
    "parse_dto",
]

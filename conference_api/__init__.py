from .config import SiteConfig
from .exceptions import (
    ConferenceApiError,
    ConflictError,
    ConnectionError,
    ExternalServiceError,
    ItemNotFoundError,
    RetryableError,
    StorageError,
    ValidationError,
)
from .models import (
    # Domain models
    Session,
    Speaker,
    # Views
    SessionView,
    SpeakerView,
    ImportResult,
    ExtractionResult,
    PlaylistImportResult,
    # DTOs
    SessionCreate,
    SessionUpdate,
    SpeakerCreate,
    SpeakerUpdate,
    PlaylistImportRequest,
)
from .core import (
    TableGateway,
    create_table_gateway,
)
from .handlers import (
    ScheduleReadApi,
    ScheduleWriteApi,
    SpeakerReadApi,
    SpeakerWriteApi,
)
from .utils.speaker_extraction import extract_speakers

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "SiteConfig",

    # Exceptions
    "ConferenceApiError",
    "ConflictError",
    "ConnectionError",
    "ExternalServiceError",
    "ItemNotFoundError",
    "RetryableError",
    "StorageError",
    "ValidationError",

    # Domain models
    "Session",
    "Speaker",

    # Views
    "SessionView",
    "SpeakerView",
    "ImportResult",
    "ExtractionResult",
    "PlaylistImportResult",

    # DTOs
    "SessionCreate",
    "SessionUpdate",
    "SpeakerCreate",
    "SpeakerUpdate",
    "PlaylistImportRequest",

    # TableGateway
    "TableGateway",
    "create_table_gateway",

    # Read/write APIs
    "ScheduleReadApi",
    "ScheduleWriteApi",
    "SpeakerReadApi",
    "SpeakerWriteApi",

    # Speaker extraction
    "extract_speakers",
]

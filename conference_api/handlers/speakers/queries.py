"""
Speaker Read API

All speakers share one constant partition, so a single speaker is a point
read and the roster is a full scan.
"""

import logging
from typing import List, Optional

from ...config import SiteConfig
from ...core import create_table_gateway
from ...exceptions import ItemNotFoundError
from ...models import SPEAKER_PARTITION, Speaker, SpeakerView

logger = logging.getLogger(__name__)

ENTITY_NAME = "Speaker"


class SpeakerReadApi:
    """Read-only API for the speaker table."""

    def __init__(self, config: SiteConfig):
        """Initialize read API with configuration."""
        self.config = config
        self.gateway = create_table_gateway(config, config.speakers_table)

    def scan_speakers(self) -> List[Speaker]:
        """All stored speakers in table order."""
        return [Speaker.from_table_item(item) for item in self.gateway.scan_all()]

    def list_speakers(self) -> List[SpeakerView]:
        """
        List all speakers sorted by name, case-insensitively.

        DynamoDB Operation: Scan (all pages)
        """
        speakers = sorted(self.scan_speakers(), key=lambda s: s.name.lower())
        logger.debug(f"Listed {len(speakers)} speaker(s)")
        return [SpeakerView.from_speaker(speaker) for speaker in speakers]

    def find_speaker(self, speaker_id: str) -> Optional[Speaker]:
        """
        Get a speaker by id.

        DynamoDB Operation: GetItem on (speaker, speaker_id)

        Returns:
            Speaker if found, None otherwise
        """
        item = self.gateway.get_item(SPEAKER_PARTITION, speaker_id)
        if item is None:
            return None
        return Speaker.from_table_item(item)

    def get_speaker(self, speaker_id: str) -> SpeakerView:
        """
        Get the public view of a speaker.

        Raises:
            ItemNotFoundError: No speaker with this id
        """
        speaker = self.find_speaker(speaker_id)
        if speaker is None:
            raise ItemNotFoundError(ENTITY_NAME, {'id': speaker_id})
        return SpeakerView.from_speaker(speaker)

"""
Speaker Write API

Create, replace and delete speakers, and merge speakers mined from session
descriptions into the roster. Writes are unconditional replaces except for
creation, which refuses to overwrite an existing row key.
"""

import logging
from typing import Dict, List

from boto3.dynamodb.conditions import Attr

from ...config import SiteConfig
from ...core import ROW_KEY, create_table_gateway
from ...exceptions import ItemNotFoundError
from ...models import (
    SPEAKER_PARTITION,
    ExtractedSpeakerSummary,
    ExtractionResult,
    Session,
    Speaker,
    SpeakerCreate,
    SpeakerUpdate,
)
from ...utils.ids import generate_speaker_id
from ...utils.speaker_extraction import extract_speakers

logger = logging.getLogger(__name__)

ENTITY_NAME = "Speaker"
_OPTIONAL_TEXT_FIELDS = ('title', 'company', 'bio', 'headshot_file', 'linkedin', 'twitter')


class SpeakerWriteApi:
    """Write-only API for speaker mutations."""

    def __init__(self, config: SiteConfig):
        """Initialize write API with configuration."""
        self.config = config
        self.gateway = create_table_gateway(config, config.speakers_table)
        self.schedule_gateway = create_table_gateway(config, config.schedule_table)

    def _get_speaker(self, speaker_id: str) -> Speaker:
        item = self.gateway.get_item(SPEAKER_PARTITION, speaker_id)
        if item is None:
            raise ItemNotFoundError(ENTITY_NAME, {'id': speaker_id})
        return Speaker.from_table_item(item)

    def _create(self, speaker: Speaker) -> None:
        self.gateway.put_item(speaker.to_table_item(), condition_expression=Attr(ROW_KEY).not_exists())
        logger.info(f"Created speaker {speaker.row_key} ({speaker.name})")

    def create_speaker(self, speaker_data: SpeakerCreate) -> Speaker:
        """
        Create a new speaker.

        DynamoDB Operation: PutItem with attribute_not_exists(rowKey)

        Args:
            speaker_data: Validated SpeakerCreate DTO

        Returns:
            Created Speaker
        """
        fields = {
            field: getattr(speaker_data, field) or ""
            for field in _OPTIONAL_TEXT_FIELDS
        }
        speaker = Speaker(
            row_key=generate_speaker_id(speaker_data.name),
            name=speaker_data.name,
            session_ids=speaker_data.session_ids or [],
            **fields
        )
        self._create(speaker)
        return speaker

    def update_speaker(self, speaker_id: str, updates: SpeakerUpdate) -> Speaker:
        """
        Apply a partial update to a speaker and replace the stored row.

        name is replaced only when non-empty, the other text fields whenever
        given, session_ids when a list is given.

        Raises:
            ItemNotFoundError: No speaker with this id
        """
        existing = self._get_speaker(speaker_id)

        changes = {}
        if updates.name:
            changes['name'] = updates.name
        for field in _OPTIONAL_TEXT_FIELDS:
            value = getattr(updates, field)
            if value is not None:
                changes[field] = value
        if updates.session_ids is not None:
            changes['session_ids'] = list(updates.session_ids)

        updated = existing.model_copy(update=changes)
        self.gateway.put_item(updated.to_table_item())
        logger.info(f"Updated speaker {speaker_id}: {sorted(changes)}")
        return updated

    def delete_speaker(self, speaker_id: str) -> None:
        """
        Delete a speaker.

        Raises:
            ItemNotFoundError: No speaker with this id
        """
        self._get_speaker(speaker_id)
        self.gateway.delete_item(SPEAKER_PARTITION, speaker_id)
        logger.info(f"Deleted speaker {speaker_id}")

    def extract_from_schedule(self) -> ExtractionResult:
        """
        Mine speaker names from session descriptions and merge them into the roster.

        A mined name matching an existing speaker (case-insensitively) gets
        its session ids merged in as an ordered union; any other name becomes
        a new speaker with only name and session ids set.

        Returns:
            ExtractionResult with one summary per mined speaker
        """
        existing: Dict[str, Speaker] = {}
        for item in self.gateway.scan_all():
            speaker = Speaker.from_table_item(item)
            existing[speaker.name.lower()] = speaker

        sessions = [Session.from_table_item(item) for item in self.schedule_gateway.scan_all()]
        extracted = extract_speakers((session.row_key, session.description) for session in sessions)

        result = ExtractionResult()
        for key, found in extracted.items():
            speaker = existing.get(key)
            if speaker is not None:
                merged: List[str] = list(dict.fromkeys(speaker.session_ids + found.session_ids))
                updated = speaker.model_copy(update={'session_ids': merged})
                self.gateway.put_item(updated.to_table_item())
                result.updated += 1
                result.speakers.append(ExtractedSpeakerSummary(
                    name=found.name, action="updated", sessions=len(merged)
                ))
            else:
                speaker = Speaker(
                    row_key=generate_speaker_id(found.name),
                    name=found.name,
                    session_ids=list(found.session_ids)
                )
                self._create(speaker)
                result.created += 1
                result.speakers.append(ExtractedSpeakerSummary(
                    name=found.name, action="created", sessions=len(found.session_ids)
                ))

        logger.info(
            f"Speaker extraction finished: {result.created} created, {result.updated} updated "
            f"from {len(sessions)} session(s)"
        )
        return result

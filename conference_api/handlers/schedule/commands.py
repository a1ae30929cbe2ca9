"""
Schedule Write API

Write operations for sessions:
- Create with a freshly minted session id
- Partial update (unconditional replace, last write wins)
- Delete by id
- CSV import (upsert by sessionId, per-row errors)
- YouTube playlist import (per-video outcomes)

A session lives in the partition of its start date. When an update or an
import moves the start time to another day, the row is moved with a
Put + Delete transaction because DynamoDB keys cannot be changed in place.
"""

import logging
from datetime import timedelta
from typing import Dict, Optional

from boto3.dynamodb.conditions import Attr

from ...config import SiteConfig
from ...core import ROW_KEY, create_table_gateway
from ...exceptions import ConferenceApiError, ItemNotFoundError, ValidationError
from ...integrations.youtube import YouTubeClient
from ...models import (
    ImportResult,
    PlaylistImportRequest,
    PlaylistImportResult,
    PlaylistVideoResult,
    Session,
    SessionCreate,
    SessionUpdate,
    default_video_url,
)
from ...utils.csv_codec import parse_csv
from ...utils.ids import generate_session_id
from ...utils.timezone import format_iso_utc, parse_iso_datetime, partition_key_for

logger = logging.getLogger(__name__)

ENTITY_NAME = "Schedule item"
REQUIRED_IMPORT_COLUMNS = ['videoid', 'title', 'starttime']


def _error_message(error: Exception) -> str:
    if isinstance(error, ConferenceApiError):
        return error.message
    return str(error)


class ScheduleWriteApi:
    """
    Write-only API for session mutations.

    Writes are unconditional replaces except for creation, which refuses to
    overwrite an existing row key.
    """

    def __init__(self, config: SiteConfig):
        """Initialize write API with configuration."""
        self.config = config
        self.gateway = create_table_gateway(config, config.schedule_table)

    def _find_session(self, session_id: str) -> Optional[Session]:
        item = self.gateway.find_by_row_key(session_id)
        if item is None:
            return None
        return Session.from_table_item(item)

    def _save_session(self, session: Session, old_partition_key: Optional[str] = None) -> None:
        """Replace a session, moving it when its partition changed."""
        item = session.to_table_item()
        if old_partition_key is not None and old_partition_key != session.partition_key:
            self.gateway.move_item(item, old_partition_key)
        else:
            self.gateway.put_item(item)

    def create_session(self, session_data: SessionCreate) -> Session:
        """
        Create a new session.

        DynamoDB Operation: PutItem with attribute_not_exists(rowKey)

        Args:
            session_data: Validated SessionCreate DTO

        Returns:
            Created Session
        """
        session = Session(
            partition_key=partition_key_for(session_data.start_time),
            row_key=generate_session_id(),
            video_id=session_data.video_id,
            title=session_data.title,
            description=session_data.description or "",
            url=session_data.url or default_video_url(session_data.video_id),
            start_time=session_data.start_time,
            duration=session_data.duration
        )
        self.gateway.put_item(session.to_table_item(), condition_expression=Attr(ROW_KEY).not_exists())
        logger.info(f"Created session {session.row_key} in partition {session.partition_key}")
        return session

    def update_session(self, session_id: str, updates: SessionUpdate) -> Session:
        """
        Apply a partial update to a session.

        video_id, title, url and start_time are replaced only when non-empty;
        description and duration whenever given. A start time on another day
        moves the row to the new date partition.

        Args:
            session_id: Session id
            updates: Validated SessionUpdate DTO

        Returns:
            Updated Session

        Raises:
            ItemNotFoundError: No session with this id
        """
        existing = self._find_session(session_id)
        if existing is None:
            raise ItemNotFoundError(ENTITY_NAME, {'id': session_id})

        changes = {}
        for field in ('video_id', 'title', 'url', 'start_time'):
            value = getattr(updates, field)
            if value:
                changes[field] = value
        for field in ('description', 'duration'):
            value = getattr(updates, field)
            if value is not None:
                changes[field] = value
        if 'start_time' in changes:
            changes['partition_key'] = partition_key_for(changes['start_time'])

        updated = existing.model_copy(update=changes)
        self._save_session(updated, existing.partition_key)
        logger.info(f"Updated session {session_id}: {sorted(changes)}")
        return updated

    def delete_session(self, session_id: str) -> None:
        """
        Delete a session.

        Raises:
            ItemNotFoundError: No session with this id
        """
        existing = self._find_session(session_id)
        if existing is None:
            raise ItemNotFoundError(ENTITY_NAME, {'id': session_id})

        self.gateway.delete_item(existing.partition_key, existing.row_key)
        logger.info(f"Deleted session {session_id}")

    def import_csv(self, content: str) -> ImportResult:
        """
        Import sessions from CSV, upserting by sessionId.

        The header row is matched case-insensitively and must contain
        videoId, title and startTime. Rows are numbered from 1 (the header);
        a bad row is recorded in ``errors`` and the import continues.

        Args:
            content: CSV text

        Returns:
            ImportResult with created/updated counts and row errors

        Raises:
            ValidationError: Empty body or a required column is missing
        """
        records = parse_csv(content or "")
        if len(records) < 2:
            raise ValidationError("CSV must have header row and at least one data row")

        headers = [header.strip().lower() for header in records[0]]
        for column in REQUIRED_IMPORT_COLUMNS:
            if column not in headers:
                raise ValidationError(f"Missing required column: {column}")

        existing: Dict[str, Session] = {
            session.row_key: session
            for session in (Session.from_table_item(item) for item in self.gateway.scan_all())
        }
        result = ImportResult()

        for row_number, values in enumerate(records[1:], start=2):
            try:
                record = {
                    header: values[index] if index < len(values) else ""
                    for index, header in enumerate(headers)
                }

                raw_start_time = record['starttime']
                start_time = raw_start_time.strip()
                if parse_iso_datetime(start_time) is None:
                    logger.warning(f"Skipping CSV row {row_number}: invalid startTime {raw_start_time!r}")
                    result.errors.append(f'Row {row_number}: Invalid startTime "{raw_start_time}"')
                    continue

                session_id = record.get('sessionid', '').strip() or generate_session_id()
                video_id = record['videoid'].strip()
                session = Session(
                    partition_key=partition_key_for(start_time),
                    row_key=session_id,
                    video_id=video_id,
                    title=record['title'].strip(),
                    description=record.get('description', ''),
                    url=record.get('url', '').strip() or default_video_url(video_id),
                    start_time=start_time,
                    duration=record.get('duration', '')
                )

                previous = existing.get(session_id)
                self._save_session(session, previous.partition_key if previous else None)
                existing[session_id] = session
                if previous is None:
                    result.created += 1
                else:
                    result.updated += 1

            except Exception as e:
                logger.warning(f"Failed to import CSV row {row_number}: {e}")
                result.errors.append(f"Row {row_number}: {_error_message(e)}")

        logger.info(
            f"CSV import finished: {result.created} created, {result.updated} updated, "
            f"{len(result.errors)} error(s)"
        )
        return result

    def import_playlist(self, request: PlaylistImportRequest) -> PlaylistImportResult:
        """
        Create sessions from the videos of a YouTube playlist.

        Videos that are private, deleted, lack a video id or are already in
        the schedule are skipped. With ``start_date`` the imported videos are
        laid out back-to-back in playlist order, ``session_duration`` minutes
        each; otherwise each video starts at its publish time.

        Args:
            request: Validated PlaylistImportRequest DTO

        Returns:
            PlaylistImportResult with one entry per playlist item

        Raises:
            ValidationError: No API key in the request or the configuration
            ExternalServiceError: The YouTube API call failed
        """
        api_key = request.api_key or self.config.youtube_api_key
        if not api_key:
            raise ValidationError("YouTube API key is required (apiKey or YOUTUBE_API_KEY)")

        client = YouTubeClient(api_key, self.config.youtube_api_url, self.config.timeout_seconds)
        videos = client.list_playlist_items(request.playlist_id)

        known_video_ids = {
            item.get('videoId') for item in self.gateway.scan_all() if item.get('videoId')
        }
        next_slot = parse_iso_datetime(request.start_date) if request.start_date else None
        slot_length = timedelta(minutes=request.session_duration)
        result = PlaylistImportResult()

        for video in videos:
            if not video.video_id:
                reason = "Missing video id"
            elif video.is_unavailable:
                reason = "Video is private or deleted"
            elif video.video_id in known_video_ids:
                reason = "Already in schedule"
            else:
                reason = None

            if reason:
                logger.warning(f"Skipping playlist video {video.video_id or '?'}: {reason}")
                result.skipped += 1
                result.videos.append(PlaylistVideoResult(
                    video_id=video.video_id, title=video.title, status="skipped", reason=reason
                ))
                continue

            try:
                start = next_slot if next_slot is not None else parse_iso_datetime(video.published_at)
                if start is None:
                    raise ValidationError("Video has no publish time; provide startDate")
                start_time = format_iso_utc(start)

                session = Session(
                    partition_key=partition_key_for(start_time),
                    row_key=generate_session_id(),
                    video_id=video.video_id,
                    title=video.title,
                    description=video.description,
                    url=default_video_url(video.video_id),
                    start_time=start_time,
                    duration=request.session_duration
                )
                self.gateway.put_item(session.to_table_item(), condition_expression=Attr(ROW_KEY).not_exists())

                known_video_ids.add(video.video_id)
                if next_slot is not None:
                    next_slot = next_slot + slot_length
                result.created += 1
                result.videos.append(PlaylistVideoResult(
                    video_id=video.video_id, title=video.title, status="created",
                    session_id=session.row_key, start_time=start_time
                ))

            except Exception as e:
                message = _error_message(e)
                logger.warning(f"Failed to import playlist video {video.video_id}: {message}")
                result.errors.append(f"{video.video_id}: {message}")
                result.videos.append(PlaylistVideoResult(
                    video_id=video.video_id, title=video.title, status="error", reason=message
                ))

        logger.info(
            f"Playlist {request.playlist_id} import finished: {result.created} created, "
            f"{result.skipped} skipped, {len(result.errors)} error(s)"
        )
        return result
